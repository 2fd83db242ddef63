"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.acm_catalog import AcmCertificateCatalog, resolve_region
from core.config import AppSettings, write_user_env_vars
from core.domain.models import CANDIDATE_STATUSES, EndpointType

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_acm(settings: AppSettings, endpoint_type: EndpointType) -> tuple[bool, str]:
    try:
        catalog = AcmCertificateCatalog.from_settings(settings, endpoint_type=endpoint_type)
        certificates = await catalog.list_certificates(CANDIDATE_STATUSES)
        return True, f"{len(certificates)} candidate certificates"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="certmatch doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.aws_profile:
        table.add_row("AWS profile", "OK", settings.aws_profile)
    else:
        table.add_row("AWS profile", "OPTIONAL", "No profile set -> default boto3 credential chain")
    table.add_row("Edge region", "OK", resolve_region(settings, EndpointType.EDGE))
    if settings.aws_region:
        table.add_row("Regional region", "OK", settings.aws_region)
    else:
        table.add_row("Regional region", "OPTIONAL", "Falls back to the session region")
    table.add_row("Default endpoint", "OK", settings.endpoint_type.value)

    ok_acm, detail_acm = asyncio.run(_check_acm(settings, settings.endpoint_type))
    table.add_row("ACM access", "OK" if ok_acm else "FAIL", detail_acm)

    _console.print(table)

    if not ok_acm:
        _console.print(
            "\n[yellow]Note:[/yellow] ACM access needs `acm:ListCertificates`. "
            "Run `certmatch doctor setup-aws` to pick a profile/region."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-aws")
def setup_aws() -> None:
    """Interactive AWS setup (stores config in the user config .env)."""

    profile = typer.prompt("AWS profile (blank = default chain)", default="", show_default=False).strip()
    region = typer.prompt("Region for REGIONAL endpoints (blank = session region)", default="", show_default=False).strip()
    endpoint = typer.prompt("Default endpoint type", default=EndpointType.EDGE.value, show_default=True).strip()

    try:
        endpoint_type = EndpointType(endpoint)
    except ValueError:
        raise typer.BadParameter("endpoint type must be EDGE or REGIONAL") from None

    env_path = write_user_env_vars(
        {
            "CERTMATCH_AWS_PROFILE": profile or None,
            "CERTMATCH_AWS_REGION": region or None,
            "CERTMATCH_ENDPOINT_TYPE": endpoint_type.value,
        }
    )

    _console.print(f"[green]Saved AWS config to:[/green] {env_path}")
