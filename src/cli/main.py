"""certmatch CLI (Typer).

Comandos:
- `select`: elige el certificado que mejor cubre un dominio (o uno por nombre).
- `list`: muestra los certificados candidatos de la cuenta.
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.acm_catalog import AcmCertificateCatalog
from adapters.json_exporter import dumps_match, export_match_json
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import build_certificates_table, build_match_panel
from core.config import LOG_LEVELS, AppSettings
from core.domain.errors import CertificateLookupError, CertificateNotFoundError
from core.domain.models import CANDIDATE_STATUSES, DomainRequest, EndpointType
from core.interfaces.catalog import CertificateCatalog
from core.services.certificate_selector import resolve_certificate

EXIT_NOT_FOUND = 1
EXIT_LOOKUP_FAILED = 2

app = typer.Typer(
    name="certmatch",
    no_args_is_help=True,
    help="Pick the ACM certificate that best covers a domain name.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_catalog(settings: AppSettings, endpoint_type: EndpointType) -> CertificateCatalog:
    return AcmCertificateCatalog.from_settings(settings, endpoint_type=endpoint_type)


def _load_settings(*, region: str | None, profile: str | None) -> AppSettings:
    settings = AppSettings()
    overrides: dict[str, str] = {}
    if region:
        overrides["aws_region"] = region
    if profile:
        overrides["aws_profile"] = profile
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def _check_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}")
    return level


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", callback=_check_log_level, help="Logging level (overrides config)."
    ),
) -> None:
    configure_logging(log_level or AppSettings().log_level, verbose=verbose)


@app.command("select")
def select_command(
    domain: str = typer.Argument(..., help="Domain name that needs a certificate."),
    certificate_name: Optional[str] = typer.Option(
        None, "--certificate-name", "-c", help="Select by exact certificate name instead."
    ),
    endpoint_type: Optional[EndpointType] = typer.Option(
        None, "--endpoint-type", "-e", case_sensitive=False, help="EDGE or REGIONAL."
    ),
    region: Optional[str] = typer.Option(None, "--region", help="Region for REGIONAL endpoints."),
    profile: Optional[str] = typer.Option(None, "--profile", help="AWS credentials profile."),
    as_json: bool = typer.Option(False, "--json", help="Print the selection as JSON."),
    details: bool = typer.Option(False, "--details", "-d", help="Show the matched name and certificate details."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the JSON to this file."),
) -> None:
    """Select the best certificate for DOMAIN and print its ARN."""

    try:
        request = DomainRequest(requested_name=domain, certificate_name=certificate_name)
    except ValidationError:
        raise typer.BadParameter("domain must not be empty", param_hint="DOMAIN") from None

    settings = _load_settings(region=region, profile=profile)
    try:
        catalog = build_catalog(settings, endpoint_type or settings.endpoint_type)
        match = asyncio.run(resolve_certificate(request, catalog))
    except CertificateNotFoundError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    except CertificateLookupError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_LOOKUP_FAILED)

    if output is not None:
        export_match_json(match=match, output_path=output)

    if as_json:
        typer.echo(dumps_match(match))
    elif details:
        _console.print(build_match_panel(match))
    else:
        typer.echo(match.identifier)


@app.command("list")
def list_command(
    endpoint_type: Optional[EndpointType] = typer.Option(
        None, "--endpoint-type", "-e", case_sensitive=False, help="EDGE or REGIONAL."
    ),
    region: Optional[str] = typer.Option(None, "--region", help="Region for REGIONAL endpoints."),
    profile: Optional[str] = typer.Option(None, "--profile", help="AWS credentials profile."),
) -> None:
    """List candidate certificates (pending validation, issued, inactive)."""

    settings = _load_settings(region=region, profile=profile)
    try:
        catalog = build_catalog(settings, endpoint_type or settings.endpoint_type)
        certificates = asyncio.run(catalog.list_certificates(CANDIDATE_STATUSES))
    except CertificateLookupError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_LOOKUP_FAILED)

    _console.print(build_certificates_table(certificates, title="Candidate certificates"))


def run() -> None:
    app()
