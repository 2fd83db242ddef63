"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Certificate, CertificateMatch, SelectionMode


def build_certificates_table(certificates: Iterable[Certificate], *, title: str = "Certificates") -> Table:
    table = Table(title=title)
    table.add_column("Primary name", style="cyan", no_wrap=True)
    table.add_column("Alternate names", style="white")
    table.add_column("Status", style="green")
    table.add_column("Identifier", style="magenta")
    for certificate in certificates:
        table.add_row(
            certificate.primary_name,
            ", ".join(certificate.alternate_names) or "-",
            certificate.status.value,
            certificate.identifier,
        )
    return table


def build_match_panel(match: CertificateMatch) -> Panel:
    """Panel para presentar el certificado elegido."""

    if match.mode is SelectionMode.EXPLICIT_NAME:
        how = "exact certificate name"
    else:
        how = f"domain match on '{match.bare_name}'"

    body = Text()
    body.append(match.identifier + "\n\n", style="bold")
    body.append(f"Matched: {match.matched_name} ({how})\n")
    body.append(f"Primary name: {match.certificate.primary_name}\n")
    if match.certificate.alternate_names:
        body.append(f"Alternate names: {', '.join(match.certificate.alternate_names)}\n")
    body.append(f"Status: {match.certificate.status.value}", style="dim")
    return Panel(body, title=Text("Selected certificate", style="bold green"), border_style="green")
