"""Exportación JSON del resultado de selección.

Por qué JSON:
- Interoperabilidad con pipelines de despliegue (jq, CI).
- El ARN elegido y el nombre que ganó quedan como evidencia auditable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import CertificateMatch


def match_to_payload(match: CertificateMatch) -> dict[str, Any]:
    certificate = match.certificate
    return {
        "identifier": certificate.identifier,
        "matched_name": match.matched_name,
        "bare_name": match.bare_name,
        "mode": match.mode.value,
        "status": certificate.status.value,
        "primary_name": certificate.primary_name,
        "alternate_names": list(certificate.alternate_names),
    }


def dumps_match(match: CertificateMatch) -> str:
    return json.dumps(match_to_payload(match), ensure_ascii=False, indent=2, sort_keys=True)


def export_match_json(*, match: CertificateMatch, output_path: Path) -> Path:
    """Exporta `CertificateMatch` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_match(match) + "\n", encoding="utf-8")
    return output_path
