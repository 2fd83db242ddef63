"""Catálogo de certificados sobre AWS Certificate Manager (boto3).

Responsabilidad:
- Resolver la región según el tipo de endpoint (EDGE usa siempre la región
  por defecto; REGIONAL la configurada o la de la sesión).
- Recorrer todas las páginas de `ListCertificates` y normalizar cada resumen
  como `Certificate`.
- Traducir errores de botocore a `CertificateLookupError`.

Los reintentos ante throttling son cosa de botocore (`Config.retries`).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.config import AppSettings
from core.domain.errors import CertificateLookupError
from core.domain.models import Certificate, CertificateStatus, EndpointType

logger = logging.getLogger(__name__)


def _build_session(settings: AppSettings) -> boto3.Session:
    if settings.aws_profile:
        return boto3.Session(profile_name=settings.aws_profile)
    return boto3.Session()


def resolve_region(
    settings: AppSettings,
    endpoint_type: EndpointType,
    session: boto3.Session | None = None,
) -> str:
    """Región de la que leer certificados para `endpoint_type`."""

    if endpoint_type is EndpointType.REGIONAL:
        if settings.aws_region:
            return settings.aws_region
        if session is not None and session.region_name:
            return session.region_name
    return settings.default_region


def build_acm_client(
    settings: AppSettings | None = None,
    *,
    endpoint_type: EndpointType | None = None,
    session: boto3.Session | None = None,
) -> Any:
    """Crea un cliente `acm` con región y reintentos según la configuración."""

    settings = settings or AppSettings()
    endpoint_type = endpoint_type or settings.endpoint_type
    try:
        # Un perfil inexistente o credenciales mal configuradas fallan aquí.
        session = session or _build_session(settings)
        region = resolve_region(settings, endpoint_type, session)
        logger.debug("Building ACM client (endpoint=%s, region=%s)", endpoint_type.value, region)
        return session.client(
            "acm",
            region_name=region,
            config=Config(retries={"max_attempts": settings.aws_max_attempts, "mode": "standard"}),
        )
    except BotoCoreError as exc:
        raise CertificateLookupError(str(exc)) from exc


def summary_to_certificate(summary: dict[str, Any]) -> Certificate | None:
    """Convierte un `CertificateSummary` de ACM; None si el estado no es candidato."""

    try:
        status = CertificateStatus(summary.get("Status"))
    except ValueError:
        return None
    return Certificate(
        identifier=summary["CertificateArn"],
        primary_name=summary["DomainName"],
        alternate_names=tuple(summary.get("SubjectAlternativeNameSummaries") or ()),
        status=status,
    )


class AcmCertificateCatalog:
    """Implementa `core.interfaces.catalog.CertificateCatalog` sobre ACM."""

    def __init__(self, client: Any, *, page_size: int = 100) -> None:
        self._client = client
        self._page_size = page_size

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        endpoint_type: EndpointType | None = None,
    ) -> "AcmCertificateCatalog":
        settings = settings or AppSettings()
        client = build_acm_client(settings, endpoint_type=endpoint_type)
        return cls(client, page_size=settings.acm_page_size)

    async def list_certificates(
        self, statuses: frozenset[CertificateStatus]
    ) -> list[Certificate]:
        # boto3 es síncrono: el paginador corre en un hilo.
        return await asyncio.to_thread(self._list_all, statuses)

    def _list_all(self, statuses: frozenset[CertificateStatus]) -> list[Certificate]:
        # Orden fijo para que la petición sea estable entre llamadas.
        wanted = [s.value for s in CertificateStatus if s in statuses]
        certificates: list[Certificate] = []
        try:
            paginator = self._client.get_paginator("list_certificates")
            pages = paginator.paginate(
                CertificateStatuses=wanted,
                PaginationConfig={"PageSize": self._page_size},
            )
            for page in pages:
                for summary in page.get("CertificateSummaryList", []):
                    certificate = summary_to_certificate(summary)
                    if certificate is None or certificate.status not in statuses:
                        logger.debug(
                            "Skipping %s (status %s)",
                            summary.get("CertificateArn"),
                            summary.get("Status"),
                        )
                        continue
                    certificates.append(certificate)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = error.get("Code", "Unknown")
            message = error.get("Message", str(exc))
            raise CertificateLookupError(f"AWS error ({code}): {message}") from exc
        except BotoCoreError as exc:
            raise CertificateLookupError(str(exc)) from exc

        logger.debug("Listed %d candidate certificates", len(certificates))
        return certificates
