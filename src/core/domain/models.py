"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core al SDK de AWS.
- Los modelos son inmutables (`frozen`): se construyen una vez por selección
  a partir de la respuesta del catálogo y se descartan al terminar.

Nota:
- Estos modelos describen *qué* es un certificado candidato, no *cómo* se lista.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class CertificateStatus(str, Enum):
    """Estados de ciclo de vida que convierten un certificado en candidato.

    Los valores coinciden con los strings de ACM. Cualquier otro estado
    (EXPIRED, REVOKED, FAILED...) se descarta en el borde del catálogo.
    """

    PENDING_VALIDATION = "PENDING_VALIDATION"
    ISSUED = "ISSUED"
    INACTIVE = "INACTIVE"


CANDIDATE_STATUSES: frozenset[CertificateStatus] = frozenset(CertificateStatus)


class EndpointType(str, Enum):
    """Tipo de endpoint de API Gateway que va a usar el certificado."""

    EDGE = "EDGE"
    REGIONAL = "REGIONAL"

    @classmethod
    def _missing_(cls, value: object) -> "EndpointType | None":
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class SelectionMode(str, Enum):
    """Modo de selección activo para una petición."""

    EXPLICIT_NAME = "explicit_name"
    DOMAIN_MATCH = "domain_match"


class Certificate(BaseModel):
    """Certificado disponible en la cuenta.

    Por qué `identifier` es opaco:
    - Es el handle que devolvemos al llamador (ARN en ACM); nunca se parsea.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(
        ...,
        min_length=1,
        description="Handle estable del certificado (ARN en ACM).",
    )
    primary_name: str = Field(
        ...,
        description="Nombre principal cubierto; puede empezar por '*'.",
    )
    alternate_names: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Nombres alternativos (SAN) cubiertos; puede estar vacío.",
    )
    status: CertificateStatus = Field(
        default=CertificateStatus.ISSUED,
        description="Estado de ciclo de vida reportado por el catálogo.",
    )

    @property
    def covered_names(self) -> tuple[str, ...]:
        """Nombre principal seguido de los alternativos, en ese orden."""

        return (self.primary_name, *self.alternate_names)


class DomainRequest(BaseModel):
    """Consulta de selección.

    Reglas:
    - Si `certificate_name` está presente se selecciona por nombre exacto.
    - Si no, se busca por dominio (`requested_name`).
    """

    model_config = ConfigDict(frozen=True)

    requested_name: str = Field(
        ...,
        min_length=1,
        description="Dominio para el que se quiere un certificado.",
    )
    certificate_name: str | None = Field(
        default=None,
        description="Nombre registrado del certificado; ignora el matching por dominio.",
    )

    @property
    def mode(self) -> SelectionMode:
        if self.certificate_name is not None:
            return SelectionMode.EXPLICIT_NAME
        return SelectionMode.DOMAIN_MATCH

    @property
    def searched_name(self) -> str:
        """Lo que se buscó, para mensajes de error accionables."""

        if self.certificate_name is not None:
            return self.certificate_name
        return self.requested_name


class CertificateMatch(BaseModel):
    """Resultado de una selección exitosa."""

    model_config = ConfigDict(frozen=True)

    certificate: Certificate
    matched_name: str = Field(
        ...,
        description="Nombre cubierto que ganó, tal como aparece en el certificado.",
    )
    bare_name: str = Field(
        ...,
        description="Nombre ganador sin el comodín inicial.",
    )
    mode: SelectionMode

    @property
    def identifier(self) -> str:
        return self.certificate.identifier
