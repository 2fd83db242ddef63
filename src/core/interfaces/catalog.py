"""Contrato del catálogo de certificados.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El selector no conoce boto3: cualquier fuente (ACM, un fichero, un stub de
  test) sirve mientras devuelva `Certificate` ya paginados.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Certificate, CertificateStatus


@runtime_checkable
class CertificateCatalog(Protocol):
    """Fuente de certificados candidatos.

    Reglas de diseño:
    - `list_certificates` es asíncrono porque típicamente hará I/O de red.
    - Devuelve la lista completa (toda la paginación resuelta) y en un orden
      estable durante la llamada: el selector usa ese orden para desempatar.
    - Los fallos se señalan con `CertificateLookupError`.
    """

    async def list_certificates(
        self, statuses: frozenset[CertificateStatus]
    ) -> list[Certificate]:
        """Lista los certificados cuyo estado está en `statuses`."""

        ...
