"""Errores del dominio de selección.

Dos fallos distintos que nunca se mezclan:
- `CertificateLookupError`: el catálogo no pudo listar certificados.
- `CertificateNotFoundError`: el listado funcionó pero nada coincide.
"""

from __future__ import annotations


class CertificateSelectionError(Exception):
    """Base para los errores de selección de certificados."""


class CertificateNotFoundError(CertificateSelectionError):
    def __init__(self, searched_name: str) -> None:
        self.searched_name = searched_name
        super().__init__(f"Could not find an in-date certificate for '{searched_name}'.")


class CertificateLookupError(CertificateSelectionError):
    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Could not search certificates in Certificate Manager.\n{cause}")
