"""Root conftest for the certmatch test suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Make ``src/`` importable without installing the package
# ---------------------------------------------------------------------------
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from core.domain.models import Certificate, CertificateStatus  # noqa: E402


class StaticCatalog:
    """In-memory catalog that records the statuses it was asked for."""

    def __init__(self, certificates=None, error: Exception | None = None):
        self.certificates = list(certificates or [])
        self.error = error
        self.calls: list[frozenset[CertificateStatus]] = []

    async def list_certificates(self, statuses):
        self.calls.append(statuses)
        if self.error is not None:
            raise self.error
        return [c for c in self.certificates if c.status in statuses]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_cert():
    """Return a factory: ``make_cert("A", "*.foo.com", "foo.com")``."""

    def _make(
        identifier: str,
        primary_name: str,
        *alternate_names: str,
        status: CertificateStatus = CertificateStatus.ISSUED,
    ) -> Certificate:
        return Certificate(
            identifier=identifier,
            primary_name=primary_name,
            alternate_names=alternate_names,
            status=status,
        )

    return _make


@pytest.fixture()
def static_catalog():
    """Return the ``StaticCatalog`` class for building in-memory catalogs."""
    return StaticCatalog


# ---------------------------------------------------------------------------
# Environment isolation, autouse so settings never leak between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep project .env files and CERTMATCH_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("CERTMATCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
