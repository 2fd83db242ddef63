"""Tests for adapters.acm_catalog (boto3 client mocked)."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, ProfileNotFound

from adapters.acm_catalog import (
    AcmCertificateCatalog,
    build_acm_client,
    resolve_region,
    summary_to_certificate,
)
from core.config import AppSettings
from core.domain.errors import CertificateLookupError
from core.domain.models import CANDIDATE_STATUSES, CertificateStatus, EndpointType

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _summary(arn: str, domain: str, *sans: str, status: str = "ISSUED", with_sans: bool = True) -> dict:
    summary = {"CertificateArn": arn, "DomainName": domain, "Status": status}
    if with_sans:
        summary["SubjectAlternativeNameSummaries"] = list(sans)
    return summary


def _client_with_pages(*pages: list[dict]) -> MagicMock:
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = iter(
        [{"CertificateSummaryList": page} for page in pages]
    )
    client.get_paginator.return_value = paginator
    return client


def _list(catalog: AcmCertificateCatalog, statuses=CANDIDATE_STATUSES):
    return asyncio.run(catalog.list_certificates(statuses))


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestListCertificates:
    def test_walks_every_page_in_order(self):
        client = _client_with_pages(
            [_summary("arn:1", "a.com"), _summary("arn:2", "b.com")],
            [_summary("arn:3", "*.c.com", "c.com")],
        )

        certificates = _list(AcmCertificateCatalog(client))

        assert [c.identifier for c in certificates] == ["arn:1", "arn:2", "arn:3"]
        assert certificates[2].primary_name == "*.c.com"
        assert certificates[2].alternate_names == ("c.com",)

    def test_requests_status_filter_and_page_size(self):
        client = _client_with_pages([])

        _list(AcmCertificateCatalog(client, page_size=25))

        client.get_paginator.assert_called_once_with("list_certificates")
        client.get_paginator.return_value.paginate.assert_called_once_with(
            CertificateStatuses=["PENDING_VALIDATION", "ISSUED", "INACTIVE"],
            PaginationConfig={"PageSize": 25},
        )

    def test_missing_sans_become_empty(self):
        client = _client_with_pages([_summary("arn:1", "a.com", with_sans=False)])

        (certificate,) = _list(AcmCertificateCatalog(client))

        assert certificate.alternate_names == ()

    def test_drops_non_candidate_statuses(self):
        client = _client_with_pages(
            [
                _summary("arn:expired", "a.com", status="EXPIRED"),
                _summary("arn:pending", "b.com", status="PENDING_VALIDATION"),
                _summary("arn:missing", "c.com", status=None),
            ]
        )

        certificates = _list(AcmCertificateCatalog(client))

        assert [c.identifier for c in certificates] == ["arn:pending"]
        assert certificates[0].status is CertificateStatus.PENDING_VALIDATION

    def test_drops_statuses_not_requested(self):
        client = _client_with_pages(
            [
                _summary("arn:issued", "a.com"),
                _summary("arn:inactive", "b.com", status="INACTIVE"),
            ]
        )

        certificates = _list(AcmCertificateCatalog(client), frozenset({CertificateStatus.ISSUED}))

        assert [c.identifier for c in certificates] == ["arn:issued"]
        client.get_paginator.return_value.paginate.assert_called_once_with(
            CertificateStatuses=["ISSUED"],
            PaginationConfig={"PageSize": 100},
        )

    def test_client_error_becomes_lookup_error(self):
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
            "ListCertificates",
        )

        with pytest.raises(CertificateLookupError) as exc_info:
            _list(AcmCertificateCatalog(client))

        assert "ThrottlingException" in str(exc_info.value)
        assert "Rate exceeded" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_botocore_error_becomes_lookup_error(self):
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = EndpointConnectionError(
            endpoint_url="https://acm.us-east-1.amazonaws.com"
        )

        with pytest.raises(CertificateLookupError, match="acm.us-east-1"):
            _list(AcmCertificateCatalog(client))


def test_summary_to_certificate_unknown_status():
    assert summary_to_certificate(_summary("arn:1", "a.com", status="REVOKED")) is None


# ---------------------------------------------------------------------------
# Region / client construction
# ---------------------------------------------------------------------------


class TestRegion:
    def test_edge_uses_default_region(self):
        settings = AppSettings(aws_region="eu-west-1")
        assert resolve_region(settings, EndpointType.EDGE) == "us-east-1"

    def test_regional_uses_configured_region(self):
        settings = AppSettings(aws_region="eu-west-1")
        assert resolve_region(settings, EndpointType.REGIONAL) == "eu-west-1"

    def test_regional_falls_back_to_session_region(self):
        session = MagicMock(region_name="ap-south-1")
        assert resolve_region(AppSettings(), EndpointType.REGIONAL, session) == "ap-south-1"

    def test_regional_without_any_region_uses_default(self):
        session = MagicMock(region_name=None)
        assert resolve_region(AppSettings(), EndpointType.REGIONAL, session) == "us-east-1"

    def test_build_client_uses_resolved_region_and_retries(self):
        session = MagicMock(region_name=None)
        settings = AppSettings(aws_region="eu-central-1", aws_max_attempts=7)

        build_acm_client(settings, endpoint_type=EndpointType.REGIONAL, session=session)

        args, kwargs = session.client.call_args
        assert args == ("acm",)
        assert kwargs["region_name"] == "eu-central-1"
        assert kwargs["config"].retries == {"max_attempts": 7, "mode": "standard"}

    def test_from_settings_uses_profile(self, monkeypatch):
        created = {}

        def fake_session(**kwargs):
            created.update(kwargs)
            return MagicMock(region_name=None)

        monkeypatch.setattr("adapters.acm_catalog.boto3.Session", fake_session)

        catalog = AcmCertificateCatalog.from_settings(
            AppSettings(aws_profile="deploy", acm_page_size=10),
            endpoint_type=EndpointType.EDGE,
        )

        assert created == {"profile_name": "deploy"}
        assert isinstance(catalog, AcmCertificateCatalog)


def test_unknown_profile_becomes_lookup_error(monkeypatch, tmp_path):
    config = tmp_path / "aws_config"
    config.write_text("", encoding="utf-8")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(config))

    with pytest.raises(CertificateLookupError, match="no-such-profile") as exc_info:
        AcmCertificateCatalog.from_settings(
            AppSettings(aws_profile="no-such-profile"),
            endpoint_type=EndpointType.EDGE,
        )

    assert isinstance(exc_info.value.__cause__, ProfileNotFound)
