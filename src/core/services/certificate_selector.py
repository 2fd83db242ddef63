"""Certificate selection.

Given a `DomainRequest` and the certificates available in the account, pick
the single best match. Two modes:

- explicit name: the first certificate whose primary name equals the
  requested certificate name exactly.
- domain match: the covered name (primary or alternate, leading `*`
  stripped) that is contained in the requested domain and is the longest.
  Containment is a plain substring check, not a label-anchored suffix match.

Everything here is pure except `resolve_certificate`, which awaits the
catalog once and then delegates to `match_certificate`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.domain.errors import CertificateLookupError, CertificateNotFoundError
from core.domain.models import (
    CANDIDATE_STATUSES,
    Certificate,
    CertificateMatch,
    CertificateStatus,
    DomainRequest,
    SelectionMode,
)
from core.interfaces.catalog import CertificateCatalog

logger = logging.getLogger(__name__)

_WILDCARD = "*"


def bare_name(name: str) -> str:
    """Strip a single leading wildcard character, if present."""

    if name.startswith(_WILDCARD):
        return name[1:]
    return name


def match_by_name(
    candidates: Sequence[Certificate], certificate_name: str
) -> CertificateMatch | None:
    for certificate in candidates:
        if certificate.primary_name == certificate_name:
            return CertificateMatch(
                certificate=certificate,
                matched_name=certificate.primary_name,
                bare_name=certificate.primary_name,
                mode=SelectionMode.EXPLICIT_NAME,
            )
    return None


def match_by_domain(
    candidates: Sequence[Certificate], requested_name: str
) -> CertificateMatch | None:
    """Return the most specific covered name contained in `requested_name`.

    The longest bare name wins. Ties keep the first one seen: certificates in
    the order given, and inside a certificate the primary name before the
    alternates.
    """

    best: CertificateMatch | None = None
    best_length = -1
    for certificate in candidates:
        for covered in certificate.covered_names:
            bare = bare_name(covered)
            if bare in requested_name and len(bare) > best_length:
                best_length = len(bare)
                best = CertificateMatch(
                    certificate=certificate,
                    matched_name=covered,
                    bare_name=bare,
                    mode=SelectionMode.DOMAIN_MATCH,
                )
    return best


def match_certificate(
    request: DomainRequest, candidates: Sequence[Certificate]
) -> CertificateMatch:
    """Select the best certificate for `request`.

    Raises:
        CertificateNotFoundError: nothing in `candidates` satisfies the request.
    """

    logger.debug(
        "Selecting certificate for %r (mode=%s, candidates=%d)",
        request.searched_name,
        request.mode.value,
        len(candidates),
    )
    if request.certificate_name is not None:
        match = match_by_name(candidates, request.certificate_name)
    else:
        match = match_by_domain(candidates, request.requested_name)

    if match is None:
        raise CertificateNotFoundError(request.searched_name)

    logger.info(
        "Selected certificate %s for %r (matched %r)",
        match.identifier,
        request.searched_name,
        match.matched_name,
    )
    return match


def select_certificate(request: DomainRequest, candidates: Sequence[Certificate]) -> str:
    """Return the identifier of the best certificate for `request`."""

    return match_certificate(request, candidates).identifier


async def resolve_certificate(
    request: DomainRequest,
    catalog: CertificateCatalog,
    statuses: frozenset[CertificateStatus] = CANDIDATE_STATUSES,
) -> CertificateMatch:
    """List candidates from `catalog` and select the best one.

    Any failure while listing surfaces as `CertificateLookupError`; a clean
    listing with no match surfaces as `CertificateNotFoundError`.
    """

    try:
        candidates = await catalog.list_certificates(statuses)
    except CertificateLookupError:
        raise
    except Exception as exc:
        raise CertificateLookupError(str(exc)) from exc

    return match_certificate(request, candidates)
