"""Checks a generated report against independently stored scan facts."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from riskcheck.integrity.fingerprint import (
    FINGERPRINT_LABEL,
    VERIFY_LINK_LABEL,
    compute_fingerprint,
)
from riskcheck.logging.logger import Log
from riskcheck.normalization.models import CanonicalModel
from riskcheck.pdf.base import BasePdfTextExtractor

_HEX_DIGEST = re.compile(r"(?<![0-9a-f])[0-9a-f]{64}(?![0-9a-f])")
_VERIFY_LINK_DIGEST = re.compile(
    re.escape(VERIFY_LINK_LABEL) + r"\s*\S*/verify/([0-9a-f]{64})(?![0-9a-f])"
)


@dataclass(frozen=True)
class ReportVerification:
    expected: str
    embedded: str | None
    matches: bool


def embedded_fingerprint(text: str) -> str | None:
    """The digest a report prints for verification, or None when absent or ambiguous.

    Only the digest after the fingerprint label and those in "verify this
    report" links are read. Other 64-character hex strings in the report, such
    as a scan id or a checked page URL, are ignored.
    """
    found = set(_VERIFY_LINK_DIGEST.findall(text))
    label = text.find(FINGERPRINT_LABEL)
    if label >= 0:
        digest = _HEX_DIGEST.search(text, label + len(FINGERPRINT_LABEL))
        if digest:
            found.add(digest.group(0))
    if len(found) != 1:
        return None
    return found.pop()


def verify_report(
    pdf_bytes: bytes,
    facts: CanonicalModel | Mapping[str, Any],
    extractor: BasePdfTextExtractor,
) -> ReportVerification:
    """Recompute the fingerprint from ``facts`` and compare it to the one in the PDF.

    Raises:
        PdfExtractionError: if the PDF cannot be read.
    """
    expected = compute_fingerprint(facts)
    embedded = embedded_fingerprint(extractor.extract(pdf_bytes))
    matches = embedded == expected
    if not matches:
        Log.warning(
            f"Report fingerprint mismatch: expected {expected[:12]}, "
            f"found {embedded[:12] if embedded else 'none'}"
        )
    return ReportVerification(expected=expected, embedded=embedded, matches=matches)
