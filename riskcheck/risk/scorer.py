"""Signal-based exposure scoring. This is a heuristic, not a legal assessment."""

import math
from collections.abc import Mapping
from typing import Any

from riskcheck.normalization.models import CanonicalModel
from riskcheck.normalization.normalizer import normalize
from riskcheck.risk.models import MAX_SCORE, MIN_SCORE, RiskAssessment, RiskLevel

NO_PAGES_SCORE = 9
NO_PAGES_REASON = (
    "No HTML pages could be retrieved for analysis, limiting detection coverage."
)
ALT_TEXT_MIN_IMAGES = 5
ALT_TEXT_MANY_PCT = 30
ALT_TEXT_SOME_PCT = 10


def compute_risk(facts: CanonicalModel | Mapping[str, Any]) -> RiskAssessment:
    """Score a scan on a 0..12 scale and explain every point awarded.

    A scan that retrieved no pages is scored as worst-case-unknown without
    evaluating any signal.
    """
    model = normalize(facts)
    if model.coverage.pages_retrieved == 0:
        return RiskAssessment(
            level=RiskLevel.HIGH, score=NO_PAGES_SCORE, reasons=[NO_PAGES_REASON]
        )

    signals = model.signals
    score = 0
    reasons: list[str] = []

    if not model.meta.https:
        score += 3
        reasons.append("HTTPS was not detected.")

    if not signals.policies.privacy:
        score += 2
        reasons.append("Privacy policy was not detected on common public paths.")
    if not signals.policies.terms:
        score += 1
        reasons.append("Terms were not detected on common public paths.")
    if not signals.policies.cookies:
        score += 1
        reasons.append("Cookie policy was not detected on common public paths.")

    if signals.has_tracking and not signals.consent.banner_detected:
        score += 3
        reasons.append(
            "Tracking/cookie vendor signals were detected but a consent banner "
            "indicator was not detected (heuristic)."
        )
    elif signals.has_tracking:
        score += 1
        reasons.append("Tracking/cookie vendor signals were detected.")
    else:
        reasons.append(
            "No common tracking scripts or cookie vendor signals were detected."
        )

    forms = signals.forms
    if forms.detected > 0 and forms.personal_data_signals > 0:
        score += 2
        reasons.append(
            "Forms were detected with potential personal-data field signals (heuristic)."
        )
    elif forms.detected > 0:
        score += 1
        reasons.append("Forms were detected on the public-facing surface.")

    images = signals.accessibility.images
    missing_pct = percent(images.missing_alt, images.total)
    if images.total >= ALT_TEXT_MIN_IMAGES and missing_pct >= ALT_TEXT_MANY_PCT:
        score += 2
        reasons.append(
            f"Many images appear to be missing alt text "
            f"({images.missing_alt} of {images.total})."
        )
    elif images.total >= ALT_TEXT_MIN_IMAGES and missing_pct >= ALT_TEXT_SOME_PCT:
        score += 1
        reasons.append(
            f"Some images appear to be missing alt text "
            f"({images.missing_alt} of {images.total})."
        )

    if not signals.contact.detected:
        score += 1
        reasons.append(
            "Contact/business identity signals were not detected on the scanned surface."
        )

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    return RiskAssessment(level=RiskLevel.for_score(score), score=score, reasons=reasons)


def percent(part: int, whole: int) -> int:
    """Whole percent of ``part / whole``, rounded half up; 0 when ``whole`` <= 0."""
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)
