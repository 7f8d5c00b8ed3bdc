"""Derives the ordered risk register from canonical scan facts."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from riskcheck.findings.models import (
    CATEGORY_PRECEDENCE,
    Category,
    Finding,
    impact,
    probability,
)
from riskcheck.normalization.models import CanonicalModel
from riskcheck.normalization.normalizer import normalize
from riskcheck.risk.scorer import percent

# Unknown coverage is scored as the worst case, above any probability x impact.
UNRETRIEVED_COVERAGE_SCORE = 25


@dataclass(frozen=True)
class _Draft:
    description: str
    probability: int
    impact: int
    trigger: str
    mitigation: str
    evidence: str
    score: int | None = None


def synthesize_findings(facts: CanonicalModel | Mapping[str, Any]) -> list[Finding]:
    """Build one finding per applicable category, in register precedence.

    Coverage always leads and Trust always closes the register; the categories
    in between appear only when their signals apply.
    """
    model = normalize(facts)
    findings: list[Finding] = []
    for category in CATEGORY_PRECEDENCE:
        draft = _RULES[category](model)
        if draft is None:
            continue
        findings.append(make_finding(len(findings) + 1, category, draft))
    return findings


def make_finding(sequence: int, category: Category, draft: _Draft) -> Finding:
    prob = probability(draft.probability)
    imp = impact(draft.impact)
    score = draft.score if draft.score is not None else prob.value * imp.value
    return Finding(
        id=f"F-{sequence:02d}",
        category=category,
        description=draft.description,
        probability=prob,
        impact=imp,
        score=score,
        trigger=draft.trigger,
        mitigation=draft.mitigation,
        evidence=draft.evidence,
    )


def _coverage(model: CanonicalModel) -> _Draft:
    coverage = model.coverage
    checked = len(coverage.checked_pages)
    failed = len(coverage.failed_pages)
    if checked == 0:
        return _Draft(
            description=(
                "No pages could be retrieved, so every other signal in this report "
                "is unknown rather than absent."
            ),
            probability=5,
            impact=5,
            score=UNRETRIEVED_COVERAGE_SCORE,
            trigger="Homepage and policy paths returned no analysable HTML.",
            mitigation=(
                "Confirm the site is reachable without authentication or bot "
                "challenges, then re-run the scan."
            ),
            evidence=f"Checked pages: 0; failed pages: {failed}.",
        )
    return _Draft(
        description=(
            "Signals were collected from a limited set of public pages; content "
            "behind logins, scripts or blocked paths was not observed."
        ),
        probability=3 if failed else 2,
        impact=2,
        trigger="Point-in-time scan of the homepage and common policy paths.",
        mitigation=(
            "Treat absent signals as 'not detected' rather than 'not present' and "
            "re-scan after material site changes."
        ),
        evidence=f"Checked pages: {checked}; failed pages: {failed}.",
    )


def _security(model: CanonicalModel) -> _Draft | None:
    if model.meta.https:
        return None
    return _Draft(
        description=(
            "Traffic to the scanned URL is not protected by HTTPS, exposing "
            "visitors' data to interception and tampering."
        ),
        probability=4,
        impact=4,
        trigger="Scanned URL was not served over HTTPS.",
        mitigation=(
            "Serve every page over HTTPS, redirect plain HTTP permanently and "
            "enable HSTS."
        ),
        evidence=f"Scanned URL: {model.meta.url or 'unknown'}",
    )


def _compliance(model: CanonicalModel) -> _Draft | None:
    missing = model.signals.policies.missing
    if not missing:
        return None
    return _Draft(
        description=(
            "Policy documents that visitors and regulators commonly expect were "
            "not found on the public surface."
        ),
        probability=min(5, 2 + len(missing)),
        impact=4 if not model.signals.policies.privacy else 3,
        trigger="No link or known path matched the expected policy pages.",
        mitigation=(
            "Publish the missing documents and link them from the footer of every page."
        ),
        evidence="Not detected: " + ", ".join(missing) + ".",
    )


def _tracking(model: CanonicalModel) -> _Draft | None:
    signals = model.signals
    if not signals.has_tracking:
        return None
    banner = signals.consent.banner_detected
    scripts = ", ".join(signals.tracking_scripts) or "none"
    vendors = ", ".join(signals.consent.vendors) or "none"
    return _Draft(
        description=(
            "Third-party tracking or consent-management code loads on the page"
            + ("." if banner else " without a detectable consent prompt.")
        ),
        probability=2 if banner else 4,
        impact=3 if banner else 4,
        trigger="Known tracker or cookie-vendor signatures present in page markup.",
        mitigation=(
            "Gate non-essential trackers behind prior consent and keep the cookie "
            "policy aligned with the vendors actually loaded."
        ),
        evidence=(
            f"Tracking scripts: {scripts}. Cookie vendors: {vendors}. "
            f"Consent banner: {'detected' if banner else 'not detected'}."
        ),
    )


def _data_capture(model: CanonicalModel) -> _Draft | None:
    forms = model.signals.forms
    if forms.detected <= 0:
        return None
    personal = forms.personal_data_signals > 0
    return _Draft(
        description=(
            "Forms on the public surface"
            + (" appear to collect personal data." if personal else " accept visitor input.")
        ),
        probability=3 if personal else 2,
        impact=4 if personal else 2,
        trigger="Form elements detected; field names matched personal-data heuristics."
        if personal
        else "Form elements detected.",
        mitigation=(
            "State the purpose and lawful basis next to each form, collect only "
            "necessary fields and link the privacy policy."
        ),
        evidence=(
            f"Forms: {forms.detected}. Personal-data field signals: "
            f"{forms.personal_data_signals}."
        ),
    )


def _accessibility(model: CanonicalModel) -> _Draft | None:
    accessibility = model.signals.accessibility
    images = accessibility.images
    if images.total <= 0:
        return None
    missing_pct = percent(images.missing_alt, images.total)
    if missing_pct >= 30:
        prob, imp = 4, 3
    elif missing_pct >= 10:
        prob, imp = 3, 2
    else:
        prob, imp = 1, 2
    notes = " ".join(accessibility.notes)
    evidence = (
        f"{images.missing_alt} of {images.total} images missing alt text ({missing_pct}%)."
    )
    if notes:
        evidence = f"{evidence} {notes}"
    return _Draft(
        description=(
            "Images without text alternatives are invisible to screen-reader users."
        ),
        probability=prob,
        impact=imp,
        trigger="Image elements with an empty or absent alt attribute.",
        mitigation="Add concise alt text to informative images and alt=\"\" to decorative ones.",
        evidence=evidence,
    )


def _trust(model: CanonicalModel) -> _Draft:
    if model.signals.contact.detected:
        return _Draft(
            description="Contact or business identity details are published.",
            probability=1,
            impact=2,
            trigger="Contact signals (email, phone or address) detected.",
            mitigation="Keep contact and company details current.",
            evidence="Contact information: detected.",
        )
    return _Draft(
        description=(
            "Visitors cannot readily identify or contact the business operating the site."
        ),
        probability=3,
        impact=3,
        trigger="No email, phone, address or contact page signal detected.",
        mitigation=(
            "Publish a contact page with the legal entity name, address and a "
            "monitored contact channel."
        ),
        evidence="Contact information: not detected.",
    )


_RULES: dict[Category, Callable[[CanonicalModel], _Draft | None]] = {
    Category.COVERAGE: _coverage,
    Category.SECURITY: _security,
    Category.COMPLIANCE: _compliance,
    Category.TRACKING_CONSENT: _tracking,
    Category.DATA_CAPTURE: _data_capture,
    Category.ACCESSIBILITY: _accessibility,
    Category.TRUST: _trust,
}
