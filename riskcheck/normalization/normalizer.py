"""Maps either raw scan shape onto one CanonicalModel."""

from typing import Any

from riskcheck.normalization.coercion import (
    as_bool,
    as_int,
    as_mapping,
    as_str,
    hostname_of,
    page_list,
    string_set,
    timestamp,
)
from riskcheck.normalization.models import (
    Accessibility,
    CanonicalModel,
    Consent,
    Contact,
    Coverage,
    Forms,
    Images,
    Meta,
    Policies,
    Signals,
)
from riskcheck.normalization.raw import LegacyFacts, StructuredFacts, classify


def normalize(raw: Any) -> CanonicalModel:
    """Build the canonical model for a raw scan record.

    Never raises. Missing or malformed fields fall back to empty strings,
    empty collections, ``False`` or ``0``. Passing an existing
    ``CanonicalModel`` returns it unchanged.
    """
    if isinstance(raw, CanonicalModel):
        return raw
    facts = classify(raw)
    if isinstance(facts, StructuredFacts):
        return _from_structured(facts)
    return _from_legacy(facts)


def _from_structured(facts: StructuredFacts) -> CanonicalModel:
    meta = facts.meta
    coverage = facts.coverage
    signals = facts.signals
    policies = as_mapping(signals.get("policies"))
    consent = as_mapping(signals.get("consent"))
    forms = as_mapping(signals.get("forms"))
    accessibility = as_mapping(signals.get("accessibility"))
    images = as_mapping(accessibility.get("images"))
    contact = as_mapping(signals.get("contact"))

    return CanonicalModel(
        meta=_build_meta(
            url=meta.get("url"),
            hostname=meta.get("hostname"),
            scan_id=meta.get("scanId"),
            scanned_at=meta.get("scannedAt"),
            https=meta.get("https"),
        ),
        coverage=Coverage(
            notes=string_set(coverage.get("notes")),
            checked_pages=page_list(coverage.get("checkedPages")),
            failed_pages=page_list(coverage.get("failedPages")),
        ),
        signals=Signals(
            policies=Policies(
                privacy=as_bool(policies.get("privacy")),
                terms=as_bool(policies.get("terms")),
                cookies=as_bool(policies.get("cookies")),
            ),
            consent=Consent(
                banner_detected=as_bool(consent.get("bannerDetected")),
                vendors=string_set(consent.get("vendors")),
            ),
            tracking_scripts=string_set(signals.get("trackingScripts")),
            forms=Forms(
                detected=as_int(forms.get("detected")),
                personal_data_signals=as_int(forms.get("personalDataSignals")),
            ),
            accessibility=Accessibility(
                notes=string_set(accessibility.get("notes")),
                images=Images(
                    total=as_int(images.get("total")),
                    missing_alt=as_int(images.get("missingAlt")),
                ),
            ),
            contact=Contact(detected=as_bool(contact.get("detected"))),
        ),
    )


def _from_legacy(facts: LegacyFacts) -> CanonicalModel:
    scan = facts.fields
    return CanonicalModel(
        meta=_build_meta(
            url=scan.get("url"),
            hostname=scan.get("hostname"),
            scan_id=scan.get("scanId"),
            scanned_at=scan.get("scannedAt"),
            https=scan.get("https"),
        ),
        coverage=Coverage(
            notes=string_set(scan.get("scanCoverageNotes")),
            checked_pages=page_list(scan.get("checkedPages")),
            failed_pages=page_list(scan.get("failedPages")),
        ),
        signals=Signals(
            policies=Policies(
                privacy=as_bool(scan.get("hasPrivacyPolicy")),
                terms=as_bool(scan.get("hasTerms")),
                cookies=as_bool(scan.get("hasCookiePolicy")),
            ),
            consent=Consent(
                banner_detected=as_bool(scan.get("hasCookieBanner")),
                vendors=string_set(scan.get("cookieVendorsDetected")),
            ),
            tracking_scripts=string_set(scan.get("trackingScriptsDetected")),
            forms=Forms(
                detected=as_int(scan.get("formsDetected")),
                personal_data_signals=as_int(scan.get("formsPersonalDataSignals")),
            ),
            accessibility=Accessibility(
                notes=string_set(scan.get("accessibilityNotes")),
                images=Images(
                    total=as_int(scan.get("totalImages")),
                    missing_alt=as_int(scan.get("imagesMissingAlt")),
                ),
            ),
            contact=Contact(detected=as_bool(scan.get("contactInfoPresent"))),
        ),
    )


def _build_meta(
    *,
    url: Any,
    hostname: Any,
    scan_id: Any,
    scanned_at: Any,
    https: Any,
) -> Meta:
    url_text = as_str(url).strip()
    host_text = as_str(hostname).strip() or hostname_of(url_text)
    return Meta(
        url=url_text,
        hostname=host_text,
        scan_id=as_str(scan_id).strip(),
        scanned_at=timestamp(scanned_at),
        https=as_bool(https),
    )
