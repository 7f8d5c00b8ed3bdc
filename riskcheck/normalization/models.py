from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, order=True)
class PageStatus:
    """A page the scanner attempted, with the HTTP status it observed."""

    url: str
    status: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "status": self.status}


@dataclass(frozen=True)
class Meta:
    url: str = ""
    hostname: str = ""
    scan_id: str = ""
    scanned_at: str = ""
    https: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "hostname": self.hostname,
            "scanId": self.scan_id,
            "scannedAt": self.scanned_at,
            "https": self.https,
        }


@dataclass(frozen=True)
class Coverage:
    notes: tuple[str, ...] = ()
    checked_pages: tuple[PageStatus, ...] = ()
    failed_pages: tuple[PageStatus, ...] = ()

    @property
    def pages_retrieved(self) -> int:
        return len(self.checked_pages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "notes": list(self.notes),
            "checkedPages": [page.to_dict() for page in self.checked_pages],
            "failedPages": [page.to_dict() for page in self.failed_pages],
        }


@dataclass(frozen=True)
class Policies:
    privacy: bool = False
    terms: bool = False
    cookies: bool = False

    @property
    def missing(self) -> list[str]:
        """Human-readable names of the policies that were not detected."""
        names = []
        if not self.privacy:
            names.append("privacy policy")
        if not self.terms:
            names.append("terms")
        if not self.cookies:
            names.append("cookie policy")
        return names

    def to_dict(self) -> dict[str, Any]:
        return {"privacy": self.privacy, "terms": self.terms, "cookies": self.cookies}


@dataclass(frozen=True)
class Consent:
    banner_detected: bool = False
    vendors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"bannerDetected": self.banner_detected, "vendors": list(self.vendors)}


@dataclass(frozen=True)
class Forms:
    detected: int = 0
    personal_data_signals: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "detected": self.detected,
            "personalDataSignals": self.personal_data_signals,
        }


@dataclass(frozen=True)
class Images:
    total: int = 0
    missing_alt: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "missingAlt": self.missing_alt}


@dataclass(frozen=True)
class Accessibility:
    notes: tuple[str, ...] = ()
    images: Images = field(default_factory=Images)

    def to_dict(self) -> dict[str, Any]:
        return {"notes": list(self.notes), "images": self.images.to_dict()}


@dataclass(frozen=True)
class Contact:
    detected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"detected": self.detected}


@dataclass(frozen=True)
class Signals:
    policies: Policies = field(default_factory=Policies)
    consent: Consent = field(default_factory=Consent)
    tracking_scripts: tuple[str, ...] = ()
    forms: Forms = field(default_factory=Forms)
    accessibility: Accessibility = field(default_factory=Accessibility)
    contact: Contact = field(default_factory=Contact)

    @property
    def has_tracking(self) -> bool:
        return bool(self.tracking_scripts) or bool(self.consent.vendors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "policies": self.policies.to_dict(),
            "consent": self.consent.to_dict(),
            "trackingScripts": list(self.tracking_scripts),
            "forms": self.forms.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "contact": self.contact.to_dict(),
        }


@dataclass(frozen=True)
class CanonicalModel:
    """Shape-independent representation of one scan's observable facts.

    Value equality between two models implies equal integrity fingerprints.
    """

    meta: Meta = field(default_factory=Meta)
    coverage: Coverage = field(default_factory=Coverage)
    signals: Signals = field(default_factory=Signals)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible payload using the wire field names."""
        return {
            "meta": self.meta.to_dict(),
            "coverage": self.coverage.to_dict(),
            "signals": self.signals.to_dict(),
        }
