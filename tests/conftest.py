import copy
import io
from typing import Any

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from riskcheck.layout.config import LayoutConfig
from riskcheck.layout.measure import BaseTextMeasurer

STRUCTURED_FACTS: dict[str, Any] = {
    "meta": {
        "url": "http://example.com/",
        "hostname": "example.com",
        "scanId": "scan-001",
        "scannedAt": "2025-01-10T12:00:00Z",
        "https": False,
    },
    "coverage": {
        "notes": ["Homepage fetched"],
        "checkedPages": [{"url": "http://example.com/", "status": 200}],
        "failedPages": [{"url": "http://example.com/privacy", "status": 404}],
    },
    "signals": {
        "policies": {"privacy": False, "terms": False, "cookies": False},
        "consent": {"bannerDetected": False, "vendors": ["Cookiebot"]},
        "trackingScripts": ["Google Analytics", "Meta Pixel"],
        "forms": {"detected": 2, "personalDataSignals": 1},
        "accessibility": {"notes": [], "images": {"total": 10, "missingAlt": 4}},
        "contact": {"detected": False},
    },
}

LEGACY_FACTS: dict[str, Any] = {
    "url": "http://example.com/",
    "hostname": "example.com",
    "scanId": "scan-001",
    "scannedAt": "2025-01-10T12:00:00Z",
    "https": False,
    "scanCoverageNotes": ["Homepage fetched"],
    "checkedPages": [{"url": "http://example.com/", "status": 200}],
    "failedPages": [{"url": "http://example.com/privacy", "status": 404}],
    "hasPrivacyPolicy": False,
    "hasTerms": False,
    "hasCookiePolicy": False,
    "hasCookieBanner": False,
    "cookieVendorsDetected": ["Cookiebot"],
    "trackingScriptsDetected": ["Meta Pixel", "Google Analytics"],
    "formsDetected": 2,
    "formsPersonalDataSignals": 1,
    "accessibilityNotes": [],
    "totalImages": 10,
    "imagesMissingAlt": 4,
    "contactInfoPresent": False,
}


class FixedWidthMeasurer(BaseTextMeasurer):
    """Every character is half the font size wide."""

    def text_width(self, text: str, font: str, size: float) -> float:
        return len(text) * size * 0.5


@pytest.fixture()
def structured_facts() -> dict[str, Any]:
    return copy.deepcopy(STRUCTURED_FACTS)


@pytest.fixture()
def legacy_facts() -> dict[str, Any]:
    return copy.deepcopy(LEGACY_FACTS)


@pytest.fixture()
def clean_facts() -> dict[str, Any]:
    """A site with every signal in order."""
    facts = copy.deepcopy(STRUCTURED_FACTS)
    facts["meta"]["url"] = "https://example.com/"
    facts["meta"]["https"] = True
    facts["coverage"]["failedPages"] = []
    facts["signals"] = {
        "policies": {"privacy": True, "terms": True, "cookies": True},
        "consent": {"bannerDetected": True, "vendors": []},
        "trackingScripts": [],
        "forms": {"detected": 0, "personalDataSignals": 0},
        "accessibility": {"notes": [], "images": {"total": 0, "missingAlt": 0}},
        "contact": {"detected": True},
    }
    return facts


@pytest.fixture()
def unreachable_facts() -> dict[str, Any]:
    """A scan that retrieved no pages at all."""
    facts = copy.deepcopy(STRUCTURED_FACTS)
    facts["coverage"]["checkedPages"] = []
    return facts


@pytest.fixture()
def measurer() -> FixedWidthMeasurer:
    return FixedWidthMeasurer()


@pytest.fixture()
def layout_config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Website Compliance Snapshot")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Cover content")
    c.showPage()
    c.drawString(72, 720, "Register content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.showPage()
    c.save()
    return buf.getvalue()
