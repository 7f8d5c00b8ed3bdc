"""Composes the client-facing snapshot report from scan facts and derived results."""

from collections.abc import Sequence

from riskcheck.findings.models import Finding
from riskcheck.integrity.fingerprint import FINGERPRINT_LABEL, VERIFY_LINK_LABEL
from riskcheck.layout.builder import DocumentBuilder
from riskcheck.layout.config import LayoutConfig
from riskcheck.layout.measure import BaseTextMeasurer
from riskcheck.layout.models import Column, Cursor, Document, Orientation, Row, Table
from riskcheck.normalization.models import CanonicalModel, PageStatus
from riskcheck.risk.models import RiskAssessment, RiskLevel

REPORT_TITLE = "Website Compliance & Risk Snapshot"
DISCLAIMER = (
    "This document records observable facts only. It does not certify compliance "
    "and does not constitute legal advice."
)
SCAN_SCOPE = (
    "Homepage inspection",
    "Common public policy paths",
    "Unauthenticated, public-facing content only",
    "No crawling, no behavioural simulation",
)
LIMITATIONS = (
    "Results apply only at the recorded timestamp.",
    "No claim of completeness or compliance is made.",
    "Site content may change without notice.",
    "Hidden or dynamically loaded content may not be detected.",
)
LEVEL_COLORS = {
    RiskLevel.LOW: "#2e7d4f",
    RiskLevel.MEDIUM: "#c77d12",
    RiskLevel.HIGH: "#b3261e",
}

REGISTER_COLUMNS = (
    Column(key="id", label="ID", min_width=34, weight=0.05),
    Column(key="category", label="Category", min_width=62, weight=0.1),
    Column(key="description", label="Description", min_width=110, weight=0.2, shrink_priority=4),
    Column(key="probability", label="Probability", min_width=58, weight=0.08),
    Column(key="impact", label="Impact", min_width=52, weight=0.08),
    Column(key="score", label="Score", min_width=34, weight=0.05),
    Column(key="trigger", label="Trigger", min_width=90, weight=0.14, shrink_priority=2),
    Column(key="mitigation", label="Mitigation", min_width=110, weight=0.2, shrink_priority=3),
    Column(key="evidence", label="Evidence", min_width=90, weight=0.15, shrink_priority=1),
)
SIGNAL_COLUMNS = (
    Column(key="signal", label="Signal", min_width=120, weight=0.45),
    Column(key="observation", label="Observation", min_width=140, weight=0.55, shrink_priority=1),
)


def detected(flag: bool) -> str:
    return "Detected" if flag else "Not detected"


def joined_or_none(values: Sequence[str]) -> str:
    return ", ".join(values) if values else "None detected"


def page_label(page: PageStatus) -> str:
    return f"{page.url} ({page.status})" if page.status else page.url


class ReportComposer:
    """Builds the paginated ``Document`` for one scan.

    Holds no per-scan state: every ``compose`` call gets its own builder.
    """

    def __init__(self, config: LayoutConfig, measurer: BaseTextMeasurer) -> None:
        self._config = config
        self._measurer = measurer

    def compose(
        self,
        model: CanonicalModel,
        risk: RiskAssessment,
        findings: Sequence[Finding],
        fingerprint: str,
    ) -> Document:
        meta = model.meta
        builder = DocumentBuilder(
            self._config,
            self._measurer,
            title=REPORT_TITLE,
            subject=f"Integrity fingerprint (SHA-256) {fingerprint}",
            footer_lines=(
                f"{self._config.brand} • Report ID: {meta.scan_id or 'n/a'} • "
                f"Scanned: {meta.scanned_at or 'unknown'}",
                f"{VERIFY_LINK_LABEL} {self._config.verify_url(fingerprint)}",
            ),
        )
        cursor = self._cover(builder, model, risk, fingerprint)
        cursor = self._summary(builder, cursor, risk)
        cursor = self._signals(builder, cursor, model)
        cursor = self._register(builder, cursor, findings)
        cursor = self._coverage(builder, cursor, model)
        cursor = self._limitations(builder, cursor)
        self._verification(builder, cursor, fingerprint)
        return builder.finish()

    def _cover(
        self,
        builder: DocumentBuilder,
        model: CanonicalModel,
        risk: RiskAssessment,
        fingerprint: str,
    ) -> Cursor:
        config = self._config
        meta = model.meta
        cursor = builder.new_page("Cover", watermark="COMPLIANCE SNAPSHOT")
        cursor = builder.gap(cursor, 60)
        cursor = builder.text(
            cursor, REPORT_TITLE, font=config.bold_font, size=26, align="center", space_after=14
        )
        cursor = builder.text(
            cursor,
            "Publicly observable signals recorded at the time of scan",
            size=12,
            align="center",
            color="#4a5568",
            space_after=40,
        )
        cursor = builder.text(cursor, "Scanned domain", size=11, align="center", space_after=2)
        cursor = builder.text(
            cursor,
            meta.hostname or meta.url or "unknown",
            font=config.bold_font,
            size=15,
            align="center",
            space_after=24,
        )
        cursor = builder.text(
            cursor,
            f"Scanned: {meta.scanned_at or 'unknown'}\n"
            f"Report ID: {meta.scan_id or 'n/a'}\n"
            f"Integrity hash: {fingerprint[:20]}...",
            size=11,
            align="center",
            space_after=24,
        )
        cursor = builder.badge(
            cursor, f"Risk level: {risk.level.value}", fill=LEVEL_COLORS[risk.level]
        )
        cursor = builder.gap(cursor, 40)
        return builder.text(cursor, DISCLAIMER, size=9, align="center", color="#4a5568")

    def _summary(self, builder: DocumentBuilder, cursor: Cursor, risk: RiskAssessment) -> Cursor:
        cursor = builder.start_section(cursor, "Executive summary", watermark="SUMMARY")
        cursor = builder.heading(cursor, "Executive summary")
        cursor = builder.text(
            cursor,
            "This report provides a factual, point-in-time snapshot of "
            "compliance-relevant signals detected on the target website.",
        )
        cursor = builder.text(
            cursor,
            f"Exposure score: {risk.score} / 12 ({risk.level.value})",
            font=self._config.bold_font,
        )
        cursor = builder.text(cursor, "Scan scope:", font=self._config.bold_font, space_after=2)
        cursor = builder.bullets(cursor, SCAN_SCOPE)
        cursor = builder.text(
            cursor, "Notable observations:", font=self._config.bold_font, space_after=2
        )
        return builder.bullets(cursor, risk.reasons)

    def _signals(self, builder: DocumentBuilder, cursor: Cursor, model: CanonicalModel) -> Cursor:
        signals = model.signals
        images = signals.accessibility.images
        rows = [
            ("HTTPS enabled", detected(model.meta.https)),
            ("Privacy policy present", detected(signals.policies.privacy)),
            ("Terms page present", detected(signals.policies.terms)),
            ("Cookie policy present", detected(signals.policies.cookies)),
            ("Cookie banner present", detected(signals.consent.banner_detected)),
            ("Tracking scripts detected", joined_or_none(signals.tracking_scripts)),
            ("Cookie vendors detected", joined_or_none(signals.consent.vendors)),
            ("Forms detected", str(signals.forms.detected)),
            (
                "Potential personal-data fields (heuristic)",
                str(signals.forms.personal_data_signals),
            ),
            ("Images missing alt text", f"{images.missing_alt} of {images.total}"),
            ("Accessibility notes", joined_or_none(signals.accessibility.notes)),
            ("Contact information present", detected(signals.contact.detected)),
        ]
        table = Table(
            columns=SIGNAL_COLUMNS,
            rows=tuple(Row(cells={"signal": label, "observation": value}) for label, value in rows),
        )
        cursor = builder.start_section(
            cursor, "Observed signals", watermark="OBSERVED SIGNALS", new_page=False
        )
        cursor = builder.gap(cursor, self._config.section_gap)
        cursor = builder.heading(cursor, "Observed signals")
        return builder.table(cursor, table)

    def _register(
        self, builder: DocumentBuilder, cursor: Cursor, findings: Sequence[Finding]
    ) -> Cursor:
        orientation = (
            Orientation.LANDSCAPE if self._config.register_landscape else Orientation.PORTRAIT
        )
        cursor = builder.start_section(
            cursor, "Risk register", orientation=orientation, watermark="RISK REGISTER"
        )
        cursor = builder.heading(cursor, "Risk register")
        cursor = builder.text(
            cursor,
            "Each finding rates probability (1 Rare to 5 Almost certain) and impact "
            "(1 Low to 5 Severe); the score is their product unless stated otherwise.",
            size=9,
        )
        table = Table(
            columns=REGISTER_COLUMNS,
            rows=tuple(
                Row(
                    cells={
                        "id": finding.id,
                        "category": finding.category.value,
                        "description": finding.description,
                        "probability": str(finding.probability),
                        "impact": str(finding.impact),
                        "score": str(finding.score),
                        "trigger": finding.trigger,
                        "mitigation": finding.mitigation,
                        "evidence": finding.evidence,
                    }
                )
                for finding in findings
            ),
        )
        return builder.table(cursor, table)

    def _coverage(self, builder: DocumentBuilder, cursor: Cursor, model: CanonicalModel) -> Cursor:
        coverage = model.coverage
        config = self._config
        cursor = builder.start_section(cursor, "Scan coverage", watermark="COVERAGE")
        cursor = builder.heading(cursor, "Scan coverage")
        cursor = builder.text(
            cursor,
            f"Pages checked: {len(coverage.checked_pages)}. "
            f"Pages that failed to load: {len(coverage.failed_pages)}.",
        )
        if coverage.checked_pages:
            cursor = builder.text(cursor, "Checked pages:", font=config.bold_font, space_after=2)
            cursor = builder.two_column_list(
                cursor, [page_label(page) for page in coverage.checked_pages], size=9
            )
        if coverage.failed_pages:
            cursor = builder.text(cursor, "Failed pages:", font=config.bold_font, space_after=2)
            cursor = builder.two_column_list(
                cursor, [page_label(page) for page in coverage.failed_pages], size=9
            )
        if coverage.notes:
            cursor = builder.text(cursor, "Coverage notes:", font=config.bold_font, space_after=2)
            cursor = builder.bullets(cursor, coverage.notes, size=9.5)
        return cursor

    def _limitations(self, builder: DocumentBuilder, cursor: Cursor) -> Cursor:
        cursor = builder.start_section(
            cursor, "Assessment limitations", watermark="LIMITATIONS", new_page=False
        )
        cursor = builder.gap(cursor, self._config.section_gap)
        cursor = builder.heading(cursor, "Assessment limitations")
        return builder.bullets(cursor, LIMITATIONS)

    def _verification(self, builder: DocumentBuilder, cursor: Cursor, fingerprint: str) -> Cursor:
        config = self._config
        verify_url = config.verify_url(fingerprint)
        cursor = builder.start_section(
            cursor, "Report verification", watermark="VERIFICATION", new_page=False
        )
        cursor = builder.gap(cursor, config.section_gap)
        cursor = builder.heading(cursor, "Report verification")
        cursor = builder.text(
            cursor,
            "This report can be independently verified using its cryptographic "
            "fingerprint, computed over the recorded scan facts only.",
        )
        cursor = builder.text(cursor, FINGERPRINT_LABEL, size=10, space_after=2)
        cursor = builder.text(cursor, fingerprint, font=config.mono_font, size=9)
        cursor = builder.text(cursor, VERIFY_LINK_LABEL, size=10, space_after=2)
        cursor = builder.text(cursor, verify_url, size=9, color="#1f4e99")
        return builder.qr_code(cursor, verify_url)
