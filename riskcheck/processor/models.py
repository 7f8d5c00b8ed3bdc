from dataclasses import dataclass, field

from riskcheck.findings.models import Finding
from riskcheck.risk.models import RiskAssessment


@dataclass(frozen=True)
class GenerationResult:
    """Everything one generation hands back to its caller."""

    pdf_bytes: bytes
    fingerprint: str
    risk: RiskAssessment
    findings: list[Finding] = field(default_factory=list)
    page_count: int = 0
