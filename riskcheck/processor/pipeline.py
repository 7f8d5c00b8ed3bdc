from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from riskcheck.findings.models import Finding
from riskcheck.layout.models import Document
from riskcheck.normalization.models import CanonicalModel
from riskcheck.processor.sink import BaseSink
from riskcheck.risk.models import RiskAssessment


@dataclass(slots=True)
class PipelineContext:
    raw: Any
    sink: BaseSink | None = None
    model: CanonicalModel | None = None
    fingerprint: str = ""
    risk: RiskAssessment | None = None
    findings: list[Finding] = field(default_factory=list)
    document: Document | None = None
    pdf_bytes: bytes = b""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
