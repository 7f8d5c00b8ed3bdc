import asyncio
from collections.abc import Sequence
from typing import Any

from riskcheck.config.settings import Settings
from riskcheck.layout.composer import ReportComposer
from riskcheck.layout.config import LayoutConfig
from riskcheck.layout.measure import ReportLabTextMeasurer
from riskcheck.logging.logger import Log
from riskcheck.normalization.normalizer import normalize
from riskcheck.pdf.factory import PdfRendererFactory
from riskcheck.processor.models import GenerationResult
from riskcheck.processor.pipeline import PipelineContext, PipelineStep
from riskcheck.processor.sink import BaseSink
from riskcheck.processor.steps import (
    ComposeDocumentStep,
    FingerprintStep,
    NormalizeStep,
    RenderStep,
    ScoreRiskStep,
    SynthesizeFindingsStep,
    WriteSinkStep,
)


class ReportGenerator:
    """Runs the report pipeline for one scan.

    Pipeline: normalize -> fingerprint -> score -> findings -> layout -> render
    -> write. Steps hold no per-scan state, so one generator may serve many
    concurrent generations.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def generate(self, raw: Any, sink: BaseSink | None = None) -> GenerationResult:
        """Produce the PDF for ``raw`` scan facts, writing it to ``sink`` if given.

        Raises:
            GenerationError: if the sink write fails.
            PdfRenderError: if the renderer fails.
        """
        context = PipelineContext(raw=raw, sink=sink)
        with Log.scope(self._scan_id(raw)):
            for step in self._steps:
                context = step.run(context)
        return self._result(context)

    async def agenerate(self, raw: Any, sink: BaseSink | None = None) -> GenerationResult:
        """Async variant: lays out and renders inline, then awaits the sink write
        in a worker thread."""
        result = self.generate(raw)
        if sink is not None:
            with Log.scope(self._scan_id(raw)):
                await asyncio.to_thread(sink.write, result.pdf_bytes)
                Log.info(f"Wrote {len(result.pdf_bytes)} bytes to {type(sink).__name__}")
        return result

    @staticmethod
    def _scan_id(raw: Any) -> str:
        return normalize(raw).meta.scan_id

    @staticmethod
    def _result(context: PipelineContext) -> GenerationResult:
        if context.risk is None or context.document is None:
            raise ValueError("Pipeline finished without a risk assessment or document")
        return GenerationResult(
            pdf_bytes=context.pdf_bytes,
            fingerprint=context.fingerprint,
            risk=context.risk,
            findings=context.findings,
            page_count=context.document.page_count,
        )


def build_generator(settings: Settings) -> ReportGenerator:
    """Build a ReportGenerator with all required adapters."""
    composer = ReportComposer(LayoutConfig.from_settings(settings), ReportLabTextMeasurer())
    renderer = PdfRendererFactory.create(settings)
    return ReportGenerator(
        steps=[
            NormalizeStep(),
            FingerprintStep(),
            ScoreRiskStep(),
            SynthesizeFindingsStep(),
            ComposeDocumentStep(composer),
            RenderStep(renderer),
            WriteSinkStep(),
        ]
    )
