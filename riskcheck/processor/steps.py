from riskcheck.findings.synthesizer import synthesize_findings
from riskcheck.integrity.fingerprint import compute_fingerprint
from riskcheck.layout.composer import ReportComposer
from riskcheck.logging.logger import Log
from riskcheck.normalization.normalizer import normalize
from riskcheck.pdf.base import BaseDocumentRenderer
from riskcheck.processor.pipeline import PipelineContext, PipelineStep
from riskcheck.risk.scorer import compute_risk


class NormalizeStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.model = normalize(context.raw)
        Log.info(
            f"Normalized facts for {context.model.meta.hostname or 'unknown host'}: "
            f"{len(context.model.coverage.checked_pages)} checked pages"
        )
        return context


class FingerprintStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model is None:
            raise ValueError("PipelineContext.model must be set before fingerprinting")
        context.fingerprint = compute_fingerprint(context.model)
        Log.info(f"Computed fingerprint {context.fingerprint[:12]}...")
        return context


class ScoreRiskStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model is None:
            raise ValueError("PipelineContext.model must be set before scoring")
        context.risk = compute_risk(context.model)
        Log.info(f"Risk level {context.risk.level.value} (score {context.risk.score})")
        return context


class SynthesizeFindingsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model is None:
            raise ValueError("PipelineContext.model must be set before synthesizing findings")
        context.findings = synthesize_findings(context.model)
        Log.info(f"Synthesized {len(context.findings)} findings")
        return context


class ComposeDocumentStep(PipelineStep):
    def __init__(self, composer: ReportComposer) -> None:
        self._composer = composer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model is None or context.risk is None:
            raise ValueError("PipelineContext.model and risk must be set before layout")
        context.document = self._composer.compose(
            context.model, context.risk, context.findings, context.fingerprint
        )
        Log.info(f"Laid out {context.document.page_count} pages")
        return context


class RenderStep(PipelineStep):
    def __init__(self, renderer: BaseDocumentRenderer) -> None:
        self._renderer = renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before rendering")
        context.pdf_bytes = self._renderer.render(context.document)
        Log.info(f"Rendered {len(context.pdf_bytes)} bytes of PDF")
        return context


class WriteSinkStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.sink is None:
            return context
        context.sink.write(context.pdf_bytes)
        Log.info(f"Wrote {len(context.pdf_bytes)} bytes to {type(context.sink).__name__}")
        return context
