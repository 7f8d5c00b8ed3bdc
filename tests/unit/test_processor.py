import asyncio
from typing import Any
from unittest.mock import MagicMock

import pytest

from riskcheck.config.settings import Settings
from riskcheck.integrity.fingerprint import compute_fingerprint
from riskcheck.layout.composer import ReportComposer
from riskcheck.layout.models import Document
from riskcheck.pdf.base import BaseDocumentRenderer
from riskcheck.pdf.exceptions import PdfRenderError
from riskcheck.processor.exceptions import SinkWriteError
from riskcheck.processor.pipeline import PipelineContext
from riskcheck.processor.processor import ReportGenerator, build_generator
from riskcheck.processor.sink import BaseSink, MemorySink
from riskcheck.processor.steps import (
    ComposeDocumentStep,
    FingerprintStep,
    NormalizeStep,
    RenderStep,
    ScoreRiskStep,
    SynthesizeFindingsStep,
    WriteSinkStep,
)
from riskcheck.risk.models import RiskLevel


def _make_pipeline() -> tuple[ReportGenerator, MagicMock, MagicMock]:
    composer = MagicMock(spec=ReportComposer)
    renderer = MagicMock(spec=BaseDocumentRenderer)
    composer.compose.return_value = Document(title="Report")
    renderer.render.return_value = b"%PDF-fake"
    generator = ReportGenerator(
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
    return generator, composer, renderer


class TestReportGenerator:
    def test_generate_returns_result(self, structured_facts: dict[str, Any]) -> None:
        generator, _composer, _renderer = _make_pipeline()
        result = generator.generate(structured_facts)
        assert result.pdf_bytes == b"%PDF-fake"
        assert result.fingerprint == compute_fingerprint(structured_facts)
        assert result.risk.level == RiskLevel.HIGH
        assert len(result.findings) == 7
        assert result.page_count == 0

    def test_composer_receives_fingerprint(self, structured_facts: dict[str, Any]) -> None:
        generator, composer, _renderer = _make_pipeline()
        generator.generate(structured_facts)
        _model, risk, findings, fingerprint = composer.compose.call_args.args
        assert fingerprint == compute_fingerprint(structured_facts)
        assert risk.score == 12
        assert [f.id for f in findings][0] == "F-01"

    def test_writes_to_sink(self, structured_facts: dict[str, Any]) -> None:
        generator, _composer, _renderer = _make_pipeline()
        sink = MemorySink()
        generator.generate(structured_facts, sink=sink)
        assert sink.data == b"%PDF-fake"

    def test_sink_failure_propagates(self, structured_facts: dict[str, Any]) -> None:
        generator, _composer, _renderer = _make_pipeline()
        sink = MagicMock(spec=BaseSink)
        sink.write.side_effect = SinkWriteError("disk full")
        with pytest.raises(SinkWriteError):
            generator.generate(structured_facts, sink=sink)

    def test_render_failure_skips_sink(self, structured_facts: dict[str, Any]) -> None:
        generator, _composer, renderer = _make_pipeline()
        renderer.render.side_effect = PdfRenderError("boom")
        sink = MagicMock(spec=BaseSink)
        with pytest.raises(PdfRenderError):
            generator.generate(structured_facts, sink=sink)
        sink.write.assert_not_called()

    def test_agenerate_writes_to_sink(self, structured_facts: dict[str, Any]) -> None:
        generator, _composer, _renderer = _make_pipeline()
        sink = MemorySink()
        result = asyncio.run(generator.agenerate(structured_facts, sink=sink))
        assert sink.data == result.pdf_bytes

    def test_concurrent_generations_are_independent(
        self, structured_facts: dict[str, Any], clean_facts: dict[str, Any]
    ) -> None:
        generator, _composer, _renderer = _make_pipeline()

        async def run_both() -> list[Any]:
            return await asyncio.gather(
                generator.agenerate(structured_facts), generator.agenerate(clean_facts)
            )

        first, second = asyncio.run(run_both())
        assert first.fingerprint == compute_fingerprint(structured_facts)
        assert second.fingerprint == compute_fingerprint(clean_facts)
        assert second.risk.level == RiskLevel.LOW


class TestSteps:
    def test_fingerprint_requires_model(self) -> None:
        with pytest.raises(ValueError, match="model must be set"):
            FingerprintStep().run(PipelineContext(raw={}))

    def test_render_requires_document(self) -> None:
        with pytest.raises(ValueError, match="document must be set"):
            RenderStep(MagicMock(spec=BaseDocumentRenderer)).run(PipelineContext(raw={}))

    def test_write_without_sink_is_noop(self) -> None:
        context = PipelineContext(raw={}, pdf_bytes=b"x")
        assert WriteSinkStep().run(context) is context

    def test_normalize_fills_model(self, legacy_facts: dict[str, Any]) -> None:
        context = NormalizeStep().run(PipelineContext(raw=legacy_facts))
        assert context.model is not None
        assert context.model.meta.hostname == "example.com"


class TestBuildGenerator:
    def test_builds_from_settings(self) -> None:
        assert isinstance(build_generator(Settings()), ReportGenerator)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            build_generator(Settings(pdf_engine="nope"))
