from unittest.mock import MagicMock, patch

import pytest

from riskcheck.pdf.factory import PdfRendererFactory, PdfTextExtractorFactory
from riskcheck.pdf.pdfplumber_adapter import PdfPlumberAdapter
from riskcheck.pdf.pymupdf_adapter import PyMuPdfAdapter
from riskcheck.pdf.reportlab_adapter import ReportLabRenderer


def _make_settings(
    pdf_engine: str = "reportlab", pdf_text_engine: str = "pdfplumber"
) -> MagicMock:
    """Create a minimal Settings-like object with only the engine fields."""
    with patch("riskcheck.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        settings.pdf_text_engine = pdf_text_engine
        return settings


class TestPdfRendererFactory:
    def test_creates_reportlab_renderer(self) -> None:
        renderer = PdfRendererFactory.create(_make_settings(pdf_engine="reportlab"))
        assert isinstance(renderer, ReportLabRenderer)

    def test_is_case_insensitive(self) -> None:
        renderer = PdfRendererFactory.create(_make_settings(pdf_engine="ReportLab"))
        assert isinstance(renderer, ReportLabRenderer)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfRendererFactory.create(_make_settings(pdf_engine="weasyprint"))


class TestPdfTextExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfTextExtractorFactory.create(_make_settings(pdf_text_engine="pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfTextExtractorFactory.create(_make_settings(pdf_text_engine="pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfTextExtractorFactory.create(_make_settings(pdf_text_engine="PyMuPDF"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF text engine"):
            PdfTextExtractorFactory.create(_make_settings(pdf_text_engine="unknown"))
