from riskcheck.config.settings import Settings
from riskcheck.pdf.base import BaseDocumentRenderer, BasePdfTextExtractor
from riskcheck.pdf.pdfplumber_adapter import PdfPlumberAdapter
from riskcheck.pdf.pymupdf_adapter import PyMuPdfAdapter
from riskcheck.pdf.reportlab_adapter import ReportLabRenderer


class PdfRendererFactory:
    """Creates the configured PDF renderer."""

    ADAPTERS: dict[str, type[BaseDocumentRenderer]] = {
        "reportlab": ReportLabRenderer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentRenderer:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


class PdfTextExtractorFactory:
    """Creates the configured read-back extractor used for report verification."""

    ADAPTERS: dict[str, type[BasePdfTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfTextExtractor:
        engine = settings.pdf_text_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF text engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
