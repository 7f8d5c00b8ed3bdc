from abc import ABC, abstractmethod

from riskcheck.layout.models import Document


class BaseDocumentRenderer(ABC):
    """Contract for all PDF rendering adapters."""

    @abstractmethod
    def render(self, document: Document) -> bytes:
        """Draw a fully laid-out document.

        Renderers only paint what layout placed; they never re-flow content
        or add pages.

        Raises:
            PdfRenderError: if rendering fails for any reason.
        """


class BasePdfTextExtractor(ABC):
    """Contract for reading text back out of a generated report."""

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of every page, in page order.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    def extract(self, pdf_bytes: bytes) -> str:
        return "\n".join(self.extract_pages(pdf_bytes)).strip()
