import pymupdf

from riskcheck.pdf.base import BasePdfTextExtractor
from riskcheck.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfTextExtractor):
    """Reads report text back using PyMuPDF."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
