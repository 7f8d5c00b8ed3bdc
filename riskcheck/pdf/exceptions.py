class PdfError(Exception):
    """Base exception for PDF rendering and read-back."""


class PdfRenderError(PdfError):
    """Raised when a laid-out document cannot be written as PDF."""


class PdfExtractionError(PdfError):
    """Raised when text cannot be read back from PDF bytes."""
