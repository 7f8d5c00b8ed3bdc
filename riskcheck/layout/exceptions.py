class LayoutError(Exception):
    """Base exception for document layout errors."""


class PageSealedError(LayoutError):
    """Raised when content targets a page whose footer has been sealed."""


class PageStateError(LayoutError):
    """Raised when a page lifecycle transition is attempted out of order."""
