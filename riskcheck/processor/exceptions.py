class GenerationError(Exception):
    """Base exception for report generation failures.

    Output produced before the failure must be discarded by the caller.
    """


class SinkWriteError(GenerationError):
    """Raised when the finished PDF cannot be written to its sink."""
