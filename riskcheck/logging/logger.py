import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_scan_scope: ContextVar[str] = ContextVar("riskcheck_scan_scope", default="")


class Log:
    """Centralized logging with structured format.

    Messages emitted inside ``Log.scope(scan_id)`` are prefixed with the scan id,
    so interleaved output from parallel generations stays attributable.
    """

    _logger: logging.Logger = logging.getLogger("riskcheck")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def scope(cls, scan_id: str) -> Iterator[None]:
        """Prefix every message logged in this context with ``[scan <id>]``."""
        token = _scan_scope.set(scan_id)
        try:
            yield
        finally:
            _scan_scope.reset(token)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(cls._scoped(message), extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(cls._scoped(message), extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(cls._scoped(message), extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(cls._scoped(message), extra=kwargs)

    @staticmethod
    def _scoped(message: str) -> str:
        scan_id = _scan_scope.get()
        if not scan_id:
            return message
        return f"[scan {scan_id}] {message}"
