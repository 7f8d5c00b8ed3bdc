import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from riskcheck.processor.exceptions import SinkWriteError


class BaseSink(ABC):
    """Destination for a finished report's bytes."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Persist ``data`` completely or not at all.

        Raises:
            SinkWriteError: if the bytes could not be written.
        """


class MemorySink(BaseSink):
    """Keeps the bytes in memory; handy for HTTP responses and tests."""

    def __init__(self) -> None:
        self.data: bytes | None = None

    def write(self, data: bytes) -> None:
        self.data = bytes(data)


class FileSink(BaseSink):
    """Writes to a temporary file beside ``path`` and renames it into place,
    so a reader never sees a half-written report."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, data: bytes) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".part"
            )
        except OSError as exc:
            raise SinkWriteError(f"Cannot prepare {self._path}: {exc}") from exc
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise SinkWriteError(f"Cannot write {self._path}: {exc}") from exc
