from abc import ABC, abstractmethod

from reportlab.pdfbase.pdfmetrics import stringWidth

ELLIPSIS = "..."


class BaseTextMeasurer(ABC):
    """Contract for static text measurement.

    Layout never asks the renderer how tall something turned out; every
    height is computed up front from these metrics.
    """

    @abstractmethod
    def text_width(self, text: str, font: str, size: float) -> float:
        """Advance width of ``text`` in points."""

    def wrap(self, text: str, font: str, size: float, width: float) -> list[str]:
        """Greedy word wrap; words wider than ``width`` are broken by character.

        Explicit newlines start a new line. Blank input yields no lines.
        """
        if not text or not text.strip():
            return []
        lines: list[str] = []
        for paragraph in text.splitlines():
            words = paragraph.split()
            if not words:
                continue
            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate, font, size) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                current = ""
                for piece in self._break_word(word, font, size, width):
                    if current:
                        lines.append(current)
                    current = piece
            if current:
                lines.append(current)
        return lines

    def fit(self, text: str, font: str, size: float, width: float) -> str:
        """Truncate ``text`` with an ellipsis so it fits on one line of ``width``."""
        if self.text_width(text, font, size) <= width:
            return text
        trimmed = text
        while trimmed and self.text_width(trimmed + ELLIPSIS, font, size) > width:
            trimmed = trimmed[:-1]
        return trimmed.rstrip() + ELLIPSIS if trimmed else ""

    def _break_word(self, word: str, font: str, size: float, width: float) -> list[str]:
        if self.text_width(word, font, size) <= width:
            return [word]
        pieces: list[str] = []
        current = ""
        for char in word:
            if current and self.text_width(current + char, font, size) > width:
                pieces.append(current)
                current = char
            else:
                current += char
        if current:
            pieces.append(current)
        return pieces


class ReportLabTextMeasurer(BaseTextMeasurer):
    """Measures with the AFM metrics of ReportLab's standard fonts."""

    def text_width(self, text: str, font: str, size: float) -> float:
        return stringWidth(text, font, size)
