import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from riskcheck.layout.columns import apply_widths, solve_column_widths
from riskcheck.layout.measure import ELLIPSIS, BaseTextMeasurer
from riskcheck.layout.models import MeasuredRow, Row, Table, TableStyle
from riskcheck.logging.logger import Log


@dataclass(frozen=True)
class MeasuredTable:
    """A table with solved column widths and clamped row heights."""

    table: Table
    widths: tuple[int, ...]
    header: MeasuredRow
    rows: tuple[MeasuredRow, ...]

    @property
    def row_heights(self) -> list[float]:
        return [row.height for row in self.rows]


def measure_row(
    texts: Sequence[str],
    widths: Sequence[int],
    measurer: BaseTextMeasurer,
    *,
    font: str,
    style: TableStyle,
    max_height: float | None = None,
) -> MeasuredRow:
    """Wrap every cell at its column width and derive the row height.

    The height is the tallest cell, raised to the style minimum and capped at
    ``max_height``. Cells taller than the cap are truncated with an ellipsis.
    """
    cap = style.max_row_height if max_height is None else max_height
    cap = max(cap, style.min_row_height)
    inner = [max(1, width - 2 * style.padding) for width in widths]
    wrapped = [
        measurer.wrap(text, font, style.size, width) for text, width in zip(texts, inner)
    ]
    tallest = max(
        (len(lines) * style.leading + 2 * style.padding for lines in wrapped),
        default=0.0,
    )
    height = max(style.min_row_height, tallest)
    if height <= cap:
        return MeasuredRow(cells=tuple(tuple(lines) for lines in wrapped), height=height)

    max_lines = max(1, math.floor((cap - 2 * style.padding) / style.leading))
    clipped = [
        _clip_lines(lines, max_lines, measurer, font, style.size, width)
        for lines, width in zip(wrapped, inner)
    ]
    Log.debug(f"Row clipped from {height:.1f}pt to {cap:.1f}pt")
    return MeasuredRow(
        cells=tuple(tuple(lines) for lines in clipped), height=cap, clipped=True
    )


def measure_table(
    table: Table,
    available_width: int,
    measurer: BaseTextMeasurer,
    style: TableStyle,
    *,
    absolute_min: int,
    max_row_height: float | None = None,
) -> MeasuredTable:
    widths = solve_column_widths(table.columns, available_width, absolute_min=absolute_min)
    columns = apply_widths(table.columns, widths)
    header = measure_row(
        [col.label for col in columns],
        widths,
        measurer,
        font=style.header_font,
        style=style,
        max_height=max_row_height,
    )
    measured: list[MeasuredRow] = []
    rows: list[Row] = []
    for row in table.rows:
        result = measure_row(
            [row.cells.get(col.key, "") for col in columns],
            widths,
            measurer,
            font=style.font,
            style=style,
            max_height=max_row_height,
        )
        measured.append(result)
        rows.append(replace(row, computed_height=result.height))
    return MeasuredTable(
        table=Table(columns=columns, rows=tuple(rows)),
        widths=tuple(widths),
        header=header,
        rows=tuple(measured),
    )


def _clip_lines(
    lines: list[str],
    max_lines: int,
    measurer: BaseTextMeasurer,
    font: str,
    size: float,
    width: float,
) -> list[str]:
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = measurer.fit(kept[-1] + ELLIPSIS, font, size, width)
    return kept
