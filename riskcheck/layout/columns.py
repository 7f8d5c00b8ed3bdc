"""Column-width solver for a fixed column set over a fluid table width.

Widths are whole points and always sum to the available width exactly.
"""

import math
from collections.abc import Sequence
from dataclasses import replace

from riskcheck.layout.models import Column

ABSOLUTE_MIN_WIDTH = 12


def solve_column_widths(
    columns: Sequence[Column],
    available_width: int,
    *,
    absolute_min: int = ABSOLUTE_MIN_WIDTH,
) -> list[int]:
    """Resolve a width for every column.

    1. Each column asks for ``max(min_width, weight * available)``.
    2. On overflow, either scale every minimum down by one factor (when even
       the minimums do not fit) or shave flexible columns towards their
       minimums, highest ``shrink_priority`` first.
    3. Leftover width goes to the last column.
    """
    if not columns:
        return []
    available = max(0, int(available_width))
    widths = [max(col.min_width, int(col.weight * available)) for col in columns]

    if sum(widths) > available:
        if sum(col.min_width for col in columns) > available:
            widths = _scale_minimums(columns, available, absolute_min)
        else:
            widths = _shave(columns, widths, sum(widths) - available)

    widths[-1] += available - sum(widths)
    return widths


def apply_widths(columns: Sequence[Column], widths: Sequence[int]) -> tuple[Column, ...]:
    return tuple(
        replace(col, computed_width=width) for col, width in zip(columns, widths)
    )


def _shave(columns: Sequence[Column], widths: list[int], shortfall: int) -> list[int]:
    widths = list(widths)
    for index in _shave_order(columns):
        if shortfall <= 0:
            break
        slack = widths[index] - columns[index].min_width
        take = min(slack, shortfall)
        if take > 0:
            widths[index] -= take
            shortfall -= take
    return widths


def _shave_order(columns: Sequence[Column]) -> list[int]:
    """Flexible columns by descending priority, then every other column."""
    flexible = sorted(
        (i for i, col in enumerate(columns) if col.shrink_priority > 0),
        key=lambda i: (-columns[i].shrink_priority, i),
    )
    rest = [i for i, col in enumerate(columns) if col.shrink_priority <= 0]
    return flexible + rest


def _scale_minimums(
    columns: Sequence[Column], available: int, absolute_min: int
) -> list[int]:
    min_total = sum(col.min_width for col in columns)
    floor = max(0, absolute_min)
    if floor * len(columns) > available:
        # Not even the absolute floor fits: split evenly.
        return [available // len(columns)] * len(columns)

    factor = available / min_total
    widths = [max(floor, math.floor(col.min_width * factor)) for col in columns]
    excess = sum(widths) - available
    if excess > 0:
        floors = [replace(col, min_width=floor) for col in columns]
        widths = _shave(floors, widths, excess)
    return widths
