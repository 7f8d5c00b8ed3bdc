from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnSplit:
    """Item indices for the left and right columns, plus what did not fit."""

    left: tuple[int, ...]
    right: tuple[int, ...]
    overflow: tuple[int, ...]


def balanced_budget(item_heights: Sequence[float], available: float) -> float:
    """Left column height to aim for: the shortest prefix reaching half the total,
    never above ``available``."""
    half = sum(item_heights) / 2
    running = 0.0
    for height in item_heights:
        running += height
        if running >= half:
            break
    return min(available, running)


def balance_two_columns(item_heights: Sequence[float], available: float) -> ColumnSplit:
    """Split items, in order, into a left and a right column of ``available`` height.

    The left column stops at the balanced budget and the right takes the rest.
    When that leaves items over, the left column is filled to ``available``
    instead, which places the longest prefix two columns can hold. Whatever
    still does not fit is returned as overflow.
    """
    budget = balanced_budget(item_heights, available)
    split = _split(item_heights, budget, available)
    if split.overflow and budget < available:
        split = _split(item_heights, available, available)
    return split


def _split(item_heights: Sequence[float], budget: float, available: float) -> ColumnSplit:
    left, cursor = _fill(item_heights, 0, budget)
    right, cursor = _fill(item_heights, cursor, available)
    return ColumnSplit(
        left=tuple(left),
        right=tuple(right),
        overflow=tuple(range(cursor, len(item_heights))),
    )


def _fill(item_heights: Sequence[float], start: int, budget: float) -> tuple[list[int], int]:
    used = 0.0
    taken: list[int] = []
    index = start
    while index < len(item_heights) and used + item_heights[index] <= budget:
        used += item_heights[index]
        taken.append(index)
        index += 1
    return taken, index
