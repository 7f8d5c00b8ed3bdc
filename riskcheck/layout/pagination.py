"""Row pagination over pre-measured heights.

Pure functions: no page objects, no rendering, just row indices per page.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TableSegment:
    """Rows ``start`` (inclusive) to ``stop`` (exclusive) drawn on one page.

    ``new_page`` is False only for a first segment that continues the page
    the table started on.
    """

    start: int
    stop: int
    new_page: bool

    @property
    def rows(self) -> range:
        return range(self.start, self.stop)

    def __len__(self) -> int:
        return self.stop - self.start


def paginate_rows(
    row_heights: Sequence[float],
    *,
    first_space: float,
    page_space: float,
    header_height: float,
) -> list[TableSegment]:
    """Split rows into per-page segments, each repeating the header row.

    Rows are accumulated greedily until the next one would overflow. When that
    would strand exactly one final row on the next page, and the last two rows
    fit an empty page together, the current page gives up its last row so the
    two travel together. A page that has other content and cannot take any row
    (or only a lone row ahead of such a final pair) is skipped in favour of a
    fresh page.
    """
    total = len(row_heights)
    segments: list[TableSegment] = []
    start = 0
    space = first_space
    fresh = first_space >= page_space
    new_page = False

    while start < total:
        fitted = _rows_that_fit(row_heights, start, space - header_height)
        remaining = total - start - fitted

        pair_fits = (
            remaining == 1
            and fitted >= 1
            and _pair_fits(row_heights, start + fitted - 1, page_space - header_height)
        )

        if not fresh and (fitted == 0 or (fitted == 1 and pair_fits)):
            space, fresh, new_page = page_space, True, True
            continue
        if fitted == 0:
            # Taller than an empty page: place it anyway so layout always advances.
            fitted = 1
        if fitted >= 2 and pair_fits:
            fitted -= 1

        segments.append(TableSegment(start=start, stop=start + fitted, new_page=new_page))
        start += fitted
        space, fresh, new_page = page_space, True, True

    return segments


def _pair_fits(row_heights: Sequence[float], index: int, space: float) -> bool:
    return row_heights[index] + row_heights[index + 1] <= space


def _rows_that_fit(row_heights: Sequence[float], start: int, space: float) -> int:
    used = 0.0
    count = 0
    for height in row_heights[start:]:
        if used + height > space:
            break
        used += height
        count += 1
    return count
