"""Layout value types: geometry, blocks, tables, pages and the document.

Vertical positions are measured top-down from the page's top edge.
"""

from dataclasses import dataclass, field
from enum import Enum

from riskcheck.layout.exceptions import PageSealedError, PageStateError


# Gap between the top of the footer band and the first footer line.
FOOTER_INSET = 8


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PageState(str, Enum):
    EMPTY = "empty"
    HEADER_PLACED = "header_placed"
    CONTENT_FLOWING = "content_flowing"
    FOOTER_RESERVED = "footer_reserved"
    SEALED = "sealed"


@dataclass(frozen=True)
class PageGeometry:
    """Page box with reserved header and footer bands around the safe area."""

    width: float
    height: float
    margin: int
    header_band: int
    footer_band: int

    @property
    def content_left(self) -> float:
        return float(self.margin)

    @property
    def content_width(self) -> int:
        # Whole points keep column arithmetic exact.
        return int(self.width - 2 * self.margin)

    @property
    def header_top(self) -> float:
        return float(self.margin)

    @property
    def safe_top(self) -> float:
        return float(self.margin + self.header_band)

    @property
    def safe_bottom(self) -> float:
        return self.height - self.margin - self.footer_band

    @property
    def safe_height(self) -> float:
        return self.safe_bottom - self.safe_top

    @property
    def footer_top(self) -> float:
        return self.safe_bottom


@dataclass(frozen=True)
class Cursor:
    """Next free vertical offset on a given page."""

    page_index: int
    y: float

    def advanced(self, height: float) -> "Cursor":
        return Cursor(page_index=self.page_index, y=self.y + height)


@dataclass(frozen=True)
class TextBlock:
    x: float
    y: float
    width: float
    lines: tuple[str, ...]
    font: str
    size: float
    leading: float
    align: str = "left"
    color: str = "#111111"

    @property
    def height(self) -> float:
        return len(self.lines) * self.leading


@dataclass(frozen=True)
class RuleBlock:
    x: float
    y: float
    width: float
    color: str = "#d0d4dc"
    thickness: float = 0.6


@dataclass(frozen=True)
class BadgeBlock:
    """Filled box with one centred label, used for the risk level."""

    x: float
    y: float
    width: float
    height: float
    text: str
    fill: str
    font: str
    size: float
    text_color: str = "#ffffff"


@dataclass(frozen=True)
class QrBlock:
    x: float
    y: float
    size: float
    data: str


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    min_width: int
    weight: float
    shrink_priority: int = 0
    computed_width: int = 0


@dataclass(frozen=True)
class Row:
    cells: dict[str, str]
    computed_height: float = 0.0


@dataclass(frozen=True)
class Table:
    columns: tuple[Column, ...]
    rows: tuple[Row, ...]


@dataclass(frozen=True)
class TableStyle:
    font: str
    header_font: str
    size: float
    leading: float
    padding: int
    min_row_height: float
    max_row_height: float
    header_fill: str = "#1f2a44"
    header_text: str = "#ffffff"
    stripe_fill: str = "#f3f5f9"
    border: str = "#c9ced8"


@dataclass(frozen=True)
class MeasuredRow:
    """Wrapped lines per cell plus the row's final, clamped height."""

    cells: tuple[tuple[str, ...], ...]
    height: float
    clipped: bool = False


@dataclass(frozen=True)
class TableBlock:
    """One page's segment of a table, header row included."""

    x: float
    y: float
    widths: tuple[int, ...]
    header: MeasuredRow
    rows: tuple[MeasuredRow, ...]
    style: TableStyle
    first_row_index: int = 0

    @property
    def height(self) -> float:
        return self.header.height + sum(row.height for row in self.rows)


Block = TextBlock | RuleBlock | BadgeBlock | QrBlock | TableBlock


@dataclass(frozen=True)
class HeaderBand:
    brand: str
    section: str


@dataclass(frozen=True)
class Footer:
    lines: tuple[str, ...]
    page_number: int
    font: str
    size: float
    leading: float


class Page:
    """One page moving through Empty -> HeaderPlaced -> ContentFlowing ->
    FooterReserved -> Sealed. Sealed pages reject all further content."""

    def __init__(
        self,
        number: int,
        orientation: Orientation,
        geometry: PageGeometry,
        watermark: str | None = None,
    ) -> None:
        self.number = number
        self.orientation = orientation
        self.geometry = geometry
        self.watermark = watermark
        self.state = PageState.EMPTY
        self.header: HeaderBand | None = None
        self.blocks: list[Block] = []
        self.footer: Footer | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.blocks)

    def place_header(self, header: HeaderBand) -> None:
        self._require_open()
        if self.state not in (PageState.EMPTY, PageState.HEADER_PLACED) or self.blocks:
            raise PageStateError(f"Page {self.number}: header must precede content")
        self.header = header
        self.state = PageState.HEADER_PLACED

    def add(self, block: Block) -> None:
        self._require_open()
        if self.state == PageState.EMPTY:
            raise PageStateError(f"Page {self.number}: header not placed")
        if self.state == PageState.FOOTER_RESERVED:
            raise PageStateError(f"Page {self.number}: footer already reserved")
        self.blocks.append(block)
        self.state = PageState.CONTENT_FLOWING

    def reserve_footer(self) -> None:
        self._require_open()
        if self.state not in (PageState.HEADER_PLACED, PageState.CONTENT_FLOWING):
            raise PageStateError(
                f"Page {self.number}: cannot reserve footer from state {self.state.value}"
            )
        self.state = PageState.FOOTER_RESERVED

    def seal(self, footer: Footer) -> None:
        self._require_open()
        if self.state != PageState.FOOTER_RESERVED:
            raise PageStateError(f"Page {self.number}: footer not reserved")
        self.footer = footer
        self.state = PageState.SEALED

    def _require_open(self) -> None:
        if self.state == PageState.SEALED:
            raise PageSealedError(f"Page {self.number} is sealed")


@dataclass
class Document:
    title: str
    subject: str = ""
    pages: list[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)
