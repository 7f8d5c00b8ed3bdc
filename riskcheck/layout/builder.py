"""Flowing layout over reserved header/footer bands.

Every operation takes a ``Cursor`` and returns the cursor after the content it
placed. New pages are only opened when content does not fit, so a document
never ends with a blank page.
"""

import math
from collections.abc import Sequence

from riskcheck.layout.config import LayoutConfig
from riskcheck.layout.lists import ColumnSplit, balance_two_columns
from riskcheck.layout.measure import BaseTextMeasurer
from riskcheck.layout.models import (
    FOOTER_INSET,
    BadgeBlock,
    Cursor,
    Document,
    Footer,
    HeaderBand,
    Orientation,
    Page,
    PageGeometry,
    QrBlock,
    RuleBlock,
    Table,
    TableBlock,
    TableStyle,
    TextBlock,
)
from riskcheck.layout.pagination import paginate_rows
from riskcheck.layout.rows import measure_table

BULLET = "•"


class DocumentBuilder:
    def __init__(
        self,
        config: LayoutConfig,
        measurer: BaseTextMeasurer,
        *,
        title: str,
        subject: str = "",
        footer_lines: Sequence[str] = (),
    ) -> None:
        self._config = config
        self._measurer = measurer
        self._document = Document(title=title, subject=subject)
        self._footer_lines = tuple(footer_lines)
        self._sections: dict[int, str] = {}

    @property
    def pages(self) -> list[Page]:
        return self._document.pages

    def geometry(self, orientation: Orientation) -> PageGeometry:
        width, height = self._config.page_width, self._config.page_height
        if orientation == Orientation.LANDSCAPE:
            width, height = height, width
        return PageGeometry(
            width=width,
            height=height,
            margin=self._config.margin,
            header_band=self._config.header_band,
            footer_band=self._config.footer_band,
        )

    def remaining(self, cursor: Cursor) -> float:
        return self._page(cursor).geometry.safe_bottom - cursor.y

    def table_style(self) -> TableStyle:
        config = self._config
        return TableStyle(
            font=config.body_font,
            header_font=config.bold_font,
            size=config.table_size,
            leading=config.leading(config.table_size),
            padding=config.cell_padding,
            min_row_height=config.min_row_height,
            max_row_height=config.max_row_height,
        )

    # -- pages ---------------------------------------------------------------

    def new_page(
        self,
        section: str,
        orientation: Orientation = Orientation.PORTRAIT,
        *,
        watermark: str | None = None,
    ) -> Cursor:
        """Seal the current last page and open a new one with its header placed."""
        if self.pages:
            self._seal(self.pages[-1])
        page = Page(
            number=len(self.pages) + 1,
            orientation=orientation,
            geometry=self.geometry(orientation),
            watermark=watermark if self._config.watermark_enabled else None,
        )
        page.place_header(HeaderBand(brand=self._config.brand, section=section))
        self.pages.append(page)
        self._sections[page.number] = section
        return Cursor(page_index=page.number - 1, y=page.geometry.safe_top)

    def start_section(
        self,
        cursor: Cursor | None,
        section: str,
        *,
        orientation: Orientation = Orientation.PORTRAIT,
        watermark: str | None = None,
        new_page: bool = True,
    ) -> Cursor:
        """Begin a section, reusing the current page while it is still blank.

        With ``new_page=False`` the section flows on from ``cursor`` when the
        orientation matches.
        """
        if cursor is None:
            return self.new_page(section, orientation, watermark=watermark)
        page = self._page(cursor)
        if not page.has_content and page.orientation == orientation:
            page.place_header(HeaderBand(brand=self._config.brand, section=section))
            if self._config.watermark_enabled:
                page.watermark = watermark
            self._sections[page.number] = section
            return Cursor(page_index=cursor.page_index, y=page.geometry.safe_top)
        if not new_page and page.orientation == orientation:
            return cursor
        return self.new_page(section, orientation, watermark=watermark)

    def ensure_space(self, cursor: Cursor, needed: float) -> Cursor:
        """Move to a continuation page when ``needed`` does not fit.

        A page without content is never abandoned: whatever does not fit there
        would not fit on a fresh page either.
        """
        if self.remaining(cursor) >= needed:
            return cursor
        return self._continue(cursor)

    def finish(self) -> Document:
        """Seal the last page and hand over the document.

        A trailing page that never received content is dropped.
        """
        if len(self.pages) > 1 and not self.pages[-1].has_content:
            self.pages.pop()
        if self.pages and self.pages[-1].footer is None:
            self._seal(self.pages[-1])
        return self._document

    # -- content -------------------------------------------------------------

    def gap(self, cursor: Cursor, height: float) -> Cursor:
        """Vertical whitespace, clamped at the bottom of the safe area."""
        return cursor.advanced(max(0.0, min(height, self.remaining(cursor))))

    def text(
        self,
        cursor: Cursor,
        text: str,
        *,
        font: str | None = None,
        size: float | None = None,
        align: str = "left",
        color: str = "#111111",
        indent: float = 0.0,
        space_after: float | None = None,
    ) -> Cursor:
        config = self._config
        font = font or config.body_font
        size = size or config.body_size
        geometry = self._page(cursor).geometry
        x = geometry.content_left + indent
        width = geometry.content_width - indent
        lines = self._measurer.wrap(text, font, size, width)
        cursor = self._flow_lines(
            cursor, lines, x=x, width=width, font=font, size=size, align=align, color=color
        )
        gap = config.paragraph_gap if space_after is None else space_after
        return self.gap(cursor, gap)

    def heading(self, cursor: Cursor, text: str, *, size: float | None = None) -> Cursor:
        """Section heading kept together with at least two following body lines."""
        config = self._config
        size = size or config.heading_size
        width = self._page(cursor).geometry.content_width
        lines = self._measurer.wrap(text, config.bold_font, size, width)
        needed = len(lines) * config.leading(size) + 2 * config.leading(config.body_size)
        cursor = self.ensure_space(cursor, needed)
        cursor = self.text(cursor, text, font=config.bold_font, size=size, space_after=2)
        return self.rule(cursor)

    def rule(self, cursor: Cursor, *, space_after: float | None = None) -> Cursor:
        page = self._page(cursor)
        page.add(
            RuleBlock(
                x=page.geometry.content_left,
                y=cursor.y,
                width=page.geometry.content_width,
            )
        )
        gap = self._config.paragraph_gap if space_after is None else space_after
        return self.gap(cursor, gap)

    def bullets(self, cursor: Cursor, items: Sequence[str], *, size: float | None = None) -> Cursor:
        """Bulleted list; each item stays on one page whenever a page can hold it."""
        config = self._config
        size = size or config.body_size
        leading = config.leading(size)
        indent = size * 1.4
        for item in items:
            geometry = self._page(cursor).geometry
            width = geometry.content_width - indent
            lines = self._measurer.wrap(item, config.body_font, size, width)
            if not lines:
                continue
            needed = len(lines) * leading
            cursor = self.ensure_space(cursor, min(needed, geometry.safe_height))
            self._page(cursor).add(
                TextBlock(
                    x=geometry.content_left,
                    y=cursor.y,
                    width=indent,
                    lines=(BULLET,),
                    font=config.body_font,
                    size=size,
                    leading=leading,
                )
            )
            cursor = self._flow_lines(
                cursor,
                lines,
                x=geometry.content_left + indent,
                width=width,
                font=config.body_font,
                size=size,
            )
            cursor = self.gap(cursor, 2)
        return self.gap(cursor, config.paragraph_gap)

    def table(self, cursor: Cursor, table: Table, *, style: TableStyle | None = None) -> Cursor:
        """Place a table across as many pages as it needs.

        Widths and heights are solved once up front; every continuation page
        repeats the header row.
        """
        style = style or self.table_style()
        page = self._page(cursor)
        geometry = page.geometry
        if not page.has_content:
            cursor = Cursor(page_index=cursor.page_index, y=geometry.safe_top)
        measured = measure_table(
            table,
            geometry.content_width,
            self._measurer,
            style,
            absolute_min=self._config.min_column_width,
        )
        row_cap = geometry.safe_height - measured.header.height
        if row_cap < style.max_row_height:
            # A single row plus the header must fit on an empty page.
            measured = measure_table(
                table,
                geometry.content_width,
                self._measurer,
                style,
                absolute_min=self._config.min_column_width,
                max_row_height=max(style.min_row_height, row_cap),
            )

        segments = paginate_rows(
            measured.row_heights,
            first_space=self.remaining(cursor),
            page_space=geometry.safe_height,
            header_height=measured.header.height,
        )
        if not segments:
            cursor = self.ensure_space(cursor, measured.header.height)
            block = TableBlock(
                x=geometry.content_left,
                y=cursor.y,
                widths=measured.widths,
                header=measured.header,
                rows=(),
                style=style,
            )
            self._page(cursor).add(block)
            return self.gap(cursor.advanced(block.height), self._config.paragraph_gap)

        for segment in segments:
            if segment.new_page:
                cursor = self._continue(cursor)
            block = TableBlock(
                x=geometry.content_left,
                y=cursor.y,
                widths=measured.widths,
                header=measured.header,
                rows=measured.rows[segment.start : segment.stop],
                style=style,
                first_row_index=segment.start,
            )
            self._page(cursor).add(block)
            cursor = cursor.advanced(block.height)
        return self.gap(cursor, self._config.paragraph_gap)

    def two_column_list(
        self, cursor: Cursor, items: Sequence[str], *, size: float | None = None
    ) -> Cursor:
        """Items split greedily into a left and a right column, page by page."""
        config = self._config
        size = size or config.body_size
        leading = config.leading(size)
        indent = size * 1.2
        item_gap = 2.0
        geometry = self._page(cursor).geometry
        column_width = (geometry.content_width - config.column_gutter) // 2
        wrapped = [
            self._measurer.wrap(item, config.body_font, size, column_width - indent)
            for item in items
        ]
        heights = [len(lines) * leading + item_gap for lines in wrapped]
        pending = [index for index, lines in enumerate(wrapped) if lines]

        while pending:
            page = self._page(cursor)
            pending_heights = [heights[index] for index in pending]
            available = self.remaining(cursor)
            split = balance_two_columns(pending_heights, available)
            if not split.left:
                if page.has_content:
                    cursor = self._continue(cursor)
                    continue
                split = ColumnSplit(
                    left=(0,), right=(), overflow=tuple(range(1, len(pending)))
                )
            left_x = geometry.content_left
            right_x = left_x + column_width + config.column_gutter
            used_left = self._place_list_column(
                page, cursor, [wrapped[pending[i]] for i in split.left],
                x=left_x, width=column_width, indent=indent, size=size, item_gap=item_gap,
            )
            used_right = self._place_list_column(
                page, cursor, [wrapped[pending[i]] for i in split.right],
                x=right_x, width=column_width, indent=indent, size=size, item_gap=item_gap,
            )
            cursor = cursor.advanced(min(max(used_left, used_right), available))
            pending = [pending[i] for i in split.overflow]
            if pending:
                cursor = self._continue(cursor)
        return self.gap(cursor, config.paragraph_gap)

    def badge(
        self,
        cursor: Cursor,
        text: str,
        *,
        fill: str,
        width: float = 180.0,
        height: float = 30.0,
        size: float = 13.0,
    ) -> Cursor:
        cursor = self.ensure_space(cursor, height)
        page = self._page(cursor)
        geometry = page.geometry
        page.add(
            BadgeBlock(
                x=geometry.content_left + (geometry.content_width - width) / 2,
                y=cursor.y,
                width=width,
                height=height,
                text=text,
                fill=fill,
                font=self._config.bold_font,
                size=size,
            )
        )
        return self.gap(cursor.advanced(height), self._config.paragraph_gap)

    def qr_code(self, cursor: Cursor, data: str, *, size: float = 120.0) -> Cursor:
        cursor = self.ensure_space(cursor, size)
        page = self._page(cursor)
        page.add(QrBlock(x=page.geometry.content_left, y=cursor.y, size=size, data=data))
        return self.gap(cursor.advanced(size), self._config.paragraph_gap)

    # -- internals -----------------------------------------------------------

    def _page(self, cursor: Cursor) -> Page:
        return self.pages[cursor.page_index]

    def _continue(self, cursor: Cursor) -> Cursor:
        page = self._page(cursor)
        if not page.has_content:
            return Cursor(page_index=cursor.page_index, y=page.geometry.safe_top)
        return self.new_page(
            self._sections.get(page.number, ""),
            page.orientation,
            watermark=page.watermark,
        )

    def _flow_lines(
        self,
        cursor: Cursor,
        lines: Sequence[str],
        *,
        x: float,
        width: float,
        font: str,
        size: float,
        align: str = "left",
        color: str = "#111111",
    ) -> Cursor:
        leading = self._config.leading(size)
        pending = list(lines)
        while pending:
            cursor = self.ensure_space(cursor, leading)
            fit = max(1, math.floor(self.remaining(cursor) / leading))
            chunk = pending[:fit]
            self._page(cursor).add(
                TextBlock(
                    x=x,
                    y=cursor.y,
                    width=width,
                    lines=tuple(chunk),
                    font=font,
                    size=size,
                    leading=leading,
                    align=align,
                    color=color,
                )
            )
            cursor = cursor.advanced(len(chunk) * leading)
            pending = pending[fit:]
        return cursor

    def _place_list_column(
        self,
        page: Page,
        cursor: Cursor,
        items: Sequence[Sequence[str]],
        *,
        x: float,
        width: float,
        indent: float,
        size: float,
        item_gap: float,
    ) -> float:
        config = self._config
        leading = config.leading(size)
        limit = self.remaining(cursor)
        used = 0.0
        for lines in items:
            room = max(1, math.floor((limit - used) / leading))
            shown = tuple(lines[:room])
            page.add(
                TextBlock(
                    x=x, y=cursor.y + used, width=indent, lines=(BULLET,),
                    font=config.body_font, size=size, leading=leading,
                )
            )
            page.add(
                TextBlock(
                    x=x + indent, y=cursor.y + used, width=width - indent, lines=shown,
                    font=config.body_font, size=size, leading=leading,
                )
            )
            used += len(shown) * leading + item_gap
        return used

    def _seal(self, page: Page) -> None:
        config = self._config
        size = config.footer_size
        leading = config.leading(size)
        # One line of the band is kept for the page label.
        capacity = max(0, math.floor((config.footer_band - FOOTER_INSET) / leading) - 1)
        lines = tuple(
            self._measurer.fit(line, config.body_font, size, page.geometry.content_width)
            for line in self._footer_lines[:capacity]
        )
        page.reserve_footer()
        page.seal(
            Footer(
                lines=lines,
                page_number=page.number,
                font=config.body_font,
                size=size,
                leading=leading,
            )
        )
