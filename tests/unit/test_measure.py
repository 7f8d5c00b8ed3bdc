import logging

import pytest

from riskcheck.layout.measure import BaseTextMeasurer, ReportLabTextMeasurer
from riskcheck.layout.models import Column, Row, Table, TableStyle
from riskcheck.layout.rows import measure_row, measure_table

STYLE = TableStyle(
    font="Helvetica",
    header_font="Helvetica-Bold",
    size=10,
    leading=10,
    padding=4,
    min_row_height=20,
    max_row_height=60,
)


class TestWrap:
    def test_greedy_word_wrap(self, measurer: BaseTextMeasurer) -> None:
        assert measurer.wrap("aaa bbb ccc", "Helvetica", 10, 40) == ["aaa bbb", "ccc"]

    def test_long_word_is_broken(self, measurer: BaseTextMeasurer) -> None:
        assert measurer.wrap("abcdefghij", "Helvetica", 10, 20) == ["abcd", "efgh", "ij"]

    def test_newlines_start_new_lines(self, measurer: BaseTextMeasurer) -> None:
        assert measurer.wrap("a\nb", "Helvetica", 10, 100) == ["a", "b"]

    def test_blank_text_has_no_lines(self, measurer: BaseTextMeasurer) -> None:
        assert measurer.wrap("   ", "Helvetica", 10, 100) == []

    def test_fit_adds_ellipsis(self, measurer: BaseTextMeasurer) -> None:
        assert measurer.fit("abcdefghij", "Helvetica", 10, 30) == "abc..."
        assert measurer.fit("abc", "Helvetica", 10, 30) == "abc"


class TestReportLabTextMeasurer:
    def test_uses_font_metrics(self) -> None:
        measurer = ReportLabTextMeasurer()
        assert measurer.text_width("", "Helvetica", 10) == 0
        wide = measurer.text_width("WWW", "Helvetica", 10)
        assert wide > measurer.text_width("iii", "Helvetica", 10)


class TestMeasureRow:
    def test_height_raised_to_minimum(self, measurer: BaseTextMeasurer) -> None:
        row = measure_row(["a"], [100], measurer, font="Helvetica", style=STYLE)
        assert row.height == 20
        assert not row.clipped

    def test_height_follows_tallest_cell(self, measurer: BaseTextMeasurer) -> None:
        row = measure_row(
            ["a", "aaa bbb ccc"], [100, 48], measurer, font="Helvetica", style=STYLE
        )
        assert row.cells[1] == ("aaa bbb", "ccc")
        assert row.height == 2 * 10 + 8

    def test_overflow_is_clipped(
        self, measurer: BaseTextMeasurer, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="riskcheck")
        text = " ".join(["word"] * 40)
        row = measure_row([text], [48], measurer, font="Helvetica", style=STYLE, max_height=30)
        assert row.clipped
        assert row.height == 30
        assert len(row.cells[0]) == 2
        assert row.cells[0][-1].endswith("...")
        assert "clipped" in caplog.text


class TestMeasureTable:
    def test_widths_and_heights(self, measurer: BaseTextMeasurer) -> None:
        table = Table(
            columns=(
                Column("k", "Key", min_width=40, weight=0.3),
                Column("v", "Value", min_width=40, weight=0.7),
            ),
            rows=(Row(cells={"k": "a", "v": "b"}), Row(cells={"k": "c"})),
        )
        measured = measure_table(table, 200, measurer, STYLE, absolute_min=12)
        assert sum(measured.widths) == 200
        assert measured.row_heights == [20, 20]
        assert [row.computed_height for row in measured.table.rows] == [20, 20]
        assert measured.table.columns[1].computed_width == measured.widths[1]
