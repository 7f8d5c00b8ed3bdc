import itertools

from riskcheck.layout.lists import balance_two_columns, balanced_budget
from riskcheck.layout.pagination import TableSegment, paginate_rows


def _covered(segments: list[TableSegment]) -> list[int]:
    return [index for segment in segments for index in segment.rows]


def _segment_space(segment: TableSegment, first_space: float, page_space: float) -> float:
    return page_space if segment.new_page else first_space


class TestPaginateRows:
    def test_everything_fits_on_current_page(self) -> None:
        segments = paginate_rows([10] * 5, first_space=100, page_space=200, header_height=10)
        assert segments == [TableSegment(start=0, stop=5, new_page=False)]

    def test_every_row_placed_once_in_order(self) -> None:
        heights = [18, 40, 25, 90, 18, 18, 60, 33, 18, 75, 20, 18, 44]
        segments = paginate_rows(heights, first_space=120, page_space=200, header_height=20)
        assert _covered(segments) == list(range(len(heights)))
        assert all(segment.new_page for segment in segments[1:])

    def test_no_single_orphan_row(self) -> None:
        segments = paginate_rows([10] * 6, first_space=60, page_space=60, header_height=10)
        assert [(s.start, s.stop) for s in segments] == [(0, 4), (4, 6)]
        assert len(segments[-1]) == 2

    def test_skips_page_without_room_for_a_row(self) -> None:
        segments = paginate_rows([20, 20], first_space=15, page_space=100, header_height=10)
        assert segments == [TableSegment(start=0, stop=2, new_page=True)]

    def test_lone_row_waits_for_final_row(self) -> None:
        segments = paginate_rows([20, 20], first_space=40, page_space=100, header_height=10)
        assert segments == [TableSegment(start=0, stop=2, new_page=True)]

    def test_oversized_row_is_forced_onto_fresh_page(self) -> None:
        segments = paginate_rows([500, 10], first_space=100, page_space=100, header_height=10)
        assert segments[0] == TableSegment(start=0, stop=1, new_page=False)
        assert _covered(segments) == [0, 1]

    def test_segments_fit_their_page(self) -> None:
        heights = [30] * 20
        segments = paginate_rows(heights, first_space=200, page_space=300, header_height=20)
        assert sum(heights[i] for i in segments[0].rows) + 20 <= 200
        for segment in segments[1:]:
            assert sum(heights[i] for i in segment.rows) + 20 <= 300

    def test_empty_table(self) -> None:
        assert paginate_rows([], first_space=100, page_space=100, header_height=10) == []

    def test_pair_too_tall_to_share_a_page_is_not_split_early(self) -> None:
        segments = paginate_rows([10, 10, 40, 40], first_space=70, page_space=70, header_height=10)
        assert [(s.start, s.stop) for s in segments] == [(0, 3), (3, 4)]

    def test_lone_row_keeps_its_page_when_final_pair_cannot_share(self) -> None:
        segments = paginate_rows([20, 50], first_space=40, page_space=70, header_height=10)
        assert segments == [
            TableSegment(start=0, stop=1, new_page=False),
            TableSegment(start=1, stop=2, new_page=True),
        ]

    def test_small_tables_are_complete_and_fit(self) -> None:
        page_space, header = 70, 10
        for count in range(1, 6):
            for heights in itertools.product((10, 25, 40, 70), repeat=count):
                for first_space in (20, 45, 70):
                    segments = paginate_rows(
                        heights,
                        first_space=first_space,
                        page_space=page_space,
                        header_height=header,
                    )
                    assert _covered(segments) == list(range(count)), heights
                    assert all(len(segment) >= 1 for segment in segments), heights
                    for segment in segments:
                        used = header + sum(heights[i] for i in segment.rows)
                        space = _segment_space(segment, first_space, page_space)
                        assert len(segment) == 1 or used <= space, (heights, first_space)

    def test_small_tables_leave_no_avoidable_orphan(self) -> None:
        page_space, header = 70, 10
        for count in range(3, 6):
            for heights in itertools.product((10, 25, 40, 70), repeat=count):
                for first_space in (20, 45, 70):
                    segments = paginate_rows(
                        heights,
                        first_space=first_space,
                        page_space=page_space,
                        header_height=header,
                    )
                    if len(segments) < 2 or len(segments[-1]) != 1 or len(segments[-2]) < 2:
                        continue
                    assert header + heights[-2] + heights[-1] > page_space, (heights, first_space)


class TestTwoColumnBalance:
    def test_budget_is_half_the_total(self) -> None:
        assert balanced_budget([10, 10, 10, 10], 100) == 20

    def test_budget_rounds_up_to_an_item_boundary(self) -> None:
        assert balanced_budget([10, 10, 10], 100) == 20
        assert balanced_budget([50, 5, 5], 100) == 50

    def test_budget_capped_by_available(self) -> None:
        assert balanced_budget([10] * 10, 15) == 15
        assert balanced_budget([], 100) == 0.0

    def test_split_keeps_order(self) -> None:
        split = balance_two_columns([10] * 4, 100)
        assert split.left == (0, 1)
        assert split.right == (2, 3)
        assert split.overflow == ()

    def test_odd_count_fits_on_one_page(self) -> None:
        split = balance_two_columns([10] * 3, 100)
        assert split.left == (0, 1)
        assert split.right == (2,)
        assert split.overflow == ()

    def test_nothing_overflows_when_two_columns_hold_everything(self) -> None:
        for count in range(1, 12):
            for available in range(10, 70, 5):
                heights = [10] * count
                split = balance_two_columns(heights, available)
                if sum(heights) <= 2 * (available // 10) * 10:
                    assert split.overflow == (), (count, available)

    def test_overflow_only_when_no_ordered_split_fits(self) -> None:
        available = 50
        for count in range(1, 6):
            for heights in itertools.product((10, 20, 35), repeat=count):
                split = balance_two_columns(heights, available)
                fits = any(
                    sum(heights[:cut]) <= available and sum(heights[cut:]) <= available
                    for cut in range(count + 1)
                )
                assert (split.overflow == ()) == fits, heights
                placed = split.left + split.right + split.overflow
                assert placed == tuple(range(count)), heights

    def test_overflow_carries_items_beyond_both_columns(self) -> None:
        split = balance_two_columns([10] * 5, 20)
        assert split.left == (0, 1)
        assert split.right == (2, 3)
        assert split.overflow == (4,)
