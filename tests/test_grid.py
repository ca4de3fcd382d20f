"""Tests for intersections, boundary closing, and cell construction."""

from __future__ import annotations

import pytest

from pymupdf_grid.config import TableSettings
from pymupdf_grid.geometry import (
    Cell,
    Point,
    Segment,
    approx_equal,
    get_intersection_point,
)
from pymupdf_grid.grid import (
    close_boundaries,
    filter_participating_rulings,
    generate_cells,
)

LEFT = Segment(0, 10, 0, 10)
RIGHT = Segment(10, 10, 0, 10)
TOP = Segment(0, 10, 10, 0)
BOTTOM = Segment(0, 0, 10, 0)


class TestApproxEqual:
    def test_inclusive_by_default(self):
        assert approx_equal(1.0, 1.5, 0.5)
        assert not approx_equal(1.0, 1.6, 0.5)

    def test_strict_excludes_the_tolerance_itself(self):
        assert approx_equal(1.0, 1.4, 0.5, strict=True)
        assert not approx_equal(1.0, 1.5, 0.5, strict=True)


class TestIntersection:
    def test_crossing_rulings_meet(self):
        point = get_intersection_point(Segment(5, 10, 0, 10), Segment(0, 5, 10, 0))

        assert point == Point(5, 5)

    def test_corner_touch_counts(self):
        assert get_intersection_point(LEFT, TOP) == Point(0, 10)
        assert get_intersection_point(RIGHT, BOTTOM) == Point(10, 0)

    def test_parallel_rulings_never_meet(self):
        assert get_intersection_point(TOP, BOTTOM) is None
        assert get_intersection_point(LEFT, RIGHT) is None

    def test_crossing_outside_drawn_extent_is_rejected(self):
        short = Segment(5, 10, 0, 4)

        assert get_intersection_point(short, Segment(0, 5, 10, 0)) is None

    def test_extent_is_inflated_by_intersection_tolerance(self):
        almost = Segment(5, 10, 0, 4.95)

        assert get_intersection_point(almost, Segment(0, 5, 10, 0)) == Point(5, 5)

    def test_order_of_arguments_does_not_matter(self):
        v, h = Segment(3, 8, 0, 6), Segment(1, 4, 6, 0)

        assert get_intersection_point(v, h) == get_intersection_point(h, v) == Point(3, 4)


class TestBoundaryClosing:
    def test_existing_boundaries_are_kept_as_is(self):
        horizontals = [TOP, BOTTOM]

        assert close_boundaries([LEFT, RIGHT], horizontals) == horizontals

    def test_missing_bottom_is_synthesized(self):
        horizontals = [TOP]

        closed = close_boundaries([LEFT, RIGHT], horizontals)

        assert closed == [TOP, Segment(0, 0, 10, 0)]
        assert horizontals == [TOP]

    def test_missing_top_and_bottom_are_synthesized(self):
        closed = close_boundaries([LEFT, RIGHT], [])

        assert closed == [Segment(0, 0, 10, 0), Segment(0, 10, 10, 0)]

    def test_boundary_within_tolerance_counts_as_present(self):
        nearly = Segment(0, 0.6, 9.5, 0)

        closed = close_boundaries([LEFT, RIGHT], [TOP, nearly])

        assert closed == [TOP, nearly]

    def test_boundary_exactly_at_tolerance_is_missing(self):
        # y differs by exactly the tolerance, so the bottom is synthesized
        offset = Segment(0, 1.0, 10, 0)

        closed = close_boundaries([LEFT, RIGHT], [TOP, offset])

        assert closed == [TOP, offset, Segment(0, 0, 10, 0)]

    def test_lone_vertical_at_extreme_is_not_closed(self):
        stray = Segment(5, 11, 0, 1)

        closed = close_boundaries([LEFT, RIGHT, stray], [TOP, BOTTOM])

        assert closed == [TOP, BOTTOM]

    def test_no_verticals_means_nothing_to_close(self):
        assert close_boundaries([], [TOP]) == [TOP]


class TestParticipationFilter:
    def test_stray_segment_touching_one_ruling_is_dropped(self):
        stray = Segment(10, 5, 1, 0)

        verticals, horizontals = filter_participating_rulings(
            [LEFT, RIGHT], [TOP, BOTTOM, stray]
        )

        assert verticals == [LEFT, RIGHT]
        assert horizontals == [TOP, BOTTOM]

    def test_rulings_are_returned_in_grid_order(self):
        middle = Segment(0, 5, 10, 0)

        verticals, horizontals = filter_participating_rulings(
            [RIGHT, LEFT], [BOTTOM, TOP, middle]
        )

        assert verticals == [LEFT, RIGHT]
        assert horizontals == [TOP, middle, BOTTOM]

    def test_threshold_is_configurable(self):
        settings = TableSettings(min_intersections=3)

        assert filter_participating_rulings(
            [LEFT, RIGHT], [TOP, BOTTOM], settings
        ) == ([], [])

    def test_missing_orientation_gives_nothing(self):
        assert filter_participating_rulings([], [TOP]) == ([], [])


class TestCellGeneration:
    def test_single_rectangle(self):
        assert generate_cells([LEFT, RIGHT], [TOP, BOTTOM]) == [Cell(0, 10, 10, 10)]

    def test_partial_grid_gets_closing_bottom(self):
        middle = Segment(0, 5, 10, 0)

        cells = generate_cells([LEFT, RIGHT], [TOP, middle])

        assert cells == [Cell(0, 10, 10, 5), Cell(0, 5, 10, 5)]

    def test_cells_with_missing_corner_are_skipped(self):
        # the middle vertical only spans the upper half
        upper = Segment(5, 10, 0, 5)
        middle = Segment(0, 5, 10, 0)

        cells = generate_cells([LEFT, upper, RIGHT], [TOP, middle, BOTTOM])

        assert cells == [
            Cell(0, 10, 5, 5),
            Cell(5, 10, 5, 5),
        ]

    def test_no_rulings_gives_no_cells(self):
        assert generate_cells([], [TOP, BOTTOM]) == []
        assert generate_cells([LEFT, RIGHT], []) == []

    @pytest.mark.parametrize("xs", [[0, 3, 7, 12], [0, 10], [0, 1.5, 2.25]])
    def test_cells_have_non_negative_size(self, xs):
        ys = [0, 4, 9, 20]
        verticals = [Segment(x, 20, 0, 20) for x in xs]
        horizontals = [Segment(xs[0], y, xs[-1] - xs[0], 0) for y in ys]

        cells = generate_cells(verticals, horizontals)

        assert len(cells) == (len(xs) - 1) * (len(ys) - 1)
        for cell in cells:
            assert cell.width >= 0
            assert cell.height >= 0

    def test_stacked_tables_with_aligned_columns(self):
        upper = [Segment(0, 100, 0, 40), Segment(10, 100, 0, 40)]
        lower = [Segment(0, 40, 0, 40), Segment(10, 40, 0, 40)]
        horizontals = [Segment(0, y, 10, 0) for y in (100, 80, 60, 40, 20, 0)]

        cells = generate_cells(upper + lower, horizontals)

        assert cells == [
            Cell(0, 100, 10, 20),
            Cell(0, 80, 10, 20),
            Cell(0, 40, 10, 20),
            Cell(0, 20, 10, 20),
        ]

    def test_vertical_in_lower_half_only_leaves_wide_upper_cell(self):
        lower = Segment(5, 5, 0, 5)
        middle = Segment(0, 5, 10, 0)

        cells = generate_cells([LEFT, lower, RIGHT], [TOP, middle, BOTTOM])

        assert cells == [
            Cell(0, 10, 10, 5),
            Cell(0, 5, 5, 5),
            Cell(5, 5, 5, 5),
        ]
