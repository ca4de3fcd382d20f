"""Tests for merging segments into maximal rulings."""

from __future__ import annotations

import random

import pytest

from pymupdf_grid.geometry import Segment
from pymupdf_grid.rulings import merge_horizontal_rulings, merge_vertical_rulings


def test_empty_input_gives_no_rulings():
    assert merge_horizontal_rulings([]) == []
    assert merge_vertical_rulings([]) == []


def test_each_pass_only_sees_its_orientation():
    vertical = [Segment(0, 10, 0, 10)]
    horizontal = [Segment(0, 10, 10, 0)]

    assert merge_horizontal_rulings(vertical) == []
    assert merge_vertical_rulings(horizontal) == []


@pytest.mark.parametrize(
    "pieces",
    [
        [Segment(0, 10, 4, 0), Segment(4, 10, 6, 0)],
        [Segment(0, 10, 4, 0), Segment(4.4, 10, 5.6, 0)],
        [Segment(0, 10, 7, 0), Segment(3, 10, 7, 0)],
        [Segment(0, 10, 10, 0), Segment(2, 10, 3, 0)],
    ],
    ids=["abutting", "small-gap", "overlapping", "contained"],
)
def test_touching_horizontal_pieces_merge(pieces):
    assert merge_horizontal_rulings(pieces) == [Segment(0, 10, 10, 0)]


def test_horizontal_gap_beyond_tolerance_stays_split():
    merged = merge_horizontal_rulings([Segment(0, 10, 4, 0), Segment(5, 10, 5, 0)])

    assert merged == [Segment(0, 10, 4, 0), Segment(5, 10, 5, 0)]


def test_horizontal_rows_are_ordered_top_down():
    merged = merge_horizontal_rulings(
        [Segment(0, 0, 10, 0), Segment(0, 10, 10, 0), Segment(0, 5, 10, 0)]
    )

    assert [r.y for r in merged] == [10, 5, 0]


def test_row_difference_of_exactly_tolerance_does_not_merge():
    merged = merge_horizontal_rulings([Segment(0, 10, 10, 0), Segment(0, 10.5, 10, 0)])

    assert len(merged) == 2


def test_vertical_pieces_merge_into_union():
    merged = merge_vertical_rulings([Segment(0, 6, 0, 6), Segment(0, 10, 0, 4)])

    assert merged == [Segment(0, 10, 0, 10)]


def test_vertical_gap_beyond_tolerance_stays_split():
    merged = merge_vertical_rulings([Segment(0, 10, 0, 4), Segment(0, 5, 0, 5)])

    assert merged == [Segment(0, 10, 0, 4), Segment(0, 5, 0, 5)]


def test_vertical_columns_are_ordered_left_to_right():
    merged = merge_vertical_rulings(
        [Segment(10, 10, 0, 10), Segment(0, 10, 0, 10), Segment(5, 10, 0, 10)]
    )

    assert [r.x for r in merged] == [0, 5, 10]


def test_merge_does_not_depend_on_input_order():
    segments = [
        Segment(0, 10, 3, 0),
        Segment(3, 10, 3, 0),
        Segment(6, 10, 4, 0),
        Segment(0, 5, 10, 0),
        Segment(0, 10, 0, 5),
        Segment(0, 5, 0, 5),
        Segment(10, 10, 0, 10),
    ]
    expected_h = merge_horizontal_rulings(segments)
    expected_v = merge_vertical_rulings(segments)

    rng = random.Random(7)
    for _ in range(10):
        shuffled = segments[:]
        rng.shuffle(shuffled)
        assert merge_horizontal_rulings(shuffled) == expected_h
        assert merge_vertical_rulings(shuffled) == expected_v

    assert expected_h == [Segment(0, 10, 10, 0), Segment(0, 5, 10, 0)]
    assert expected_v == [Segment(0, 10, 0, 10), Segment(10, 10, 0, 10)]
