"""Geometry primitives for rulings and cells in y-up page space."""

from typing import Any, Iterable, NamedTuple, Optional, Tuple

# the below ignores are due to `numba` constraints
# pyright: reportUnknownMemberType=false
# pyright: reportUntypedFunctionDecorator=false
import numba  # type: ignore
import numpy as np

from .config import (
    DEFAULT_INTERSECTION_TOLERANCE,
    DEFAULT_PRECISION,
    DEFAULT_TOLERANCE,
)


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    """Axis-aligned line stored as a box: (x, y) is the top-left end."""

    x: float
    y: float
    width: float
    height: float

    @property
    def is_horizontal(self) -> bool:
        return self.height == 0

    @property
    def is_vertical(self) -> bool:
        return self.width == 0

    @property
    def bottom(self) -> float:
        return self.y - self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @classmethod
    def from_points(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        """Segment between two endpoints, whatever their order."""
        return cls(min(x1, x2), max(y1, y2), abs(x2 - x1), abs(y2 - y1))

    def rounded(self, precision: int = DEFAULT_PRECISION) -> "Segment":
        return Segment(*(round(v, precision) for v in self))


class Cell(NamedTuple):
    """Rectangle with top-left corner (x, y), extending right and down."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y - self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def contains(self, px: float, py: float) -> bool:
        """Strict containment: points on the border are outside."""
        return self.x < px < self.right and self.bottom < py < self.y


def approx_equal(
    a: float, b: float, tolerance: float = DEFAULT_TOLERANCE, strict: bool = False
) -> bool:
    """Tolerance comparison shared by every pipeline stage.

    Inclusive by default; with ``strict`` the difference must stay below
    ``tolerance``.
    """
    if strict:
        return abs(a - b) < tolerance
    return abs(a - b) <= tolerance


def segments_equal(
    first: Segment, second: Segment, tolerance: float = DEFAULT_TOLERANCE
) -> bool:
    """Return True when all four fields agree within ``tolerance``."""
    return all(approx_equal(a, b, tolerance) for a, b in zip(first, second))


def round_half_up(value: float) -> int:
    """Round .5 away from the floor, independent of banker's rounding."""
    return int(np.floor(value + 0.5))


@numba.jit(nopython=True, cache=True)
def det(a: float, b: float, c: float, d: float) -> float:  # type: ignore
    """Determinant of the 2x2 matrix [[a, b], [c, d]]."""
    return a * d - b * c


@numba.jit(nopython=True, cache=True)
def point_on_segment_numba(
    px: float,
    py: float,
    x: float,
    y: float,
    width: float,
    height: float,
    tolerance: float,
) -> bool:  # type: ignore
    """Check the point lies within the segment's extent, inflated by tolerance."""
    x_end = x + width
    y_end = y - height
    return (
        min(x, x_end) - tolerance <= px
        and px <= max(x, x_end) + tolerance
        and min(y, y_end) - tolerance <= py
        and py <= max(y, y_end) + tolerance
    )


@numba.jit(nopython=True, cache=True)
def intersect_numba(
    x_1: float,
    y_1: float,
    w_1: float,
    h_1: float,
    x_2: float,
    y_2: float,
    w_2: float,
    h_2: float,
    tolerance: float,
    precision: int,
) -> Tuple[bool, float, float]:  # type: ignore
    """Intersect two segments given as (x, y, width, height) boxes.

    Returns (found, x, y). Parallel segments and crossings of the infinite
    lines outside either drawn extent report ``found=False``.
    """
    x1 = x_1
    y1 = y_1
    x2 = x_1 + w_1
    y2 = y_1 - h_1
    x3 = x_2
    y3 = y_2
    x4 = x_2 + w_2
    y4 = y_2 - h_2

    det_l1 = det(x1, y1, x2, y2)
    det_l2 = det(x3, y3, x4, y4)
    x1mx2 = x1 - x2
    x3mx4 = x3 - x4
    y1my2 = y1 - y2
    y3my4 = y3 - y4

    denominator = det(x1mx2, y1my2, x3mx4, y3my4)
    if denominator == 0.0:
        return False, 0.0, 0.0

    px = round(det(det_l1, x1mx2, det_l2, x3mx4) / denominator, precision)
    py = round(det(det_l1, y1my2, det_l2, y3my4) / denominator, precision)

    if point_on_segment_numba(
        px, py, x_1, y_1, w_1, h_1, tolerance
    ) and point_on_segment_numba(px, py, x_2, y_2, w_2, h_2, tolerance):
        return True, px, py
    return False, 0.0, 0.0


def get_intersection_point(
    first: Segment,
    second: Segment,
    tolerance: float = DEFAULT_INTERSECTION_TOLERANCE,
    precision: int = DEFAULT_PRECISION,
) -> Optional[Point]:
    """Intersection of two rulings, or None when they do not cross."""
    found, px, py = intersect_numba(
        float(first.x),
        float(first.y),
        float(first.width),
        float(first.height),
        float(second.x),
        float(second.y),
        float(second.width),
        float(second.height),
        float(tolerance),
        int(precision),
    )
    if not found:
        return None
    return Point(float(px), float(py))


def segments_to_array(
    segments: Iterable[Segment],
) -> np.ndarray[Any, np.dtype[np.float64]]:
    """Pack segments into an (n, 4) float64 array for the numba kernels."""
    rows = [tuple(s) for s in segments]
    if not rows:
        return np.empty((0, 4), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


__all__ = [
    "Cell",
    "Point",
    "Segment",
    "approx_equal",
    "get_intersection_point",
    "round_half_up",
    "segments_equal",
    "segments_to_array",
]
