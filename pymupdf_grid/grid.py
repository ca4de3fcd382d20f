"""Turn merged rulings into cell rectangles."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

# pyright: reportUnknownMemberType=false
# pyright: reportUntypedFunctionDecorator=false
import numba  # type: ignore
import numpy as np

from .config import TableSettings
from .geometry import (
    Cell,
    Segment,
    approx_equal,
    get_intersection_point,
    intersect_numba,
    segments_to_array,
)
from .logging_config import get_logger

logger = get_logger(__name__)


def _closing_ruling(
    verticals: Sequence[Segment],
    horizontals: Sequence[Segment],
    extreme: float,
    end_of: str,
    tolerance: float,
) -> Segment | None:
    """Horizontal ruling needed to close the grid at ``extreme``, if any."""
    at_extreme = sorted(
        (
            v
            for v in verticals
            if approx_equal(extreme, getattr(v, end_of), tolerance, strict=True)
        ),
        key=lambda v: v.x,
    )
    if not at_extreme:
        return None
    left, right = at_extreme[0], at_extreme[-1]
    span = right.x - left.x
    if span <= 0:
        # a lone vertical has nothing to connect
        return None

    for h in horizontals:
        if approx_equal(h.y, extreme, tolerance, strict=True) and approx_equal(
            h.width, span, tolerance, strict=True
        ):
            return None
    return Segment(left.x, extreme, span, 0)


def close_boundaries(
    verticals: Sequence[Segment],
    horizontals: Sequence[Segment],
    tolerance: float = 1.0,
) -> List[Segment]:
    """Return ``horizontals`` plus any missing bottom and top closing rulings."""
    closed = list(horizontals)
    if not verticals:
        return closed

    bottom_y = min(v.bottom for v in verticals)
    bottom = _closing_ruling(verticals, closed, bottom_y, "bottom", tolerance)
    if bottom is not None:
        logger.debug(f"Synthesized bottom ruling {bottom}")
        closed.append(bottom)

    top_y = max(v.y for v in verticals)
    top = _closing_ruling(verticals, closed, top_y, "y", tolerance)
    if top is not None:
        logger.debug(f"Synthesized top ruling {top}")
        closed.append(top)

    return closed


@numba.jit(nopython=True, cache=True)
def count_intersections_numba(
    verticals: np.ndarray[Any, np.dtype[np.float64]],
    horizontals: np.ndarray[Any, np.dtype[np.float64]],
    tolerance: float,
    precision: int,
) -> Tuple[np.ndarray[Any, np.dtype[np.int64]], np.ndarray[Any, np.dtype[np.int64]]]:  # type: ignore
    """Count, per ruling index, how many perpendicular rulings it crosses."""
    v_counts = np.zeros(verticals.shape[0], dtype=np.int64)
    h_counts = np.zeros(horizontals.shape[0], dtype=np.int64)

    for i in range(verticals.shape[0]):
        for j in range(horizontals.shape[0]):
            found, _, _ = intersect_numba(
                verticals[i, 0],
                verticals[i, 1],
                verticals[i, 2],
                verticals[i, 3],
                horizontals[j, 0],
                horizontals[j, 1],
                horizontals[j, 2],
                horizontals[j, 3],
                tolerance,
                precision,
            )
            if found:
                v_counts[i] += 1
                h_counts[j] += 1

    return v_counts, h_counts


def filter_participating_rulings(
    verticals: Sequence[Segment],
    horizontals: Sequence[Segment],
    settings: TableSettings | None = None,
) -> Tuple[List[Segment], List[Segment]]:
    """Keep rulings crossing at least ``min_intersections`` perpendicular ones.

    Returns (verticals, horizontals) with verticals ordered left to right and
    horizontals ordered top to bottom.
    """
    settings = settings or TableSettings()
    v_sorted = sorted(verticals, key=lambda s: (s.x, -s.y))
    h_sorted = sorted(horizontals, key=lambda s: (-s.y, s.x))
    if not v_sorted or not h_sorted:
        return [], []

    v_counts, h_counts = count_intersections_numba(
        segments_to_array(v_sorted),
        segments_to_array(h_sorted),
        float(settings.intersection_tolerance),
        int(settings.precision),
    )
    kept_v = [s for s, n in zip(v_sorted, v_counts) if n >= settings.min_intersections]
    kept_h = [s for s, n in zip(h_sorted, h_counts) if n >= settings.min_intersections]
    logger.debug(
        f"Participation filter kept {len(kept_v)}/{len(v_sorted)} vertical and "
        f"{len(kept_h)}/{len(h_sorted)} horizontal rulings"
    )
    return kept_v, kept_h


def generate_cells(
    verticals: Sequence[Segment],
    horizontals: Sequence[Segment],
    settings: TableSettings | None = None,
) -> List[Cell]:
    """Build every cell whose four corners are real ruling intersections.

    Each band between adjacent horizontals pairs the verticals crossing its
    top line, left to right, so stacked tables sharing column positions keep
    their own cells.
    """
    settings = settings or TableSettings()
    if not verticals or not horizontals:
        return []

    closed = close_boundaries(verticals, horizontals, settings.boundary_tolerance)
    v_lines, h_lines = filter_participating_rulings(verticals, closed, settings)

    def corner(v: Segment, h: Segment):
        return get_intersection_point(
            v, h, settings.intersection_tolerance, settings.precision
        )

    cells: List[Cell] = []
    for top_line, bottom_line in zip(h_lines, h_lines[1:]):
        # only verticals reaching this band's top line bound its cells
        band = []
        for v in v_lines:
            top = corner(v, top_line)
            if top is not None:
                band.append((v, top))
        for (left_line, top_left), (right_line, top_right) in zip(band, band[1:]):
            bottom_left = corner(left_line, bottom_line)
            bottom_right = corner(right_line, bottom_line)
            if bottom_left is None or bottom_right is None:
                continue
            cells.append(
                Cell(
                    top_left.x,
                    top_left.y,
                    top_right.x - top_left.x,
                    top_left.y - bottom_left.y,
                )
            )

    logger.debug(f"Generated {len(cells)} cells")
    return cells


__all__ = [
    "close_boundaries",
    "count_intersections_numba",
    "filter_participating_rulings",
    "generate_cells",
]
