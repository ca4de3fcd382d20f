"""Decode path operations into straight segments and drop near-duplicates."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_PRECISION, DEFAULT_TOLERANCE
from .geometry import Point, Segment, segments_equal
from .logging_config import get_logger
from .ops import OPS, Operation

logger = get_logger(__name__)


def _stroke_allowed(line_width: Optional[float], min_stroke_width: Optional[float]) -> bool:
    if min_stroke_width is None:
        return True
    return line_width is not None and line_width > 0 and line_width >= min_stroke_width


def process_construct_path(
    path_ops: Sequence[int],
    coords: Sequence[float],
    *,
    emit: bool = True,
) -> List[Segment]:
    """Trace one constructPath into straight segments.

    Curves consume their coordinates but are never traced and do not move
    the current point. With ``emit=False`` the path is walked without
    producing segments (used for stroke-width gating).
    """
    cur: Optional[Point] = None
    segments: List[Segment] = []
    index = 0

    for op in path_ops:
        if op == OPS.moveTo:
            cur = Point(coords[index], coords[index + 1])
            index += 2
        elif op == OPS.lineTo:
            to = Point(coords[index], coords[index + 1])
            index += 2
            if cur is None:
                continue
            if emit:
                segments.append(Segment.from_points(cur.x, cur.y, to.x, to.y))
            cur = to
        elif op == OPS.curveTo:
            index += 6
        elif op in (OPS.curveTo2, OPS.curveTo3):
            index += 4
        elif op == OPS.rectangle:
            x, y, w, h = coords[index : index + 4]
            index += 4
            if emit:
                corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
                for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
                    segments.append(Segment.from_points(ax, ay, bx, by))
            cur = Point(x, y)
        # closePath: nothing to consume, nothing to draw

    return segments


def extract_segments(
    operations: Iterable[Operation],
    min_stroke_width: Optional[float] = None,
) -> List[Segment]:
    """Collect the straight segments drawn by an operator stream.

    Without ``min_stroke_width`` every line is a candidate ruling. With it,
    lines are only kept while the last setLineWidth is at least that wide.
    """
    line_width: Optional[float] = None
    segments: List[Segment] = []

    for op in operations:
        if op.fn == OPS.setLineWidth:
            line_width = float(op.args[0])
        elif op.fn == OPS.constructPath:
            path_ops, coords = op.args[0], op.args[1]
            segments.extend(
                process_construct_path(
                    path_ops,
                    coords,
                    emit=_stroke_allowed(line_width, min_stroke_width),
                )
            )

    logger.debug(f"Extracted {len(segments)} segments")
    return segments


def remove_duplicate_segments(
    segments: Iterable[Segment],
    tolerance: float = DEFAULT_TOLERANCE,
    precision: int = DEFAULT_PRECISION,
) -> List[Segment]:
    """Round segments and keep the first of each group of near-identical ones."""
    unique: List[Segment] = []
    for segment in segments:
        segment = segment.rounded(precision)
        if not any(segments_equal(seen, segment, tolerance) for seen in unique):
            unique.append(segment)
    return unique


normalize_segments = remove_duplicate_segments


__all__ = [
    "extract_segments",
    "normalize_segments",
    "process_construct_path",
    "remove_duplicate_segments",
]
