"""Merge abutting and overlapping segments into maximal rulings."""

from __future__ import annotations

from typing import Callable, Iterable, List

from .config import DEFAULT_TOLERANCE
from .geometry import Segment, approx_equal
from .logging_config import get_logger

logger = get_logger(__name__)


def _sweep(
    ordered: List[Segment],
    touches: Callable[[Segment, Segment], bool],
    merge: Callable[[Segment, Segment], Segment],
) -> List[Segment]:
    """Fold a sorted run of segments, growing an accumulator while they touch."""
    if not ordered:
        return []

    merged: List[Segment] = []
    acc = ordered[0]
    for segment in ordered:
        if touches(acc, segment):
            acc = merge(acc, segment)
        else:
            merged.append(acc)
            acc = segment
    merged.append(acc)
    return merged


def merge_horizontal_rulings(
    segments: Iterable[Segment], tolerance: float = DEFAULT_TOLERANCE
) -> List[Segment]:
    """Join horizontal segments lying on the same row that touch or overlap."""
    horizontal = sorted(
        (s for s in segments if s.height == 0), key=lambda s: (-s.y, s.x, s.width)
    )

    def touches(acc: Segment, s: Segment) -> bool:
        return (
            approx_equal(s.y, acc.y, tolerance, strict=True)
            and acc.x - tolerance <= s.x <= acc.right + tolerance
        )

    def merge(acc: Segment, s: Segment) -> Segment:
        x = min(s.x, acc.x)
        return Segment(x, s.y, max(s.right, acc.right) - x, 0)

    rulings = _sweep(horizontal, touches, merge)
    logger.debug(f"Merged {len(horizontal)} horizontal segments into {len(rulings)}")
    return rulings


def merge_vertical_rulings(
    segments: Iterable[Segment], tolerance: float = DEFAULT_TOLERANCE
) -> List[Segment]:
    """Join vertical segments lying on the same column that touch or overlap."""
    vertical = sorted(
        (s for s in segments if s.width == 0), key=lambda s: (s.x, -s.y, s.height)
    )

    def touches(acc: Segment, s: Segment) -> bool:
        return (
            approx_equal(s.x, acc.x, tolerance, strict=True)
            and acc.bottom - tolerance <= s.y <= acc.y + tolerance
        )

    def merge(acc: Segment, s: Segment) -> Segment:
        top = max(s.y, acc.y)
        return Segment(s.x, top, 0, top - min(s.bottom, acc.bottom))

    rulings = _sweep(vertical, touches, merge)
    logger.debug(f"Merged {len(vertical)} vertical segments into {len(rulings)}")
    return rulings


__all__ = ["merge_horizontal_rulings", "merge_vertical_rulings"]
