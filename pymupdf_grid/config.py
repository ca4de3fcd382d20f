"""Configuration for controlling table reconstruction."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Optional

DEFAULT_TOLERANCE = 0.5
DEFAULT_BOUNDARY_TOLERANCE = 1.0
DEFAULT_INTERSECTION_TOLERANCE = 0.1
DEFAULT_PRECISION = 3
DEFAULT_ROW_BAND = 2.0
DEFAULT_MIN_INTERSECTIONS = 2


@dataclass(slots=True)
class TableSettings:
    """Runtime configuration for the ruling and cell reconstruction.

    Attributes:
        tolerance: Largest positional difference, in page units, treated as
            "the same" when deduplicating segments and merging rulings.
        boundary_tolerance: Tolerance used when checking whether a closing
            top/bottom ruling already exists.
        intersection_tolerance: Amount by which a ruling's extent is
            inflated when accepting an intersection point.
        precision: Number of decimals coordinates are rounded to.
        row_band: Height of the band cells are snapped to when grouped
            into rows.
        min_intersections: Number of perpendicular rulings a ruling must
            cross to be kept as part of the grid.
        min_stroke_width: If set, line segments drawn with a smaller (or
            unknown) stroke width are ignored.
        max_workers: Number of worker processes used for multi-page
            documents. 1 processes pages sequentially.
        progress_callback: Optional callback receiving
            (pages_done, pages_total).
        verbose: Enable verbose logging for debugging.
    """

    tolerance: float = DEFAULT_TOLERANCE
    boundary_tolerance: float = DEFAULT_BOUNDARY_TOLERANCE
    intersection_tolerance: float = DEFAULT_INTERSECTION_TOLERANCE
    precision: int = DEFAULT_PRECISION
    row_band: float = DEFAULT_ROW_BAND
    min_intersections: int = DEFAULT_MIN_INTERSECTIONS
    min_stroke_width: Optional[float] = None
    max_workers: int = 1
    progress_callback: Optional[Callable[[int, int], None]] = field(
        default=None, compare=False
    )
    verbose: bool = False

    def __post_init__(self) -> None:
        for name in ("tolerance", "boundary_tolerance", "intersection_tolerance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")
        if self.row_band <= 0:
            raise ValueError("row_band must be > 0")
        if self.min_intersections < 1:
            raise ValueError("min_intersections must be >= 1")
        if self.min_stroke_width is not None and self.min_stroke_width < 0:
            raise ValueError("min_stroke_width must be >= 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @classmethod
    def from_env(cls, **overrides) -> "TableSettings":
        """Build settings, reading ``PYMUPDF_GRID_*`` environment overrides."""
        values = {}
        workers = os.environ.get("PYMUPDF_GRID_WORKERS")
        if workers:
            values["max_workers"] = int(workers)
        stroke = os.environ.get("PYMUPDF_GRID_MIN_STROKE_WIDTH")
        if stroke:
            values["min_stroke_width"] = float(stroke)
        values.update(overrides)
        return cls(**values)


__all__ = ["TableSettings"]
