"""Assemble the table skeleton of a page and hold per-page results."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .config import TableSettings
from .geometry import Cell, round_half_up
from .grid import generate_cells
from .logging_config import get_logger
from .ops import Operation
from .rulings import merge_horizontal_rulings, merge_vertical_rulings
from .segments import extract_segments, remove_duplicate_segments
from .utils import profiler

logger = get_logger(__name__)

Row = List[Cell]
Table = List[Row]


def group_cells_by_row(cells: Iterable[Cell], row_band: float = 2.0) -> Table:
    """Bucket cells into rows (top first), each row ordered left to right."""
    rows: Dict[float, List[Cell]] = defaultdict(list)
    for cell in cells:
        key = round_half_up(cell.y / row_band) * row_band
        rows[key].append(cell)

    return [
        sorted(rows[key], key=lambda c: c.x)
        for key in sorted(rows, reverse=True)
    ]


def extract_table(
    operations: Iterable[Operation], settings: TableSettings | None = None
) -> Table:
    """Reconstruct the grid of cells drawn by a page's operator stream."""
    settings = settings or TableSettings()

    with profiler.time_block("extract_segments"):
        segments = extract_segments(operations, settings.min_stroke_width)
    with profiler.time_block("normalize_segments"):
        unique = remove_duplicate_segments(
            segments, settings.tolerance, settings.precision
        )
    with profiler.time_block("merge_rulings"):
        horizontal = merge_horizontal_rulings(unique, settings.tolerance)
        vertical = merge_vertical_rulings(unique, settings.tolerance)
    with profiler.time_block("generate_cells"):
        cells = generate_cells(vertical, horizontal, settings)

    table = group_cells_by_row(cells, settings.row_band)
    logger.debug(f"Table has {len(table)} rows from {len(cells)} cells")
    return table


def _escape_markdown(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", "<br>")


@dataclass(frozen=True)
class PageTable:
    """Table reconstructed from one page, with the text of every cell."""

    page_number: int
    cells: Table = field(default_factory=list)
    content: List[List[str]] = field(default_factory=list)
    run_count: int = 0

    @property
    def row_count(self) -> int:
        return len(self.cells)

    @property
    def col_count(self) -> int:
        return max((len(row) for row in self.cells), default=0)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page_number,
            "row_count": self.row_count,
            "col_count": self.col_count,
            "cells": [[cell._asdict() for cell in row] for row in self.cells],
            "content": [list(row) for row in self.content],
        }

    def to_markdown(self) -> str:
        """Render ``content`` as a pipe table, first row as header."""
        if not self.content:
            return ""
        width = max(len(row) for row in self.content)
        lines = []
        for index, row in enumerate(self.content):
            padded = [_escape_markdown(text) for text in row] + [""] * (width - len(row))
            lines.append("| " + " | ".join(padded) + " |")
            if index == 0:
                lines.append("|" + "---|" * width)
        return "\n".join(lines) + "\n"


__all__ = ["PageTable", "Row", "Table", "extract_table", "group_cells_by_row"]
