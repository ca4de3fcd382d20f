"""Place page text runs into table cells and join them into cell strings."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .geometry import Cell
from .logging_config import get_logger

logger = get_logger(__name__)

IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class TextRun:
    """A positioned run of glyphs.

    ``transform`` is the run's affine matrix (a, b, c, d, e, f); its
    translation (e, f) is the anchor used for cell containment.
    """

    string: str
    transform: Tuple[float, float, float, float, float, float] = IDENTITY

    @classmethod
    def at(cls, string: str, x: float, y: float) -> "TextRun":
        return cls(string, (1.0, 0.0, 0.0, 1.0, float(x), float(y)))

    @property
    def x(self) -> float:
        return self.transform[4]

    @property
    def y(self) -> float:
        return self.transform[5]


def runs_in_cell(cell: Cell, runs: Iterable[TextRun]) -> List[TextRun]:
    """Runs whose anchor lies strictly inside ``cell``."""
    return [run for run in runs if cell.contains(run.x, run.y)]


def extract_table_content(
    table: Sequence[Sequence[Cell]], runs: Iterable[TextRun]
) -> List[List[List[TextRun]]]:
    """For every row and cell, the text runs anchored inside that cell.

    A run sitting on a cell border belongs to no cell; a run inside cells
    that overlap belongs to each of them.
    """
    runs = [run for run in runs if run.string is not None]
    content = [[runs_in_cell(cell, runs) for cell in row] for row in table]
    placed = sum(len(cell) for row in content for cell in row)
    logger.debug(f"Placed {placed} of {len(runs)} text runs into table cells")
    return content


def join_text_in_same_cell(runs: Iterable[TextRun]) -> str:
    """Join a cell's runs line by line, top line first.

    Runs sharing an anchor y form one line and are concatenated left to
    right without a separator.
    """
    lines: Dict[float, List[TextRun]] = defaultdict(list)
    for run in runs:
        lines[run.y].append(run)

    return "\n".join(
        "".join(run.string for run in sorted(lines[y], key=lambda r: r.x))
        for y in sorted(lines, reverse=True)
    )


def join_table_content(content: Sequence[Sequence[Iterable[TextRun]]]) -> List[List[str]]:
    """Apply :func:`join_text_in_same_cell` to every cell of a mapped table."""
    return [[join_text_in_same_cell(cell) for cell in row] for row in content]


__all__ = [
    "TextRun",
    "extract_table_content",
    "join_table_content",
    "join_text_in_same_cell",
    "runs_in_cell",
]
