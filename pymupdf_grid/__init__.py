"""Reconstruct ruled tables from PDF vector graphics and fill in their text."""

from __future__ import annotations

from importlib import metadata

from .api import (
    ExtractionError,
    extract_page,
    extract_page_table,
    extract_tables,
    get_metadata,
)
from .config import TableSettings
from .content import TextRun, extract_table_content, join_text_in_same_cell
from .geometry import Cell, Point, Segment
from .ops import OPS, Operation, OperatorList, OperatorStreamError
from .table import PageTable, extract_table, group_cells_by_row

__all__ = [
    "OPS",
    "Cell",
    "ExtractionError",
    "Operation",
    "OperatorList",
    "OperatorStreamError",
    "PageTable",
    "Point",
    "Segment",
    "TableSettings",
    "TextRun",
    "extract_page",
    "extract_page_table",
    "extract_table",
    "extract_table_content",
    "extract_tables",
    "get_metadata",
    "group_cells_by_row",
    "join_text_in_same_cell",
    "__version__",
]

try:  # pragma: no cover - metadata only available when installed
    __version__ = metadata.version("pymupdf-grid")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local dev
    __version__ = "0.1.0"
