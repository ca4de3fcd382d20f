"""Adapters turning PyMuPDF pages into operator streams and text runs.

PyMuPDF reports coordinates with the origin at the top-left corner and y
growing downwards. The reconstruction works in PDF user space (y grows
upwards), so every y coordinate is flipped against the page height here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pymupdf  # type: ignore

from .content import TextRun
from .logging_config import get_logger
from .ops import OPS, OperatorList, Operation, construct_path, set_line_width

logger = get_logger(__name__)


def _path_to_operation(path: Dict[str, Any], page_height: float) -> Operation:
    """Translate one ``get_drawings`` path into a constructPath operation."""
    path_ops: List[int] = []
    coords: List[float] = []

    def point(p: "pymupdf.Point") -> Tuple[float, float]:
        return float(p.x), page_height - float(p.y)

    for item in path["items"]:
        kind = item[0]
        if kind == "l":
            path_ops += [OPS.moveTo, OPS.lineTo]
            coords += [*point(item[1]), *point(item[2])]
        elif kind == "c":
            path_ops += [OPS.moveTo, OPS.curveTo]
            coords += [*point(item[1]), *point(item[2]), *point(item[3]), *point(item[4])]
        elif kind == "re":
            rect = pymupdf.Rect(item[1])
            path_ops.append(OPS.rectangle)
            coords += [
                float(rect.x0),
                page_height - float(rect.y1),
                float(rect.width),
                float(rect.height),
            ]
        elif kind == "qu":
            quad = pymupdf.Quad(item[1])
            corners = [quad.ul, quad.ur, quad.lr, quad.ll, quad.ul]
            path_ops += [OPS.moveTo] + [OPS.lineTo] * 4
            for corner in corners:
                coords += point(corner)
        else:
            logger.debug(f"Skipping unsupported drawing item {kind!r}")

    if path.get("closePath"):
        path_ops.append(OPS.closePath)
    return construct_path(path_ops, coords)


def page_operations(page: "pymupdf.Page") -> OperatorList:
    """Operator stream of the vector paths drawn on ``page``."""
    page_height = float(page.rect.height)
    operations: List[Operation] = []
    for path in page.get_drawings():
        # fill-only paths carry no stroke width
        operations.append(set_line_width(path.get("width") or 0.0))
        operations.append(_path_to_operation(path, page_height))
    return OperatorList(operations).validate()


def page_text_runs(page: "pymupdf.Page") -> List[TextRun]:
    """Text shown on ``page``, one run per span of the content stream.

    Spans come from ``get_texttrace`` so that every text-showing operation
    stays a separate run, anchored at the origin of its first glyph.
    """
    page_height = float(page.rect.height)
    runs: List[TextRun] = []
    for span in page.get_texttrace():
        chars = [c for c in span.get("chars", ()) if c[0] >= 0]
        if not chars:
            continue
        string = "".join(chr(c[0]) for c in chars)
        cos, sin = span.get("dir", (1.0, 0.0))
        size = float(span.get("size", 1.0))
        ox, oy = chars[0][2]
        runs.append(
            TextRun(
                string,
                (
                    cos * size,
                    -sin * size,
                    sin * size,
                    cos * size,
                    float(ox),
                    page_height - float(oy),
                ),
            )
        )
    logger.debug(f"Page {page.number}: {len(runs)} text runs")
    return runs


__all__ = ["page_operations", "page_text_runs"]
