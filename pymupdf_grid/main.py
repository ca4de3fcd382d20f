#!/usr/bin/env python3
"""Command line entry point: dump the tables of a PDF as JSON or Markdown."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Sequence

from .api import ExtractionError, extract_tables
from .config import TableSettings
from .logging_config import get_logger, set_verbose
from .table import PageTable
from .utils import profiler

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pymupdf-grid",
        description="Reconstruct ruled tables from a PDF and extract their text.",
    )
    parser.add_argument("pdf_path", type=Path, help="input PDF")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="output file (default: <input>_tables.json or .md)",
    )
    parser.add_argument(
        "--pages",
        type=int,
        nargs=2,
        metavar=("FIRST", "LAST"),
        help="zero-based inclusive page range",
    )
    parser.add_argument(
        "--format", choices=("json", "markdown"), default="json", dest="fmt"
    )
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument(
        "--min-stroke-width",
        type=float,
        help="ignore lines drawn thinner than this",
    )
    parser.add_argument("--keep-empty", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--profile", action="store_true")
    return parser


def render(tables: Sequence[PageTable], fmt: str) -> str:
    """Serialise extracted tables in the requested output format."""
    if fmt == "markdown":
        parts: List[str] = []
        for table in tables:
            parts.append(f"## Page {table.page_number + 1}\n\n{table.to_markdown()}")
        return "\n".join(parts)
    return json.dumps([t.to_dict() for t in tables], ensure_ascii=False, indent=2)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for writing the tables of a PDF to disk."""
    args = _build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        set_verbose(True)

    suffix = ".md" if args.fmt == "markdown" else ".json"
    output = args.output or args.pdf_path.with_name(
        f"{args.pdf_path.stem}_tables{suffix}"
    )

    try:
        settings = TableSettings(
            max_workers=args.workers,
            min_stroke_width=args.min_stroke_width,
            verbose=args.verbose,
        )
        tables = extract_tables(
            args.pdf_path,
            pages=tuple(args.pages) if args.pages else None,
            settings=settings,
            keep_empty=args.keep_empty,
        )
    except (FileNotFoundError, ExtractionError, ValueError) as exc:
        logger.error(f"error: {exc}")
        return 1

    try:
        output.write_text(render(tables, args.fmt), encoding="utf-8")
    except OSError as exc:
        logger.error(f"error: cannot write {output}: {exc}")
        return 1
    logger.info(f"Wrote {len(tables)} tables to {output}")
    if args.profile:
        profiler.print_report()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual usage
    raise SystemExit(main())
