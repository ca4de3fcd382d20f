"""Public facing API for reconstructing tables from PDF documents."""

from __future__ import annotations

import concurrent.futures
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pymupdf  # type: ignore

from .config import TableSettings
from .content import TextRun, extract_table_content, join_table_content
from .logging_config import get_logger, set_verbose
from .ops import Operation
from .source import page_operations, page_text_runs
from .table import PageTable, extract_table

logger = get_logger(__name__)


class ExtractionError(RuntimeError):
    """Raised when a document or page cannot be read."""


def extract_page_table(
    operations: Sequence[Operation],
    runs: Sequence[TextRun],
    page_number: int = 0,
    settings: TableSettings | None = None,
) -> PageTable:
    """Run the whole pipeline on an already decoded page."""
    table = extract_table(operations, settings)
    content = join_table_content(extract_table_content(table, runs))
    return PageTable(
        page_number=page_number, cells=table, content=content, run_count=len(runs)
    )


def extract_page(
    page: "pymupdf.Page", settings: TableSettings | None = None
) -> PageTable:
    """Reconstruct the table drawn on a PyMuPDF page and fill in its text."""
    return extract_page_table(
        page_operations(page), page_text_runs(page), page.number, settings
    )


def _open(pdf_path: str | Path) -> "pymupdf.Document":
    pdf_path = Path(pdf_path).resolve()
    if not pdf_path.exists():
        raise FileNotFoundError(f"Input PDF not found: {pdf_path}")
    try:
        return pymupdf.open(pdf_path)
    except Exception as exc:
        raise ExtractionError(f"Cannot open {pdf_path}: {exc}") from exc


def _page_range(
    page_count: int, pages: Optional[Tuple[int, int]]
) -> List[int]:
    if pages is None:
        return list(range(page_count))
    first, last = pages
    if first < 0 or last < first or last >= page_count:
        raise ExtractionError(
            f"Page range {first}-{last} outside document with {page_count} pages"
        )
    return list(range(first, last + 1))


_worker_doc: "pymupdf.Document | None" = None


def _init_worker(pdf_path: str) -> None:
    global _worker_doc
    _worker_doc = pymupdf.open(pdf_path)


def _worker_func(args: Tuple[int, TableSettings]) -> Tuple[int, PageTable]:
    pno, settings = args
    if _worker_doc is None:
        raise RuntimeError("Worker document not initialized.")
    return pno, extract_page(_worker_doc[pno], settings)


def _keep(result: PageTable, keep_empty: bool) -> bool:
    return keep_empty or (not result.is_empty and result.run_count > 0)


def extract_tables(
    pdf_path: str | Path,
    *,
    pages: Optional[Tuple[int, int]] = None,
    settings: TableSettings | None = None,
    keep_empty: bool = False,
) -> List[PageTable]:
    """Reconstruct the table of every page of ``pdf_path``.

    Pages without cells or without any text are dropped unless
    ``keep_empty`` is set. Results are always in page order.
    """
    settings = settings or TableSettings()
    if settings.verbose:
        set_verbose(True)

    doc = _open(pdf_path)
    try:
        page_numbers = _page_range(doc.page_count, pages)
        total = len(page_numbers)
        results: List[Tuple[int, PageTable]] = []

        if settings.max_workers > 1 and total > 1:
            logger.info(
                f"Processing {total} pages with {settings.max_workers} workers"
            )
            # the callback is not picklable; workers get a copy without it
            worker_settings = replace(settings, progress_callback=None)
            with concurrent.futures.ProcessPoolExecutor(
                max_workers=settings.max_workers,
                initializer=_init_worker,
                initargs=(str(doc.name),),
            ) as executor:
                futures = [
                    executor.submit(_worker_func, (pno, worker_settings))
                    for pno in page_numbers
                ]
                for done, future in enumerate(
                    concurrent.futures.as_completed(futures), start=1
                ):
                    try:
                        results.append(future.result())
                    except Exception as exc:
                        raise ExtractionError(f"Page extraction failed: {exc}") from exc
                    if settings.progress_callback:
                        settings.progress_callback(done, total)
        else:
            for done, pno in enumerate(page_numbers, start=1):
                try:
                    results.append((pno, extract_page(doc[pno], settings)))
                except Exception as exc:
                    raise ExtractionError(
                        f"Page {pno} extraction failed: {exc}"
                    ) from exc
                if settings.progress_callback:
                    settings.progress_callback(done, total)
    finally:
        doc.close()

    # Sort results by page number to ensure order is always correct
    results.sort(key=lambda item: item[0])
    kept = [result for _, result in results if _keep(result, keep_empty)]
    logger.info(f"Found tables on {len(kept)} of {total} pages")
    return kept


def get_metadata(pdf_path: str | Path) -> Dict[str, Any]:
    """Return page count and first-page dimensions of ``pdf_path``."""
    doc = _open(pdf_path)
    try:
        first = doc[0].rect if doc.page_count else pymupdf.Rect()
        return {
            "page_count": doc.page_count,
            "width": float(first.width),
            "height": float(first.height),
        }
    finally:
        doc.close()


__all__ = [
    "ExtractionError",
    "extract_page",
    "extract_page_table",
    "extract_tables",
    "get_metadata",
]
