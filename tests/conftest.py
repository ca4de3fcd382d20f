"""Shared pytest configuration."""

from __future__ import annotations

import pytest

from pymupdf_grid.utils import profiler


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "smoke: fast checks of the public surface")
    config.addinivalue_line("markers", "integration: end-to-end runs on real PDFs")
    config.addinivalue_line("markers", "requires_pdf: needs a generated PDF fixture")


@pytest.fixture(autouse=True)
def reset_profiler():
    """Keep stage timings from leaking between tests."""
    profiler.reset()
    yield
    profiler.reset()
