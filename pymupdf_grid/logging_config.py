"""Logger factory shared by every module of the package."""

from __future__ import annotations

import logging
import os

_PACKAGE_LOGGER = "pymupdf_grid"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        level = os.environ.get("PYMUPDF_GRID_LOG_LEVEL", "WARNING").upper()
        root.setLevel(getattr(logging, level, logging.WARNING))
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    root = _configure_root()
    if name == _PACKAGE_LOGGER or name.startswith(_PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def set_verbose(verbose: bool = True) -> None:
    """Switch the package logger between DEBUG and INFO."""
    _configure_root().setLevel(logging.DEBUG if verbose else logging.INFO)


__all__ = ["get_logger", "set_verbose"]
