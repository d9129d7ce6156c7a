"""Logging setup for the ``clonalg`` logger tree.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers. Entry points call :func:`configure_logging` once; every
``clonalg.*`` logger propagates to the single handler installed there.
"""

from __future__ import annotations

import logging
from typing import Final, TextIO

_ROOT_NAME: Final = "clonalg"
_HANDLER_NAME: Final = "clonalg-console"
_FORMAT: Final = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return resolved


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Install the console handler on the ``clonalg`` logger and set its level.

    Calling it again only updates the level, or swaps the stream when one is
    given.
    """
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(_resolve_level(level))

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is not None and stream is not None:
        root.removeHandler(handler)
        handler = None
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    return root


def get_logger(component: str | None = None) -> logging.Logger:
    """Return ``clonalg`` or the ``clonalg.<component>`` child logger."""
    return logging.getLogger(f"{_ROOT_NAME}.{component}" if component else _ROOT_NAME)
