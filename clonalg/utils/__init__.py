"""Utility exports."""

from .logging import configure_logging, get_logger
from .validation import ensure_antigens

__all__ = ["configure_logging", "ensure_antigens", "get_logger"]
