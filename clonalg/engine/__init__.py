"""Clonal selection engine."""

from .clonalg import ClonalgConfig, ClonalgPR, GenerationStats
from .interfaces import DistanceMetric
from .memory import MemoryCells
from .operators import AntigenSpaceError

__all__ = [
    "AntigenSpaceError",
    "ClonalgConfig",
    "ClonalgPR",
    "DistanceMetric",
    "GenerationStats",
    "MemoryCells",
]
