"""ClonalgPR public interface.

Run the clonal selection loop through :class:`clonalg.engine.ClonalgPR` with a
:class:`clonalg.engine.DistanceMetric`. A reference metric lives under
``clonalg.measures``.
"""

from __future__ import annotations

from .core import Antibody, BioSequenceType, ClonalgResults
from .engine import ClonalgConfig, ClonalgPR, DistanceMetric

__all__ = [
    "Antibody",
    "BioSequenceType",
    "ClonalgConfig",
    "ClonalgPR",
    "ClonalgResults",
    "DistanceMetric",
]

__version__ = "0.1.0"
