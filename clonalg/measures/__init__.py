"""Distance metric registry surface.

Provides a small factory to obtain a metric by name.
"""

from __future__ import annotations

from typing import Final

from clonalg.engine.interfaces import DistanceMetric
from clonalg.measures.hamming import HammingAffinity

_REGISTRY: Final[dict[str, type]] = {
    "hamming": HammingAffinity,
}


def metric_from_name(name: str, **params: object) -> DistanceMetric:
    """Return a metric instance from the registry.

    Raises KeyError for unknown metrics.
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown metric: {name}. Available: {list(_REGISTRY.keys())}")
    return _REGISTRY[key](**params)


__all__ = ["HammingAffinity", "metric_from_name"]
