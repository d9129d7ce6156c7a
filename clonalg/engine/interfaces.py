"""Engine protocol surfaces (no implementations).

The clonal selection loop never scores sequences itself. Everything that
depends on the antigen corpus or on the meaning of an affinity value goes
through a :class:`DistanceMetric`:

- **sequence_space_size**: addressable length of the antigen space, used to
  pick a random alignment offset per antibody.
- **score**: affinity of a sequence aligned at ``offset``.
- **clone_rate** / **mutation_rate**: per-antibody rates derived from affinity
  and length. Clone counts are ``round(rate * length)``; mutation counts are
  ``floor(rate * length)``.
- **is_better_affinity** / **order**: the direction of "better". The engine
  only assumes that ``order`` returns the population best-first.
"""

from __future__ import annotations

from collections.abc import Sequence as SeqType
from typing import Protocol

from clonalg.core.antibody import Antibody


class DistanceMetric(Protocol):
    """Scores antibodies against the antigen corpus and ranks them."""

    def sequence_space_size(self) -> int:
        """Return the number of addressable antigen positions."""

    def score(self, sequence: SeqType[str], offset: int, length: int) -> float:
        """Return the affinity of ``sequence`` aligned at ``offset``."""

    def clone_rate(self, affinity: float | None, length: int) -> float:
        """Return the clone rate for an antibody."""

    def mutation_rate(self, affinity: float | None, length: int) -> float:
        """Return the mutation rate for an antibody."""

    def is_better_affinity(self, a: float | None, b: float | None) -> bool:
        """Return ``True`` when affinity ``a`` beats ``b``."""

    def order(self, population: list[Antibody]) -> list[Antibody]:
        """Return ``population`` ordered best-first without mutating it."""
