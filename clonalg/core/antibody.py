"""Antibody data structure."""

from __future__ import annotations

from dataclasses import dataclass

from clonalg.core.alphabets import count_viable


@dataclass(slots=True)
class Antibody:
    """Candidate pattern evolved by the clonal selection loop.

    ``length`` is the number of non-gap symbols at creation time. Hypermutation
    rewrites ``sequence`` in place without touching ``length``, so rate
    formulas keep seeing the creation-time value. Use :attr:`viable_length`
    when the current non-gap count is needed.
    """

    sequence: list[str]
    length: int
    affinity: float | None = None

    @classmethod
    def from_symbols(cls, symbols) -> Antibody:
        sequence = list(symbols)
        return cls(sequence=sequence, length=count_viable(sequence))

    @property
    def viable_length(self) -> int:
        return count_viable(self.sequence)

    @property
    def tokens(self) -> str:
        return "".join(self.sequence)

    def clone(self) -> Antibody:
        """Copy sequence and length into a new antibody; affinity is left unset."""
        return Antibody(sequence=list(self.sequence), length=self.length)

    def copy(self) -> Antibody:
        return Antibody(sequence=list(self.sequence), length=self.length, affinity=self.affinity)

    def __len__(self) -> int:  # pragma: no cover - simple delegation
        return len(self.sequence)
