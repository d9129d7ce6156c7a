"""Windowed Hamming similarity against a fixed antigen corpus."""

from __future__ import annotations

import math
from collections.abc import Sequence as SeqType
from dataclasses import dataclass, field

from clonalg.core.alphabets import GAPS
from clonalg.core.antibody import Antibody


@dataclass
class HammingAffinity:
    """Affinity = mean fraction of matching symbols over every antigen window.

    Scores live in ``[0, 1]`` and higher is better. Gap symbols never match.
    Clone rate grows linearly with affinity (``beta * affinity``) and mutation
    rate decays exponentially (``exp(-rho * affinity)``), so strong antibodies
    get more clones and fewer mutations.
    """

    antigens: list[str]
    beta: float = 0.5
    rho: float = 2.0
    _space: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.antigens:
            raise ValueError("antigens must be non-empty")
        if self.beta < 0:
            raise ValueError("beta must be >= 0")
        if self.rho < 0:
            raise ValueError("rho must be >= 0")
        self.antigens = [antigen.upper() for antigen in self.antigens]
        self._space = min(len(antigen) for antigen in self.antigens)

    def sequence_space_size(self) -> int:
        return self._space

    def score(self, sequence: SeqType[str], offset: int, length: int) -> float:
        if length <= 0:
            return 0.0
        total = 0.0
        for antigen in self.antigens:
            window = antigen[offset : offset + length]
            matches = sum(
                1
                for symbol, target in zip(sequence, window)
                if symbol == target and symbol not in GAPS
            )
            total += matches / length
        return total / len(self.antigens)

    def clone_rate(self, affinity: float | None, length: int) -> float:
        return self.beta * (affinity or 0.0)

    def mutation_rate(self, affinity: float | None, length: int) -> float:
        return math.exp(-self.rho * (affinity or 0.0))

    def is_better_affinity(self, a: float | None, b: float | None) -> bool:
        if a is None:
            return False
        if b is None:
            return True
        return a > b

    def order(self, population: list[Antibody]) -> list[Antibody]:
        # sorted() is stable; unscored antibodies go last.
        return sorted(
            population,
            key=lambda antibody: float("-inf") if antibody.affinity is None else antibody.affinity,
            reverse=True,
        )
