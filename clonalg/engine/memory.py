"""Memory cells: the bounded set of best antibodies seen during a run."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from clonalg.core.antibody import Antibody
from clonalg.engine.interfaces import DistanceMetric

_LOGGER = logging.getLogger(__name__)


class MemoryCells:
    """Ordered memory with first-fit replacement.

    Without an explicit ``capacity`` the first inserted batch fixes the size
    of the memory for the rest of the run. With a ``capacity`` the memory
    fills up to that size and only then starts replacing cells.

    Cells are stored as copies, so mutating an inserted antibody afterwards
    never changes the memory.
    """

    def __init__(self, metric: DistanceMetric, capacity: int | None = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self._metric = metric
        self._capacity = capacity
        self._cells: list[Antibody] = []

    @property
    def capacity(self) -> int | None:
        if self._capacity is not None:
            return self._capacity
        return len(self._cells) or None

    @property
    def cells(self) -> list[Antibody]:
        return list(self._cells)

    def insert(self, antibodies: list[Antibody] | None) -> None:
        """Insert candidates, replacing the first cell each one beats."""
        if not antibodies:
            return

        pending = list(antibodies)
        if self._capacity is None:
            if not self._cells:
                self._cells = [antibody.copy() for antibody in pending]
                return
        else:
            room = self._capacity - len(self._cells)
            if room > 0:
                self._cells.extend(antibody.copy() for antibody in pending[:room])
                pending = pending[room:]

        replaced = 0
        for antibody in pending:
            for position, cell in enumerate(self._cells):
                if self._metric.is_better_affinity(antibody.affinity, cell.affinity):
                    self._cells[position] = antibody.copy()
                    replaced += 1
                    break
        _LOGGER.debug("Memory replaced %d cell(s) from %d candidate(s)", replaced, len(pending))

    def export(self) -> list[str]:
        """Return the sequences of every non-empty cell as strings, in memory order."""
        return [cell.tokens for cell in self._cells if cell.sequence]

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Antibody]:
        return iter(self._cells)
