"""Result containers and memory-cell persistence."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clonalg.engine.clonalg import GenerationStats


def memory_cells_filename(index: int, antibody_size: int) -> str:
    """Return ``memoryCells<suffix>.json``; the suffix falls back to ``antibody_size``."""
    return f"memoryCells{index or antibody_size}.json"


def write_memory_cells(cells: list[str], path: str | Path) -> Path:
    """Write ``cells`` as a JSON array of strings and return the target path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(list(cells), handle)
    return target


def read_memory_cells(path: str | Path) -> list[str]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class ClonalgResults:
    """Final state of a run.

    ``memory_cells`` holds the exported sequences in memory order. ``history``
    has one entry per generation and ``output_path`` is ``None`` when nothing
    was persisted.
    """

    memory_cells: list[str]
    history: list[GenerationStats]
    summary: Mapping[str, object] = field(default_factory=dict)
    output_path: Path | None = None

    def export_json(self, path: str | Path) -> Path:
        return write_memory_cells(self.memory_cells, path)
