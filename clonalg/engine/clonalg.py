"""Clonal selection loop (CLONALG for pattern recognition).

Each generation scores the population, clones and hypermutates the best
antibodies, re-scores the clones, keeps the best of them in memory and
refreshes the weakest ones with random antibodies. After the last generation
the memory cells are exported as strings and written to disk.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from dataclasses import asdict, dataclass, replace
from pathlib import Path

import numpy as np

from clonalg.core.alphabets import BioSequenceType, parse_bio_sequence_type
from clonalg.core.antibody import Antibody
from clonalg.core.results import ClonalgResults, memory_cells_filename, write_memory_cells
from clonalg.engine import operators
from clonalg.engine.interfaces import DistanceMetric
from clonalg.engine.memory import MemoryCells

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClonalgConfig:
    """Settings for one run.

    ``index`` names the output file (``memoryCells<index>.json``); zero means
    the antibody size is used instead. ``memory_capacity`` of ``None`` lets
    the first inserted batch decide the memory size.
    ``maximum_iterations`` counts the initial population as the first
    iteration, so 0 and 1 both run no generations.
    """

    bio_sequence_type: BioSequenceType = BioSequenceType.DNA
    antibody_size: int = 20
    min_population: int = 50
    max_population: int = 100
    maximum_iterations: int = 100
    percent_high_affinity: float = 0.2
    percent_low_affinity: float = 0.1
    index: int = 0
    seed: int | None = None
    memory_capacity: int | None = None
    replacement_order: str = "ascending"
    output_dir: str = "."
    persist: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "bio_sequence_type", parse_bio_sequence_type(self.bio_sequence_type))
        if self.antibody_size <= 0:
            raise ValueError("antibody_size must be positive")
        if self.min_population <= 0:
            raise ValueError("min_population must be positive")
        if self.max_population < self.min_population:
            raise ValueError("max_population must be >= min_population")
        if self.maximum_iterations < 0:
            raise ValueError("maximum_iterations must be >= 0")
        for name in ("percent_high_affinity", "percent_low_affinity"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")
        if self.index < 0:
            raise ValueError("index must be >= 0")
        if self.memory_capacity is not None and self.memory_capacity <= 0:
            raise ValueError("memory_capacity must be positive")
        if self.replacement_order not in operators.REPLACEMENT_ORDERS:
            raise ValueError(
                f"Unknown replacement order: {self.replacement_order}. "
                f"Available: {list(operators.REPLACEMENT_ORDERS)}"
            )

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / memory_cells_filename(self.index, self.antibody_size)

    def as_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["bio_sequence_type"] = self.bio_sequence_type.value
        return data


@dataclass(frozen=True, slots=True)
class GenerationStats:
    """Numbers tracked for each generation.

    ``best``, ``mean`` and ``std`` describe the affinities of the clones kept
    after reselection. ``best`` follows the metric's ordering, so it is the
    lowest value for metrics where lower is better.
    """

    generation: int
    population_size: int
    clones: int
    selected: int
    best: float
    mean: float
    std: float
    memory_size: int


class ClonalgPR:
    """Drives the clonal selection loop.

    Compose a distance metric and a configuration. The random generator is
    built from ``config.seed`` unless one is supplied, and every operator
    draws from it.
    """

    def __init__(
        self,
        metric: DistanceMetric,
        config: ClonalgConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._metric = metric
        self._config = config or ClonalgConfig()
        self._rng = rng if rng is not None else random.Random(self._config.seed)
        self._memory = MemoryCells(metric, capacity=self._config.memory_capacity)
        self._memory_cells: list[str] = []
        self._results: ClonalgResults | None = None

    @property
    def config(self) -> ClonalgConfig:
        return self._config

    @property
    def memory(self) -> MemoryCells:
        return self._memory

    @property
    def memory_cells(self) -> list[str]:
        """Exported memory-cell sequences of the last run, in memory order."""
        return list(self._memory_cells)

    @property
    def results(self) -> ClonalgResults | None:
        return self._results

    def execute(
        self,
        maximum_iterations: int,
        percent_high_affinity: float,
        percent_low_affinity: float,
        index: int = 0,
    ) -> ClonalgResults:
        """Run with the given loop settings on top of the current configuration."""
        self._config = replace(
            self._config,
            maximum_iterations=maximum_iterations,
            percent_high_affinity=percent_high_affinity,
            percent_low_affinity=percent_low_affinity,
            index=index,
        )
        return self.run()

    def run(self) -> ClonalgResults:
        """Execute every generation, then export and persist the memory cells."""
        history = list(self.stream())
        self._memory_cells = self._memory.export()

        output_path = None
        if self._config.persist:
            output_path = self._save_memory_cells()

        summary: dict[str, object] = {
            "config": self._config.as_dict(),
            "generations_completed": len(history),
            "memory_size": len(self._memory),
            "exported_cells": len(self._memory_cells),
        }
        if history:
            summary["best_affinity"] = history[-1].best

        self._results = ClonalgResults(
            memory_cells=list(self._memory_cells),
            history=history,
            summary=summary,
            output_path=output_path,
        )
        return self._results

    def stream(self) -> Iterator[GenerationStats]:
        """Yield generation statistics as each generation completes."""
        cfg = self._config
        population = self._initialize()
        number_high_affinity = int(round(cfg.percent_high_affinity * len(population)))
        number_low_affinity = int(round(cfg.percent_low_affinity * len(population)))
        _LOGGER.info(
            "Starting run: population=%d high=%d low=%d generations=%d",
            len(population),
            number_high_affinity,
            number_low_affinity,
            max(cfg.maximum_iterations - 1, 0),
        )

        generation = 1
        while generation < cfg.maximum_iterations:
            population_size = len(population)
            operators.evaluate_affinity(self._rng, self._metric, population)
            selected = operators.select(self._metric, population, number_high_affinity)
            clones = operators.clone(self._metric, selected)
            mutated = operators.hypermutate(self._rng, self._metric, cfg.bio_sequence_type, clones)
            operators.evaluate_affinity(self._rng, self._metric, mutated)
            selected = operators.select(self._metric, mutated, number_high_affinity)
            self._memory.insert(selected)
            population = operators.replace(
                self._rng,
                self._metric,
                cfg.bio_sequence_type,
                cfg.antibody_size,
                selected,
                number_low_affinity,
                order=cfg.replacement_order,
            ) or []

            stats = self._generation_stats(generation, population_size, len(clones), selected)
            _LOGGER.debug(
                "Generation %d: clones=%d best=%.4f mean=%.4f memory=%d",
                stats.generation,
                stats.clones,
                stats.best,
                stats.mean,
                stats.memory_size,
            )
            yield stats
            generation += 1

    def _initialize(self) -> list[Antibody]:
        cfg = self._config
        return operators.initialize(
            self._rng,
            cfg.bio_sequence_type,
            cfg.antibody_size,
            cfg.min_population,
            cfg.max_population,
        )

    def _generation_stats(
        self,
        generation: int,
        population_size: int,
        clones: int,
        selected: list[Antibody],
    ) -> GenerationStats:
        affinities = np.array(
            [antibody.affinity for antibody in selected if antibody.affinity is not None],
            dtype=float,
        )
        if affinities.size:
            best = float(selected[0].affinity) if selected[0].affinity is not None else float("nan")
            mean = float(affinities.mean())
            std = float(affinities.std())
        else:
            best = mean = std = float("nan")
        return GenerationStats(
            generation=generation,
            population_size=population_size,
            clones=clones,
            selected=len(selected),
            best=best,
            mean=mean,
            std=std,
            memory_size=len(self._memory),
        )

    def _save_memory_cells(self) -> Path | None:
        if not self._memory_cells:
            _LOGGER.warning("No memory cells to save; skipping %s", self._config.output_path)
            return None
        path = write_memory_cells(self._memory_cells, self._config.output_path)
        _LOGGER.info("Saved %d memory cells to %s", len(self._memory_cells), path)
        return path

