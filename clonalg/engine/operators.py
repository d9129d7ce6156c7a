"""Clonal selection operators.

Every operator takes the shared ``random.Random`` explicitly so that a run is
reproducible from a single seed. Call order matters: each operator consumes
randomness in the order it visits antibodies.
"""

from __future__ import annotations

import logging
import math
import random

from clonalg.core.alphabets import BioSequenceType, alphabet_for
from clonalg.core.antibody import Antibody
from clonalg.engine.interfaces import DistanceMetric

_LOGGER = logging.getLogger(__name__)

REPLACEMENT_ORDERS = ("ascending", "metric")


class AntigenSpaceError(ValueError):
    """The antigen space is shorter than the antibodies aligned against it."""


def generate_symbol(rng: random.Random, kind: BioSequenceType | str) -> str:
    """Draw one symbol uniformly from the alphabet of ``kind``."""
    alphabet = alphabet_for(kind)
    return alphabet[rng.randrange(len(alphabet))]


def initialize(
    rng: random.Random,
    kind: BioSequenceType | str,
    antibody_size: int,
    min_population: int,
    max_population: int,
    amount: int = 0,
) -> list[Antibody]:
    """Build ``amount`` random antibodies of ``antibody_size`` symbols.

    When ``amount`` is zero the population size is drawn uniformly from
    ``[min_population, max_population]``.
    """
    if amount == 0:
        amount = rng.randint(min_population, max_population)

    antibodies: list[Antibody] = []
    for _ in range(amount):
        symbols = [generate_symbol(rng, kind) for _ in range(antibody_size)]
        antibodies.append(Antibody.from_symbols(symbols))
    return antibodies


def evaluate_affinity(rng: random.Random, metric: DistanceMetric, antibodies: list[Antibody]) -> None:
    """Score every antibody at a random offset of the antigen space, in place."""
    space = metric.sequence_space_size()
    for antibody in antibodies:
        length = len(antibody.sequence)
        if space < length:
            msg = f"Antigen space of {space} positions cannot hold an antibody of {length} symbols"
            raise AntigenSpaceError(msg)
        offset = rng.randint(0, space - length)
        antibody.affinity = metric.score(antibody.sequence, offset, length)


def clone(metric: DistanceMetric, antibodies: list[Antibody]) -> list[Antibody]:
    """Expand each antibody into ``round(clone_rate * length)`` independent clones."""
    clones: list[Antibody] = []
    for antibody in antibodies:
        rate = metric.clone_rate(antibody.affinity, antibody.length)
        amount = int(round(rate * antibody.length))
        clones.extend(antibody.clone() for _ in range(amount))
    return clones


def hypermutate(
    rng: random.Random,
    metric: DistanceMetric,
    kind: BioSequenceType | str,
    antibodies: list[Antibody],
) -> list[Antibody]:
    """Overwrite ``floor(length * mutation_rate)`` random positions of each antibody.

    Positions are drawn with replacement from ``[0, length)``. ``length`` and
    ``affinity`` are left untouched; the caller re-scores.
    """
    for antibody in antibodies:
        rate = metric.mutation_rate(antibody.affinity, antibody.length)
        amount = math.floor(antibody.length * rate)
        for _ in range(amount):
            position = rng.randrange(antibody.length)
            antibody.sequence[position] = generate_symbol(rng, kind)
    return antibodies


def select(metric: DistanceMetric, population: list[Antibody], amount: int) -> list[Antibody]:
    """Return the best ``amount`` antibodies according to ``metric.order``."""
    return list(metric.order(population))[: max(amount, 0)]


def replace(
    rng: random.Random,
    metric: DistanceMetric,
    kind: BioSequenceType | str,
    antibody_size: int,
    population: list[Antibody] | None,
    inferior_limit: int,
    *,
    order: str = "ascending",
) -> list[Antibody] | None:
    """Swap the ``inferior_limit`` worst antibodies for fresh random ones.

    ``order="ascending"`` treats the numerically lowest raw affinities as the
    worst, which only matches metrics where higher is better. ``order="metric"``
    drops the tail of ``metric.order`` instead.
    """
    if not population or inferior_limit <= 0:
        return population
    if order not in REPLACEMENT_ORDERS:
        msg = f"Unknown replacement order: {order}. Available: {list(REPLACEMENT_ORDERS)}"
        raise ValueError(msg)

    if order == "ascending":
        ranked = sorted(population, key=_raw_affinity)
    else:
        ranked = list(reversed(metric.order(population)))
    dropped = {id(antibody) for antibody in ranked[:inferior_limit]}

    survivors = [antibody for antibody in population if id(antibody) not in dropped]
    replaced = len(population) - len(survivors)
    if replaced:
        survivors.extend(initialize(rng, kind, antibody_size, 0, 0, amount=replaced))
    _LOGGER.debug("Replaced %d of %d antibodies", replaced, len(population))
    return survivors


def _raw_affinity(antibody: Antibody) -> float:
    # Unscored antibodies sort first so they are replaced before scored ones.
    return float("-inf") if antibody.affinity is None else antibody.affinity
