"""Shared test fixtures for ClonalgPR tests."""

import pytest

from clonalg.core.antibody import Antibody


class ConstantMetric:
    """Deterministic metric with fixed rates and stable ordering."""

    def __init__(
        self,
        *,
        space: int = 100,
        score: float = 1.0,
        clone_rate: float = 1.0,
        mutation_rate: float = 0.0,
    ) -> None:
        self.space = space
        self.fixed_score = score
        self.fixed_clone_rate = clone_rate
        self.fixed_mutation_rate = mutation_rate
        self.offsets: list[int] = []

    def sequence_space_size(self) -> int:
        return self.space

    def score(self, sequence, offset, length):
        self.offsets.append(offset)
        return self.fixed_score

    def clone_rate(self, affinity, length):
        return self.fixed_clone_rate

    def mutation_rate(self, affinity, length):
        return self.fixed_mutation_rate

    def is_better_affinity(self, a, b):
        return a > b

    def order(self, population):
        return list(population)


@pytest.fixture
def constant_metric():
    return ConstantMetric()


@pytest.fixture
def make_metric():
    return ConstantMetric


@pytest.fixture
def dna_alphabet():
    """DNA alphabet (ACGT)."""
    return "ACGT"


@pytest.fixture
def protein_alphabet():
    """Standard protein alphabet."""
    return "ACDEFGHIKLMNPQRSTVWY"


@pytest.fixture
def scored_antibodies():
    """Five antibodies with distinct affinities, in insertion order."""
    antibodies = []
    for affinity, tokens in [(0.5, "AAAA"), (0.1, "CCCC"), (0.9, "GGGG"), (0.3, "TTTT"), (0.7, "ACGT")]:
        antibody = Antibody.from_symbols(tokens)
        antibody.affinity = affinity
        antibodies.append(antibody)
    return antibodies


@pytest.fixture
def antigens():
    return [
        "ACGTACGTACGTACGTACGT",
        "ACGTTCGTACGAACGTACGT",
        "ACGAACGTACGTACCTACGT",
    ]
