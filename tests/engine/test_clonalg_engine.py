import json
import math
import random

import pytest

from clonalg.core.alphabets import DNA
from clonalg.engine import AntigenSpaceError, ClonalgConfig, ClonalgPR, GenerationStats
from clonalg.measures import HammingAffinity


def _scenario_config(tmp_path, **overrides) -> ClonalgConfig:
    params = dict(
        bio_sequence_type="dna",
        antibody_size=10,
        min_population=5,
        max_population=5,
        maximum_iterations=2,
        percent_high_affinity=0.4,
        percent_low_affinity=0.2,
        seed=123,
        output_dir=str(tmp_path),
    )
    params.update(overrides)
    return ClonalgConfig(**params)


class TestClonalgEndToEnd:
    def test_single_generation_scenario(self, tmp_path, constant_metric):
        algorithm = ClonalgPR(constant_metric, _scenario_config(tmp_path))
        results = algorithm.run()

        assert len(results.history) == 1
        assert len(algorithm.memory) == 2
        assert len(results.memory_cells) == 2
        assert algorithm.memory_cells == results.memory_cells
        for cell in results.memory_cells:
            assert len(cell) == 10
            assert set(cell) <= set(DNA)

        stats = results.history[0]
        assert isinstance(stats, GenerationStats)
        assert stats.generation == 1
        assert stats.population_size == 5
        # two selected antibodies, round(1.0 * 10) clones each
        assert stats.clones == 20
        assert stats.selected == 2
        assert stats.best == 1.0
        assert stats.memory_size == 2

        assert results.output_path == tmp_path / "memoryCells10.json"
        assert json.loads(results.output_path.read_text()) == results.memory_cells

    def test_execute_uses_index_for_filename(self, tmp_path, constant_metric):
        algorithm = ClonalgPR(constant_metric, _scenario_config(tmp_path))
        results = algorithm.execute(2, 0.4, 0.2, index=7)
        assert results.output_path == tmp_path / "memoryCells7.json"
        assert algorithm.config.index == 7

    def test_one_iteration_runs_no_generations(self, tmp_path, constant_metric):
        algorithm = ClonalgPR(constant_metric, _scenario_config(tmp_path, maximum_iterations=1))
        results = algorithm.run()
        assert results.history == []
        assert results.memory_cells == []
        assert results.output_path is None
        assert not (tmp_path / "memoryCells10.json").exists()

    @pytest.mark.parametrize("iterations", [0, 1])
    def test_zero_or_one_iteration_runs_no_generations(self, tmp_path, constant_metric, iterations):
        config = _scenario_config(tmp_path, maximum_iterations=iterations, persist=False)
        results = ClonalgPR(constant_metric, config).run()
        assert results.history == []
        assert results.summary["generations_completed"] == 0

    def test_unwritable_output_dir_is_fatal(self, tmp_path, constant_metric):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        config = _scenario_config(tmp_path, output_dir=str(blocker / "sub"))
        algorithm = ClonalgPR(constant_metric, config)
        with pytest.raises(OSError):
            algorithm.run()

    def test_generation_count(self, tmp_path, constant_metric):
        algorithm = ClonalgPR(constant_metric, _scenario_config(tmp_path, maximum_iterations=5))
        stats = list(algorithm.stream())
        assert [s.generation for s in stats] == [1, 2, 3, 4]

    def test_persist_disabled(self, tmp_path, constant_metric):
        algorithm = ClonalgPR(constant_metric, _scenario_config(tmp_path, persist=False))
        results = algorithm.run()
        assert results.output_path is None
        assert list(tmp_path.iterdir()) == []
        assert len(results.memory_cells) == 2

    def test_same_seed_is_reproducible(self, tmp_path, antigens):
        config = _scenario_config(tmp_path, maximum_iterations=6, min_population=8, max_population=12, persist=False)
        first = ClonalgPR(HammingAffinity(antigens), config).run()
        second = ClonalgPR(HammingAffinity(antigens), config).run()
        assert first.memory_cells == second.memory_cells
        assert [s.best for s in first.history] == [s.best for s in second.history]

    def test_injected_rng(self, tmp_path, constant_metric):
        config = _scenario_config(tmp_path, persist=False)
        first = ClonalgPR(constant_metric, config, rng=random.Random(42)).run()
        second = ClonalgPR(constant_metric, config, rng=random.Random(42)).run()
        assert first.memory_cells == second.memory_cells

    def test_memory_capacity_is_respected(self, tmp_path, antigens):
        config = _scenario_config(
            tmp_path,
            maximum_iterations=4,
            min_population=20,
            max_population=20,
            percent_high_affinity=0.5,
            memory_capacity=3,
            persist=False,
        )
        results = ClonalgPR(HammingAffinity(antigens), config).run()
        assert len(results.memory_cells) == 3

    def test_antigen_space_too_small(self, tmp_path, make_metric):
        algorithm = ClonalgPR(make_metric(space=4), _scenario_config(tmp_path))
        with pytest.raises(AntigenSpaceError):
            algorithm.run()

    def test_hamming_run_improves_or_keeps_memory(self, tmp_path, antigens):
        config = _scenario_config(
            tmp_path,
            maximum_iterations=10,
            min_population=20,
            max_population=20,
            percent_high_affinity=0.3,
            percent_low_affinity=0.1,
        )
        results = ClonalgPR(HammingAffinity(antigens, beta=1.0), config).run()
        assert len(results.history) == 9
        assert all(0.0 <= s.best <= 1.0 for s in results.history if not math.isnan(s.best))
        assert results.summary["generations_completed"] == 9
        assert results.summary["exported_cells"] == len(results.memory_cells)


class TestClonalgConfig:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"antibody_size": 0},
            {"min_population": 0},
            {"min_population": 10, "max_population": 5},
            {"maximum_iterations": -1},
            {"percent_high_affinity": 1.5},
            {"percent_low_affinity": -0.1},
            {"index": -1},
            {"memory_capacity": 0},
            {"replacement_order": "descending"},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            ClonalgConfig(**overrides)

    def test_bio_sequence_type_is_coerced(self):
        assert ClonalgConfig(bio_sequence_type="PROTEIN").bio_sequence_type.value == "protein"
        assert ClonalgConfig(bio_sequence_type="unknown").bio_sequence_type.value == "dna"

    def test_as_dict_is_serializable(self):
        data = ClonalgConfig(seed=3).as_dict()
        assert data["bio_sequence_type"] == "dna"
        assert data["seed"] == 3
        json.dumps(data)
