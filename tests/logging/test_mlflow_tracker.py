"""Tests for MLflow experiment tracking."""

import tempfile
from pathlib import Path

import mlflow

from clonalg.core.results import ClonalgResults
from clonalg.engine import ClonalgConfig, GenerationStats
from clonalg.logging import MLflowTracker


def _stats(generation: int = 1) -> GenerationStats:
    return GenerationStats(
        generation=generation,
        population_size=20,
        clones=40,
        selected=4,
        best=0.9,
        mean=0.7,
        std=0.1,
        memory_size=4,
    )


class TestMLflowTracker:
    """MLflow tracker tests."""

    def test_initialization(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tracker = MLflowTracker(
                experiment_name="test_exp",
                tracking_uri=str(Path(tmpdir) / "mlruns"),
            )
            assert tracker.experiment_name == "test_exp"
            assert tracker.experiment_id is not None

    def test_existing_experiment_is_reused(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            uri = str(Path(tmpdir) / "mlruns")
            first = MLflowTracker(experiment_name="shared", tracking_uri=uri)
            second = MLflowTracker(experiment_name="shared", tracking_uri=uri)
            assert first.experiment_id == second.experiment_id

    def test_log_config_and_stats(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tracker = MLflowTracker(
                experiment_name="test_exp",
                tracking_uri=str(Path(tmpdir) / "mlruns"),
            )
            tracker.start_run("test_run")
            tracker.log_config(ClonalgConfig(seed=42, antibody_size=12))
            tracker.log_generation_stats(_stats(1))
            tracker.log_generation_stats(_stats(2))
            run_id = mlflow.active_run().info.run_id
            tracker.end_run()

            run = mlflow.get_run(run_id)
            assert run.data.params["antibody_size"] == "12"
            assert run.data.params["memory_capacity"] == "None"
            assert run.data.metrics["best"] == 0.9

    def test_log_results(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tracker = MLflowTracker(
                experiment_name="test_exp",
                tracking_uri=str(Path(tmpdir) / "mlruns"),
            )
            output = Path(tmpdir) / "memoryCells10.json"
            output.write_text('["ACGT"]', encoding="utf-8")
            results = ClonalgResults(
                memory_cells=["ACGT"],
                history=[_stats()],
                summary={"generations_completed": 1, "memory_size": 1},
                output_path=output,
            )

            tracker.start_run("test_run")
            tracker.log_results(results)
            run_id = mlflow.active_run().info.run_id
            tracker.end_run()

            run = mlflow.get_run(run_id)
            assert run.data.metrics["summary_generations_completed"] == 1
