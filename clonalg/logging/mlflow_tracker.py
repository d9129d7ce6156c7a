"""MLflow integration for experiment tracking and reproducibility.

Records run configuration, per-generation statistics and the final memory
cells so runs with different seeds or metrics can be compared.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

import mlflow

from clonalg.core.results import ClonalgResults
from clonalg.engine.clonalg import ClonalgConfig, GenerationStats


class MLflowTracker:
    """Track clonal selection runs with MLflow.

    Parameters
    ----------
    experiment_name : str
        Name of the MLflow experiment.
    tracking_uri : str | None
        MLflow tracking server URI (default: local filesystem).
    """

    def __init__(
        self,
        experiment_name: str = "clonalg",
        tracking_uri: str | None = None,
    ) -> None:
        self.experiment_name = experiment_name
        self.tracking_uri = tracking_uri or "./mlruns"

        mlflow.set_tracking_uri(self.tracking_uri)

        try:
            self.experiment_id = mlflow.create_experiment(experiment_name)
        except mlflow.exceptions.MlflowException:
            # Experiment already exists
            experiment = mlflow.get_experiment_by_name(experiment_name)
            self.experiment_id = experiment.experiment_id

    def start_run(self, run_name: str | None = None) -> None:
        """Start a new MLflow run."""
        mlflow.set_experiment(self.experiment_name)
        mlflow.start_run(run_name=run_name)

    def end_run(self) -> None:
        """End the current MLflow run."""
        mlflow.end_run()

    def log_config(self, config: ClonalgConfig) -> None:
        """Log run configuration as parameters.

        ``None`` values are logged as the string ``"None"``.
        """
        params = {key: str(value) if value is None else value for key, value in config.as_dict().items()}
        mlflow.log_params(params)

    def log_generation_stats(self, stats: GenerationStats) -> None:
        """Log one generation's statistics as metrics, stepped by generation."""
        metrics = {
            "population_size": stats.population_size,
            "clones": stats.clones,
            "selected": stats.selected,
            "best": stats.best,
            "mean": stats.mean,
            "std": stats.std,
            "memory_size": stats.memory_size,
        }
        mlflow.log_metrics(metrics, step=stats.generation)

    def log_results(self, results: ClonalgResults) -> None:
        """Log final results: summary values and the memory cells artifact."""
        for key, value in (results.summary or {}).items():
            if isinstance(value, bool):
                mlflow.log_param(f"summary_{key}", str(value))
            elif isinstance(value, (int, float)):
                mlflow.log_metric(f"summary_{key}", value)
            else:
                mlflow.log_param(f"summary_{key}", str(value))

        self.log_artifact_json({"memory_cells": results.memory_cells}, filename="memory_cells.json")
        if results.output_path is not None:
            self.log_artifact_file(results.output_path)

    def log_artifact_json(self, data: dict[str, Any], filename: str = "results.json") -> None:
        """Log a dictionary as a JSON artifact."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / filename
            with open(path, "w") as f:
                json.dump(data, f, indent=2)
            mlflow.log_artifact(str(path))

    def log_artifact_file(self, filepath: Path | str) -> None:
        """Log a file as an artifact."""
        mlflow.log_artifact(str(filepath))
