"""ClonalgPR command-line interface."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import yaml

from clonalg.engine import ClonalgConfig, ClonalgPR
from clonalg.logging import MLflowTracker
from clonalg.measures import metric_from_name
from clonalg.utils import configure_logging, ensure_antigens, get_logger

_LOGGER = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ClonalgPR CLI")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run a clonal selection search from a config file")
    run_parser.add_argument("config", help="Path to YAML/JSON config file")
    run_parser.add_argument("--seed", type=int, default=None, help="Override the configured seed")
    run_parser.add_argument("--output-dir", default=None, help="Override the output directory")
    run_parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for the clonalg loggers (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        configure_logging(args.log_level)
        overrides: dict[str, Any] = {}
        if args.seed is not None:
            overrides["seed"] = args.seed
        if args.output_dir is not None:
            overrides["output_dir"] = args.output_dir
        return _run_from_config(Path(args.config), overrides)

    parser.print_help()
    return 0


def _run_from_config(path: Path, overrides: dict[str, Any] | None = None) -> int:
    data = _load_config(path)

    config = _build_config({**data.get("clonalg", {}), **(overrides or {})})
    antigens = ensure_antigens(data.get("antigens", []), config.bio_sequence_type)
    metric = _build_metric(data.get("metric", {}), antigens)
    tracker = _build_tracker(data.get("tracking"))

    algorithm = ClonalgPR(metric, config)
    if tracker is None:
        results = algorithm.run()
    else:
        tracker.start_run(data.get("tracking", {}).get("run_name"))
        try:
            tracker.log_config(config)
            results = algorithm.run()
            for stats in results.history:
                tracker.log_generation_stats(stats)
            tracker.log_results(results)
        finally:
            tracker.end_run()

    for cell in results.memory_cells:
        print(cell)
    if results.output_path is not None:
        _LOGGER.info("Memory cells written to %s", results.output_path)
    print(json.dumps(results.summary, indent=2, default=str))
    return 0


def _load_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() in {".json"}:
        return json.loads(path.read_text())
    return yaml.safe_load(path.read_text()) or {}


def _build_config(cfg: dict[str, Any]) -> ClonalgConfig:
    known = set(ClonalgConfig.__dataclass_fields__)
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown clonalg settings: {unknown}")
    return ClonalgConfig(**cfg)


def _build_metric(cfg: dict[str, Any], antigens: list[str]) -> Any:
    name = cfg.get("name", "hamming")
    params = dict(cfg.get("params", {}))
    return metric_from_name(name, antigens=antigens, **params)


def _build_tracker(cfg: dict[str, Any] | None) -> MLflowTracker | None:
    if not cfg:
        return None
    return MLflowTracker(
        experiment_name=cfg.get("experiment_name", "clonalg"),
        tracking_uri=cfg.get("tracking_uri"),
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
