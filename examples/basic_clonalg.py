"""Minimal clonal selection run against a handful of DNA antigens."""

from __future__ import annotations

from clonalg.engine import ClonalgConfig, ClonalgPR
from clonalg.measures import HammingAffinity
from clonalg.utils import configure_logging, ensure_antigens


def main() -> None:
    configure_logging("INFO")

    antigens = ensure_antigens(
        [
            "ACGTACGTTAGCACGTACGTTAGC",
            "ACGTACGATAGCACGTTCGTTAGC",
            "ACGAACGTTAGCACCTACGTTAGG",
        ]
    )
    metric = HammingAffinity(antigens, beta=1.0, rho=3.0)
    config = ClonalgConfig(
        antibody_size=12,
        min_population=30,
        max_population=60,
        maximum_iterations=50,
        percent_high_affinity=0.2,
        percent_low_affinity=0.1,
        seed=42,
        output_dir="output",
    )

    results = ClonalgPR(metric, config).run()

    for cell in results.memory_cells:
        print(cell)
    print(f"Best affinity in last generation: {results.summary.get('best_affinity')}")


if __name__ == "__main__":
    main()
