#!/usr/bin/env python3
"""
Benchmark every selection x crossover combination of the team optimizer.

Usage:
    python benchmark_ga.py                         # 3 runs per combination
    python benchmark_ga.py --runs 10 --seed 1      # Reproducible sweep
    python benchmark_ga.py --selection rank --crossover uniform two_point
    python benchmark_ga.py --csv outputs/benchmark.csv --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from config.settings_schema import load_validated_settings
from core.exceptions import OptimizerError
from evolution.benchmark import BenchmarkConfig, run_benchmark, summarize_benchmark
from evolution.optimizer import CROSSOVER_STRATEGIES, SELECTION_STRATEGIES, load_catalog


def main():
    parser = argparse.ArgumentParser(
        description='Compare selection and crossover strategies of the team optimizer'
    )
    parser.add_argument('--runs', type=int, default=3, help='Runs per combination (default: 3)')
    parser.add_argument('--population-size', type=int, default=200, help='Teams per generation (default: 200)')
    parser.add_argument('--max-iterations', type=int, default=40, help='Maximum generations (default: 40)')
    parser.add_argument('--max-no-improvements', type=int, default=10, help='Early stop threshold (default: 10)')
    parser.add_argument('--seed', type=int, help='Base seed; run i uses seed + i')
    parser.add_argument(
        '--selection',
        nargs='+',
        choices=sorted(SELECTION_STRATEGIES),
        help='Selection strategies to include (default: all)'
    )
    parser.add_argument(
        '--crossover',
        nargs='+',
        choices=sorted(CROSSOVER_STRATEGIES),
        help='Crossover strategies to include (default: all)'
    )
    parser.add_argument('--config', type=str, help='Settings YAML for catalog and fitness weights')
    parser.add_argument('--csv', type=str, help='Write per-run results to this CSV')
    parser.add_argument('--json', action='store_true', help='Output summary as JSON')

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)

    config = BenchmarkConfig(
        population_size=args.population_size,
        max_iterations=args.max_iterations,
        max_no_improvements=args.max_no_improvements,
        repetitions=args.runs,
        seed=args.seed,
    )
    if args.selection:
        config.selections = args.selection
    if args.crossover:
        config.crossovers = args.crossover

    try:
        settings = load_validated_settings(args.config)
        catalog = load_catalog(settings.catalog)
        runs = run_benchmark(catalog, config, weights=settings.fitness)
    except OptimizerError as e:
        print(f"Benchmark failed: {e}", file=sys.stderr)
        sys.exit(1)

    if args.csv:
        csv_path = Path(args.csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        runs.to_csv(csv_path, index=False)
        print(f"Per-run results written to {csv_path}")

    summary = summarize_benchmark(runs)
    if args.json:
        print(json.dumps(summary.to_dict(orient='records'), indent=2))
    else:
        print(summary.to_string(index=False, float_format=lambda v: f"{v:.3f}"))


if __name__ == '__main__':
    main()
