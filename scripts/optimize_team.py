#!/usr/bin/env python3
"""
Evolve a Pokemon team with the genetic optimizer.

Loads settings (config/base.yaml or TEAMFORGE_CONFIG_PATH), loads the
catalog, runs one optimization and prints the best team and the run log.

Usage:
    python optimize_team.py                              # Defaults from base.yaml
    python optimize_team.py --selection tournament --crossover two_point
    python optimize_team.py --seed 42 --max-iterations 80 --json
    python optimize_team.py --pokedex data/my_dex.csv --event-log logs/ga.jsonl
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from config.settings_schema import load_validated_settings
from core.exceptions import OptimizerError
from core.structured_log import configure_event_log
from evolution.optimizer import OptimizationResult, load_catalog, optimize_team


def format_result(result: OptimizationResult, show_log: bool = True) -> str:
    """Human-readable summary of an optimization."""
    lines = [
        "=" * 60,
        f"BEST TEAM  fitness={result.fitness:.2f}  generations={result.iterations}",
        f"selection={result.selection}  crossover={result.crossover}",
        "=" * 60,
    ]
    for pokemon in result.team:
        types = "/".join(t.name for t in pokemon.types)
        lines.append(
            f"  #{pokemon.number:<5} {pokemon.name:<20} {types:<18} "
            f"total={pokemon.total:<4} {pokemon.rarity.name}"
        )
    if show_log:
        lines.append("")
        lines.extend(result.log)
    return "\n".join(lines)


def _collect_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides = {
        'selection': args.selection,
        'crossover': args.crossover,
        'max_iterations': args.max_iterations,
        'max_no_improvements': args.max_no_improvements,
        'population_size': args.population_size,
        'team_size': args.team_size,
        'seed': args.seed,
    }
    return {key: value for key, value in overrides.items() if value is not None}


def main():
    parser = argparse.ArgumentParser(
        description='Evolve a Pokemon team with a genetic algorithm'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to a settings YAML (default: config/base.yaml)'
    )
    parser.add_argument(
        '--pokedex',
        type=str,
        help='Pokedex CSV/JSON file (default: bundled sample)'
    )
    parser.add_argument(
        '--type-chart',
        type=str,
        help='Type effectiveness JSON (default: bundled chart)'
    )
    parser.add_argument(
        '--selection',
        choices=['roulette', 'rank', 'tournament'],
        help='Selection strategy'
    )
    parser.add_argument(
        '--crossover',
        choices=['uniform', 'single_point', 'two_point'],
        help='Crossover strategy'
    )
    parser.add_argument('--max-iterations', type=int, help='Maximum generations')
    parser.add_argument('--max-no-improvements', type=int, help='Early stop threshold (0 disables)')
    parser.add_argument('--population-size', type=int, help='Teams per initial generation')
    parser.add_argument('--team-size', type=int, help='Pokemon per team')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument(
        '--event-log',
        type=str,
        help='Write structured JSON events to this file'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Omit the per-generation log'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    if args.event_log:
        configure_event_log(args.event_log)

    try:
        settings = load_validated_settings(args.config)
        catalog_config = settings.catalog.model_copy(update={
            key: value for key, value in {
                'pokedex_path': args.pokedex,
                'type_chart_path': args.type_chart,
            }.items() if value is not None
        })
        catalog = load_catalog(catalog_config)
        result = optimize_team(catalog=catalog, settings=settings, **_collect_overrides(args))
    except OptimizerError as e:
        print(f"Optimization failed: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        output = result.to_dict()
        if args.quiet:
            output.pop('log', None)
        print(json.dumps(output, indent=2))
    else:
        print(format_result(result, show_log=not args.quiet))


if __name__ == '__main__':
    main()
