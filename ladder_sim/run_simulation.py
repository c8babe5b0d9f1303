"""
Ranked Ladder Season Simulator - command line entry point.
Simulates repeated seasons of a rank/pieces ladder and reports the rank distribution.

USAGE:
    python -m ladder_sim.run_simulation [--env-file .env] [--seed 42] [--seasons 12] [--output-dir output]

Parameters come from ladder_sim/config.py, overridden by LADDER_* environment
variables (or a .env file), overridden by the command line flags.
"""

import argparse
import dataclasses
import sys
import time
from typing import List, Optional

from ladder_sim.config import SimulationConfig
from ladder_sim.report_sinks import build_sinks
from ladder_sim.season import SeasonSimulator


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate seasons of a competitive ranked ladder.")
    parser.add_argument("--env-file", help="Path to a .env file with LADDER_* overrides")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    parser.add_argument("--seasons", type=int, help="Number of seasons to simulate")
    parser.add_argument("--output-dir", help="Directory for CSV/JSON season reports")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> SimulationConfig:
    """Environment config with command line overrides applied."""
    config = SimulationConfig.from_env(args.env_file)

    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.seasons is not None:
        overrides["seasons"] = args.seasons
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if config.seed is None and "seed" not in overrides:
        overrides["seed"] = time.time_ns()

    return dataclasses.replace(config, **overrides)


def run_simulation(config: SimulationConfig) -> SeasonSimulator:
    print(f"Playing {config.seasons} season(s), adding {config.players_per_season} players each season "
          f"with an average {config.games_per_season // 2} games played per season.")
    print(f"Seed: {config.seed}  Skill mode: {config.skill_mode}  Derank: {config.derank}")

    simulator = SeasonSimulator(config, sinks=build_sinks(config))
    simulator.run()

    print(f"Simulated {simulator.matches_played} matches across {len(simulator.pool)} players "
          f"({simulator.ragequits} ragequits)")
    return simulator


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = load_config(parse_args(argv))
        run_simulation(config)
        print("\nSimulation complete!")
        return 0
    except Exception as e:
        print(f"\nSimulation failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
