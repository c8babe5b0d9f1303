"""
Season report sinks.
Each sink receives the per-rank rows once per season via write_season_report().

I/O errors are not caught here: a season report that can't be written ends the run.
"""

import csv
import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TextIO

from ladder_sim.config import SimulationConfig
from ladder_sim.season_stats import CSV_HEADER, RankReport


class CsvReportSink:
    """Writes <label>_season<N>.csv into output_dir."""

    def __init__(self, output_dir: str, label: str):
        self.output_dir = output_dir
        self.label = label

    def path_for(self, season: int) -> str:
        return os.path.join(self.output_dir, f"{self.label}_season{season}.csv")

    def write_season_report(self, season: int, rows: List[RankReport]):
        os.makedirs(self.output_dir, exist_ok=True)
        with open(self.path_for(season), "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for row in rows:
                writer.writerow(row.as_csv_row())


class JsonReportSink:
    """Writes <label>_season<N>.json into output_dir."""

    def __init__(self, output_dir: str, label: str):
        self.output_dir = output_dir
        self.label = label

    def path_for(self, season: int) -> str:
        return os.path.join(self.output_dir, f"{self.label}_season{season}.json")

    def write_season_report(self, season: int, rows: List[RankReport]):
        report = {
            "season": season,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "player_count": sum(row.count for row in rows),
            "rows": [row.as_dict() for row in rows],
        }

        os.makedirs(self.output_dir, exist_ok=True)
        with open(self.path_for(season), "w") as f:
            json.dump(report, f, indent=2)


class ConsoleReportSink:
    """Prints the season rankings, one line per rank."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write_season_report(self, season: int, rows: List[RankReport]):
        out = self.stream or sys.stdout
        print(f"Season {season} Rankings:", file=out)
        for row in rows:
            if row.count == 0:
                print(f"Rank {row.rank}\tPlayers: 0\tGamesPlayed: 0\tSkill: n/a\tStdDev: n/a\tGamesToProgress: n/a", file=out)
                continue

            line = (f"Rank {row.rank}\tPlayers: {row.count}\tGamesPlayed: {row.mean_games_played:.1f}"
                    f"\tSkill: {row.mean_skill:.4f}\tStdDev: {row.std_dev_skill:.4f}")
            if row.mean_games_to_progress is not None:
                line += f"\tGamesToProgressPastRank: {row.mean_games_to_progress:.1f}"
            print(line, file=out)


def build_sinks(config: SimulationConfig) -> list:
    """Instantiate the sinks named in config.output_formats, in order."""
    sinks = []
    for fmt in config.output_formats:
        if fmt == "csv":
            sinks.append(CsvReportSink(config.output_dir, config.run_label))
        elif fmt == "json":
            sinks.append(JsonReportSink(config.output_dir, config.run_label))
        elif fmt == "console":
            sinks.append(ConsoleReportSink())
        else:
            raise ValueError(f"Unknown output format: {fmt}")
    return sinks


def load_csv_report(path: str) -> List[Dict[str, Any]]:
    """Read a CSV season report back. Blank cells become None."""
    rows = []
    with open(path, "r", newline="") as f:
        for record in csv.DictReader(f):
            row: Dict[str, Any] = {}
            for key, value in record.items():
                if value == "":
                    row[key] = None
                elif key in ("Rank", "Player Count"):
                    row[key] = int(value)
                else:
                    row[key] = float(value)
            rows.append(row)
    return rows
