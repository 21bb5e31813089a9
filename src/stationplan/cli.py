from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

from stationplan.io.csv_loader import load_team
from stationplan.io.schedule_export import export_schedule_to_csv, export_schedule_to_excel
from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Station, default_stations
from stationplan.models.rules import RULES
from stationplan.models.validated import ValidatedScheduleConfig
from stationplan.solver.planner import generate
from stationplan.storage.mapping import MappingRepository
from stationplan.utils.logging_setup import setup_logging
from stationplan.utils.structured_logging import configure_structlog

EXIT_OK = 0
EXIT_UNSUCCESSFUL = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stationplan",
        description="Stationsplan: fair two-person station schedules",
    )
    p.add_argument("--team", required=True, help="Team CSV (Vorname;Nachname;...)")
    p.add_argument("--start", help="First day (YYYY-MM-DD, default: next Monday)")
    p.add_argument("--end", help="Last day, inclusive (default: Saturday after start)")
    p.add_argument("--include-start-morning", action="store_true",
                   help="Schedule the early shift on the start date")
    p.add_argument("--exclude-end-evening", action="store_true",
                   help="Skip the late shift on the end date")
    p.add_argument("--station", dest="stations", action="append", metavar="NAME",
                   help="Station name (repeatable, default: built-in stations)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible plans")
    p.add_argument("--passes", type=int, default=RULES.max_passes,
                   help=f"Maximum planning passes (default: {RULES.max_passes})")
    p.add_argument("--allow-understaffed", action="store_true",
                   help="Plan even when the team is too small to staff every station")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON summary output")
    p.add_argument("--csv-out", help="Write the station matrix as CSV")
    p.add_argument("--xlsx-out", help="Write the station matrix and statistics as Excel")
    p.add_argument("--state", help="JSON file holding the saved session (read and updated)")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--json-logs", action="store_true", help="Structured events as JSON")
    p.add_argument("--log-file", default=None, help="Rotating log file (default: none)")
    return p


def _build_config(args: argparse.Namespace) -> ScheduleConfig:
    """Period from the arguments; missing bounds follow ScheduleConfig.default()."""
    default = ScheduleConfig.default()
    start = date.fromisoformat(args.start) if args.start else default.start_date
    if args.end:
        end = args.end
    elif args.start:
        end = start + timedelta(days=5)
    else:
        end = default.end_date
    return ValidatedScheduleConfig(
        start_date=start,
        end_date=end,
        include_start_morning=args.include_start_morning,
        include_end_evening=not args.exclude_end_evening,
    ).to_dataclass()


def _build_stations(names: Optional[List[str]]) -> List[Station]:
    if not names:
        return default_stations()
    return [Station(id=str(i), name=name) for i, name in enumerate(names, start=1)]


def _load_state(path: Optional[str]) -> Dict[str, Any]:
    if not path or not Path(path).exists():
        return {}
    store = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(store, dict):
        raise ValueError("expected a JSON object")
    return store


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    level = "DEBUG" if args.verbose > 1 else "INFO" if args.verbose else "WARNING"
    setup_logging(level=level, log_file=args.log_file, stream=sys.stderr)
    configure_structlog(
        json_output=args.json_logs,
        level=getattr(logging, level),
        stream=sys.stderr,
    )

    try:
        config = _build_config(args)
    except ValueError as e:  # includes pydantic ValidationError
        print(f"Invalid period: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        team = load_team(args.team)
    except (OSError, ValueError) as e:
        print(f"Cannot read team file: {e}", file=sys.stderr)
        return EXIT_USAGE
    for error in team.errors:
        print(f"Team import: {error}", file=sys.stderr)
    if not team.people:
        print("Team file contains no persons", file=sys.stderr)
        return EXIT_USAGE

    try:
        store = _load_state(args.state)
    except (OSError, ValueError) as e:  # includes JSONDecodeError
        print(f"Cannot read state file: {e}", file=sys.stderr)
        return EXIT_USAGE

    stations = _build_stations(args.stations)
    result = generate(
        team.people,
        stations,
        config,
        seed=args.seed,
        max_passes=args.passes,
        enforce_capacity=not args.allow_understaffed,
    )

    if args.state:
        repo = MappingRepository(store)
        repo.save_persons(team.people)
        repo.save_stations(stations)
        repo.save_schedule_config(config)
        repo.save_assignments(result.assignments)
        repo.save_fairness_metrics(result.fairness)
        Path(args.state).write_text(json.dumps(store, ensure_ascii=False, indent=2), encoding="utf-8")

    if result.assignments:
        if args.csv_out:
            export_schedule_to_csv(result.assignments, team.people, stations, args.csv_out)
        if args.xlsx_out:
            export_schedule_to_excel(result.assignments, team.people, stations, args.xlsx_out)

    if args.json_out:
        print(json.dumps(
            {"summary": result.summary(), "diagnostics": result.diagnostics},
            ensure_ascii=False,
            indent=2,
        ))
    else:
        print("Summary:")
        for k, v in result.summary().items():
            print(f" - {k}: {v}")
        for message in result.diagnostics:
            print(f" ! {message}")

    return EXIT_OK if result.success else EXIT_UNSUCCESSFUL


if __name__ == "__main__":
    raise SystemExit(main())
