"""
Centralized Person Statistics
==============================
Single source of truth for per-person statistics.
Used by the dashboard, the Excel export and the CLI summary.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from stationplan.models.person import Person, Station
from stationplan.models.schedule import Assignment
from stationplan.models.shift import ShiftType
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.solver.stats")


@dataclass
class PersonStats:
    """Statistics for a single person."""
    person_id: str
    name: str
    early: int      # Frühdienst shifts
    late: int       # Spätdienst shifts
    total: int
    by_station: Dict[str, int] = field(default_factory=dict)  # station id -> count


def calculate_person_stats(
    assignments: Iterable[Assignment],
    persons: Sequence[Person],
    stations: Sequence[Station] = (),
) -> List[PersonStats]:
    """
    Calculate statistics for all persons.

    Args:
        assignments: Schedule assignments
        persons: Team members
        stations: Stations to report on (zero-filled)

    Returns:
        List of PersonStats, one per person in input order
    """
    station_ids = [s.id for s in stations]
    stats = {
        p.id: PersonStats(
            person_id=p.id, name=p.name, early=0, late=0, total=0,
            by_station={sid: 0 for sid in station_ids},
        )
        for p in persons
    }

    for a in assignments:
        ps = stats.get(a.person_id)
        if ps is None:
            continue
        if a.shift is ShiftType.EARLY:
            ps.early += 1
        else:
            ps.late += 1
        ps.total += 1
        ps.by_station[a.station_id] = ps.by_station.get(a.station_id, 0) + 1

    logger.debug(f"Calculated stats for {len(stats)} persons")
    return list(stats.values())


def stats_to_dataframe(stats: List[PersonStats], stations: Sequence[Station] = ()) -> pd.DataFrame:
    """Convert stats to a DataFrame for display or export."""
    names = {s.id: s.name for s in stations}
    rows = []
    for s in stats:
        row = {
            "Name": s.name,
            "Frühdienst": s.early,
            "Spätdienst": s.late,
            "Gesamt": s.total,
        }
        for sid, count in s.by_station.items():
            row[names.get(sid, sid)] = count
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=["Name", "Frühdienst", "Spätdienst", "Gesamt"])
    return pd.DataFrame(rows)
