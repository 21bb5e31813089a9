"""
Fairness Evaluation
===================
Counts assignments per person and station and scores how evenly the load is
spread.

The score decays exponentially with the variance of per-person counts
around the ideal average:

    ideal    = total / persons
    variance = mean((count - ideal)²)
    score    = clamp(exp(-variance / ideal), 0, 1)
"""
import math
from typing import Iterable, Optional

from stationplan.models.person import Person, Station
from stationplan.models.schedule import Assignment, FairnessMetrics
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.solver.fairness")


def fairness_score(counts: Iterable[int]) -> float:
    """Score a list of per-person assignment counts (1 = perfectly even)."""
    values = list(counts)
    total = sum(values)
    if total == 0 or not values:
        return 1.0
    if max(values) - min(values) == 0:
        return 1.0

    ideal = total / len(values)
    variance = sum((c - ideal) ** 2 for c in values) / len(values)
    return min(1.0, max(0.0, math.exp(-variance / ideal)))


def calculate_fairness(
    assignments: Iterable[Assignment],
    persons: Iterable[Person],
    stations: Optional[Iterable[Station]] = None,
) -> FairnessMetrics:
    """
    Calculate fairness metrics for a set of assignments.

    Every known person and station starts at zero so unassigned ones still
    appear in the maps.

    Args:
        assignments: Assignments to evaluate
        persons: All persons of the run
        stations: All stations of the run

    Returns:
        FairnessMetrics
    """
    per_person = {p.id: 0 for p in persons}
    per_station = {s.id: 0 for s in (stations or [])}

    for a in assignments:
        per_person[a.person_id] = per_person.get(a.person_id, 0) + 1
        per_station[a.station_id] = per_station.get(a.station_id, 0) + 1

    counts = list(per_person.values())
    metrics = FairnessMetrics(
        assignments_per_person=per_person,
        assignments_per_station=per_station,
        min_assignments=min(counts) if counts else 0,
        max_assignments=max(counts) if counts else 0,
        fairness_score=fairness_score(counts),
    )

    logger.debug(
        f"Fairness: score={metrics.fairness_score:.3f}, "
        f"range={metrics.min_assignments}-{metrics.max_assignments}"
    )
    return metrics
