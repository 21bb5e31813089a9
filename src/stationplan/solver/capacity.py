"""
Capacity Analysis
=================
Compare the staffing demand of a period with what the team can supply.
"""
import math
from dataclasses import dataclass
from typing import Dict, Sequence

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station, active_stations
from stationplan.models.rules import RULES
from stationplan.models.schedule import TimeSlot
from stationplan.solver.slots import generate_time_slots


@dataclass
class CapacityAnalysis:
    """Results of capacity analysis."""

    total_slots: int                # (date, shift) slots in the period
    station_count: int              # Active stations
    person_count: int

    total_assignments_needed: int   # slots × stations × target staffing
    max_possible_assignments: int   # persons × slots (one station per slot)

    min_per_person: int             # floor(needed / persons)
    max_per_person: int             # ceil(needed / persons)

    @property
    def is_feasible(self) -> bool:
        return self.total_assignments_needed <= self.max_possible_assignments

    @property
    def deficit(self) -> int:
        """Assignments that cannot be covered even in theory."""
        return max(0, self.total_assignments_needed - self.max_possible_assignments)


def capacity_from_slots(
    slots: Sequence[TimeSlot],
    persons: Sequence[Person],
    stations: Sequence[Station],
    target_staffing: int = RULES.target_staffing,
) -> CapacityAnalysis:
    """
    Analyze capacity for already generated slots.

    Args:
        slots: Slots of the period
        persons: Team members
        stations: Stations taking part (inactive ones are ignored)
        target_staffing: People per station and slot
    """
    n_slots = len(slots)
    n_stations = len(active_stations(stations))
    n_people = len(persons)

    needed = n_slots * n_stations * target_staffing
    possible = n_people * n_slots

    return CapacityAnalysis(
        total_slots=n_slots,
        station_count=n_stations,
        person_count=n_people,
        total_assignments_needed=needed,
        max_possible_assignments=possible,
        min_per_person=needed // n_people if n_people else 0,
        max_per_person=math.ceil(needed / n_people) if n_people else 0,
    )


def analyze_capacity(
    persons: Sequence[Person],
    stations: Sequence[Station],
    config: ScheduleConfig,
    target_staffing: int = RULES.target_staffing,
) -> CapacityAnalysis:
    """
    Analyze team capacity vs. requirements for a schedule period.

    Raises:
        CalendarError: if the period is invalid
    """
    slots = generate_time_slots(config)
    return capacity_from_slots(slots, persons, stations, target_staffing)


def capacity_to_dict(analysis: CapacityAnalysis) -> Dict:
    """Convert analysis to dict for export."""
    return {
        "total_slots": analysis.total_slots,
        "station_count": analysis.station_count,
        "person_count": analysis.person_count,
        "total_assignments_needed": analysis.total_assignments_needed,
        "max_possible_assignments": analysis.max_possible_assignments,
        "min_per_person": analysis.min_per_person,
        "max_per_person": analysis.max_per_person,
        "is_feasible": analysis.is_feasible,
    }
