"""Running record of the assignments made during a pass."""
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from stationplan.models.schedule import Assignment, TimeSlot
from stationplan.models.shift import ShiftType


class AssignmentLedger:
    """
    Assignments made so far, indexed for the lookups the selector needs.

    Counts and bookings are derived from the recorded assignments only, so a
    ledger built from a list is equivalent to one filled incrementally.
    """

    def __init__(self, assignments: Iterable[Assignment] = ()):
        self._assignments: List[Assignment] = []
        self._totals: Dict[str, int] = defaultdict(int)
        self._by_station: Dict[Tuple[str, str], int] = defaultdict(int)
        self._booked: Set[Tuple[str, ShiftType, str]] = set()
        self._per_slot: Dict[Tuple[str, ShiftType, str], int] = defaultdict(int)
        for a in assignments:
            self.record(a)

    def record(self, assignment: Assignment) -> None:
        self._assignments.append(assignment)
        self._totals[assignment.person_id] += 1
        self._by_station[(assignment.person_id, assignment.station_id)] += 1
        self._booked.add((assignment.date, assignment.shift, assignment.person_id))
        self._per_slot[(assignment.date, assignment.shift, assignment.station_id)] += 1

    def total_for(self, person_id: str) -> int:
        return self._totals.get(person_id, 0)

    def station_count_for(self, person_id: str, station_id: str) -> int:
        return self._by_station.get((person_id, station_id), 0)

    def holds(self, person_id: str, slot: TimeSlot) -> bool:
        """True if the person already works this (date, shift) anywhere."""
        return (slot.iso_date, slot.shift, person_id) in self._booked

    def staffed(self, slot: TimeSlot, station_id: str) -> int:
        return self._per_slot.get((slot.iso_date, slot.shift, station_id), 0)

    @property
    def assignments(self) -> List[Assignment]:
        return list(self._assignments)

    def __len__(self) -> int:
        return len(self._assignments)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self._assignments)
