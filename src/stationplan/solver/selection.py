"""
Candidate Selection
===================
Ranks eligible persons for a (slot, station) pair by current load.

Score = total_load_weight × total assignments
      + station_load_weight × assignments at this station
Lower is better. Ties are broken by shuffling with the injected random
source so insertion order never decides who gets picked.
"""
from itertools import groupby
from typing import Dict, List, Sequence

from stationplan.models.person import Person
from stationplan.models.rules import RULES
from stationplan.models.schedule import TimeSlot
from stationplan.solver.availability import eligible_persons
from stationplan.solver.ledger import AssignmentLedger
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.solver.selection")


class CandidateSelector:
    """Picks the least loaded eligible persons for a station slot."""

    def __init__(
        self,
        persons: Sequence[Person],
        rng,
        total_weight: int = RULES.total_load_weight,
        station_weight: int = RULES.station_load_weight,
    ):
        self.persons = list(persons)
        self.rng = rng
        self.total_weight = total_weight
        self.station_weight = station_weight

    def score(self, person: Person, station_id: str, ledger: AssignmentLedger) -> int:
        return (
            self.total_weight * ledger.total_for(person.id)
            + self.station_weight * ledger.station_count_for(person.id, station_id)
        )

    def rank(self, slot: TimeSlot, station_id: str, ledger: AssignmentLedger) -> Dict[int, List[Person]]:
        """Eligible persons grouped by score, best score first."""
        scored = sorted(
            ((self.score(p, station_id, ledger), p) for p in eligible_persons(self.persons, slot, ledger)),
            key=lambda item: item[0],
        )
        return {s: [p for _, p in group] for s, group in groupby(scored, key=lambda item: item[0])}

    def select_persons(
        self,
        slot: TimeSlot,
        station_id: str,
        ledger: AssignmentLedger,
        target_count: int = RULES.target_staffing,
    ) -> List[Person]:
        """
        Select up to target_count persons for the station slot.

        Args:
            slot: Slot to staff
            station_id: Station to staff
            ledger: Assignments made so far
            target_count: People wanted

        Returns:
            Selected persons (fewer than target_count if not enough are
            eligible, empty if none are)
        """
        selected: List[Person] = []
        for score, group in self.rank(slot, station_id, ledger).items():
            if len(selected) >= target_count:
                break
            tier = list(group)
            self.rng.shuffle(tier)
            selected.extend(tier[:target_count - len(selected)])
            logger.debug(f"{slot!r} @ {station_id}: tier score={score} size={len(tier)}")

        return selected
