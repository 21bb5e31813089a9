"""
Availability
============
Decides whether a person may take a given slot.
"""
from typing import Iterable, List, Tuple

from stationplan.models.person import Person
from stationplan.models.schedule import TimeSlot
from stationplan.solver.ledger import AssignmentLedger


def eligibility_checks(person: Person, slot: TimeSlot, ledger: AssignmentLedger) -> List[Tuple[str, bool]]:
    """
    Evaluate every eligibility rule for a person and slot.

    Returns:
        (rule name, satisfied) pairs
    """
    iso = slot.iso_date
    return [
        ("shift_exclusion", not person.excludes(slot.shift)),
        ("available_dates", not person.available_dates or iso in person.available_dates),
        ("unavailable_dates", not person.unavailable_dates or iso not in person.unavailable_dates),
        ("no_double_booking", not ledger.holds(person.id, slot)),
    ]


def is_eligible(person: Person, slot: TimeSlot, ledger: AssignmentLedger) -> bool:
    """
    True if the person can be assigned to the slot.

    A person is ineligible when the slot's shift type is excluded, when a
    non-empty allow-list misses the slot date, when a non-empty deny-list
    contains it, or when they already work the same date and shift at any
    station.
    """
    return all(ok for _, ok in eligibility_checks(person, slot, ledger))


def eligible_persons(persons: Iterable[Person], slot: TimeSlot, ledger: AssignmentLedger) -> List[Person]:
    """Filter persons down to those eligible for the slot."""
    return [p for p in persons if is_eligible(p, slot, ledger)]
