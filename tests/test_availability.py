"""Tests for the eligibility predicate and the assignment ledger."""
from datetime import date

import pytest

from stationplan.models.person import Person
from stationplan.models.schedule import Assignment, TimeSlot
from stationplan.models.shift import ShiftType
from stationplan.solver.availability import eligibility_checks, eligible_persons, is_eligible
from stationplan.solver.ledger import AssignmentLedger


def make_slot(day=date(2026, 1, 6), shift=ShiftType.EARLY):
    return TimeSlot(date=day, shift=shift, weekday="Tuesday", day_index=day.weekday(), week=0)


def booked(person_id, slot, station_id="1"):
    return Assignment(
        date=slot.iso_date, shift=slot.shift, weekday=slot.weekday,
        station_id=station_id, person_id=person_id,
    )


class TestIsEligible:
    """Tests for is_eligible."""

    def test_free_person_is_eligible(self):
        assert is_eligible(Person(id="a", name="A"), make_slot(), AssignmentLedger())

    @pytest.mark.parametrize("shift, flag", [
        (ShiftType.EARLY, "exclude_morning_shifts"),
        (ShiftType.LATE, "exclude_evening_shifts"),
    ])
    def test_shift_exclusion(self, shift, flag):
        person = Person(id="a", name="A", **{flag: True})
        assert not is_eligible(person, make_slot(shift=shift), AssignmentLedger())

    def test_exclusion_only_affects_its_shift(self):
        person = Person(id="a", name="A", exclude_morning_shifts=True)
        assert is_eligible(person, make_slot(shift=ShiftType.LATE), AssignmentLedger())

    def test_allow_list(self):
        person = Person(id="a", name="A", available_dates=["2026-01-06"])
        assert is_eligible(person, make_slot(date(2026, 1, 6)), AssignmentLedger())
        assert not is_eligible(person, make_slot(date(2026, 1, 7)), AssignmentLedger())

    def test_empty_allow_list_means_unrestricted(self):
        person = Person(id="a", name="A", available_dates=[])
        assert is_eligible(person, make_slot(), AssignmentLedger())

    def test_deny_list(self):
        person = Person(id="a", name="A", unavailable_dates=["2026-01-06"])
        assert not is_eligible(person, make_slot(date(2026, 1, 6)), AssignmentLedger())
        assert is_eligible(person, make_slot(date(2026, 1, 7)), AssignmentLedger())

    def test_no_double_booking_across_stations(self):
        slot = make_slot()
        ledger = AssignmentLedger([booked("a", slot, station_id="2")])
        assert not is_eligible(Person(id="a", name="A"), slot, ledger)

    def test_other_shift_same_day_is_fine(self):
        early = make_slot(shift=ShiftType.EARLY)
        ledger = AssignmentLedger([booked("a", early)])
        assert is_eligible(Person(id="a", name="A"), make_slot(shift=ShiftType.LATE), ledger)

    def test_checks_report_failing_rule(self):
        person = Person(id="a", name="A", exclude_morning_shifts=True)
        checks = dict(eligibility_checks(person, make_slot(), AssignmentLedger()))
        assert checks["shift_exclusion"] is False
        assert checks["no_double_booking"] is True

    def test_eligible_persons_filters(self):
        people = [
            Person(id="a", name="A"),
            Person(id="b", name="B", exclude_morning_shifts=True),
            Person(id="c", name="C", unavailable_dates=["2026-01-06"]),
        ]
        assert [p.id for p in eligible_persons(people, make_slot(), AssignmentLedger())] == ["a"]


class TestAssignmentLedger:
    """Tests for the running assignment ledger."""

    def test_counts(self):
        slot = make_slot()
        late = make_slot(shift=ShiftType.LATE)
        ledger = AssignmentLedger()
        ledger.record(booked("a", slot, "1"))
        ledger.record(booked("b", slot, "1"))
        ledger.record(booked("a", late, "2"))

        assert len(ledger) == 3
        assert ledger.total_for("a") == 2
        assert ledger.total_for("z") == 0
        assert ledger.station_count_for("a", "1") == 1
        assert ledger.station_count_for("a", "2") == 1
        assert ledger.staffed(slot, "1") == 2
        assert ledger.staffed(late, "1") == 0
        assert ledger.holds("a", late)
        assert not ledger.holds("b", late)

    def test_assignments_is_a_copy(self):
        ledger = AssignmentLedger([booked("a", make_slot())])
        ledger.assignments.clear()
        assert len(ledger) == 1
        assert list(ledger)[0].person_id == "a"
