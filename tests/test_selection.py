"""Tests for candidate selection."""
import random
from collections import Counter
from datetime import date

from stationplan.models.person import Person
from stationplan.models.schedule import Assignment, TimeSlot
from stationplan.models.shift import ShiftType
from stationplan.solver.ledger import AssignmentLedger
from stationplan.solver.selection import CandidateSelector

SLOT = TimeSlot(date=date(2026, 1, 6), shift=ShiftType.LATE, weekday="Tuesday", day_index=1, week=0)
OTHER = TimeSlot(date=date(2026, 1, 5), shift=ShiftType.LATE, weekday="Monday", day_index=0, week=0)


def past(person_id, station_id="1", slot=OTHER):
    return Assignment(slot.iso_date, slot.shift, slot.weekday, station_id, person_id)


class NoShuffle:
    """Random source that keeps the order."""

    def shuffle(self, seq):
        pass


class TestScore:
    """Tests for the load score."""

    def test_score_weights(self):
        selector = CandidateSelector([], NoShuffle())
        ledger = AssignmentLedger([past("a", "1"), past("a", "2", slot=SLOT)])
        person = Person(id="a", name="A")
        # 2 total × 10 + 1 at station 1 × 5
        assert selector.score(person, "1", ledger) == 25
        assert selector.score(person, "3", ledger) == 20

    def test_custom_weights(self):
        selector = CandidateSelector([], NoShuffle(), total_weight=1, station_weight=0)
        ledger = AssignmentLedger([past("a")])
        assert selector.score(Person(id="a", name="A"), "1", ledger) == 1


class TestSelectPersons:
    """Tests for select_persons."""

    def test_prefers_lower_load(self):
        people = [Person(id=x, name=x.upper()) for x in "abc"]
        ledger = AssignmentLedger([past("a")])
        chosen = CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", ledger)
        assert {p.id for p in chosen} == {"b", "c"}

    def test_station_load_breaks_total_tie(self):
        people = [Person(id="a", name="A"), Person(id="b", name="B")]
        # Same total load, but "a" already worked station 1
        ledger = AssignmentLedger([past("a", "1"), past("b", "2")])
        chosen = CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", ledger, target_count=1)
        assert [p.id for p in chosen] == ["b"]

    def test_fills_from_next_tier(self):
        people = [Person(id=x, name=x.upper()) for x in "abc"]
        ledger = AssignmentLedger([past("a"), past("b")])
        chosen = CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", ledger)
        assert len(chosen) == 2
        assert chosen[0].id == "c"

    def test_fewer_than_target(self):
        people = [Person(id="a", name="A"), Person(id="b", name="B", exclude_evening_shifts=True)]
        chosen = CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", AssignmentLedger())
        assert [p.id for p in chosen] == ["a"]

    def test_nobody_eligible(self):
        people = [Person(id="a", name="A", exclude_evening_shifts=True)]
        assert CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", AssignmentLedger()) == []

    def test_never_selects_booked_person(self):
        people = [Person(id=x, name=x.upper()) for x in "abc"]
        ledger = AssignmentLedger([past("a", "2", slot=SLOT)])
        chosen = CandidateSelector(people, NoShuffle()).select_persons(SLOT, "1", ledger)
        assert "a" not in {p.id for p in chosen}

    def test_ties_are_randomized(self):
        """Insertion order does not decide between equally loaded people."""
        people = [Person(id=x, name=x.upper()) for x in "abcdef"]
        rng = random.Random(7)
        picks = Counter()
        for _ in range(200):
            chosen = CandidateSelector(people, rng).select_persons(SLOT, "1", AssignmentLedger(), target_count=1)
            picks[chosen[0].id] += 1
        assert set(picks) == set("abcdef")

    def test_rank_groups_by_score(self):
        people = [Person(id=x, name=x.upper()) for x in "abc"]
        ledger = AssignmentLedger([past("a")])
        tiers = CandidateSelector(people, NoShuffle()).rank(SLOT, "1", ledger)
        assert list(tiers) == [0, 15]
        assert [p.id for p in tiers[0]] == ["b", "c"]
