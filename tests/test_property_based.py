"""
Property-Based Tests with Hypothesis
====================================
Tests that verify invariants hold for arbitrary valid inputs.
"""
import random
from collections import Counter
from datetime import date, timedelta

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station
from stationplan.solver.fairness import fairness_score
from stationplan.solver.planner import generate
from stationplan.solver.slots import generate_time_slots

BASE = date(2026, 1, 5)

configs = st.builds(
    lambda offset, length, morning, evening: ScheduleConfig(
        BASE + timedelta(days=offset),
        BASE + timedelta(days=offset + length),
        include_start_morning=morning,
        include_end_evening=evening,
    ),
    offset=st.integers(min_value=0, max_value=6),
    length=st.integers(min_value=0, max_value=20),
    morning=st.booleans(),
    evening=st.booleans(),
)

period_dates = [(BASE + timedelta(days=i)).isoformat() for i in range(28)]


@st.composite
def teams(draw, min_size=0, max_size=10):
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    team = []
    for i in range(size):
        mode = draw(st.sampled_from(["free", "allow", "deny"]))
        dates = draw(st.lists(st.sampled_from(period_dates), max_size=5, unique=True))
        team.append(Person(
            id=f"p{i}",
            name=f"Person {i}",
            exclude_morning_shifts=draw(st.booleans()),
            exclude_evening_shifts=draw(st.booleans()),
            available_dates=dates if mode == "allow" else None,
            unavailable_dates=dates if mode == "deny" else None,
        ))
    return team


stations_strategy = st.integers(min_value=1, max_value=4).map(
    lambda n: [Station(id=str(i), name=f"Station {i}") for i in range(n)]
)


class TestSlotProperties:
    """Property-based tests for slot generation."""

    @given(cfg=configs)
    def test_slot_count(self, cfg):
        """Two slots per working day minus the excluded boundary shifts."""
        days = [cfg.start_date + timedelta(days=i) for i in range(cfg.days)]
        working = [d for d in days if d.weekday() != 6]
        expected = 2 * len(working)
        if cfg.start_date.weekday() != 6 and not cfg.include_start_morning:
            expected -= 1
        if cfg.end_date.weekday() != 6 and not cfg.include_end_evening:
            expected -= 1
        assert len(generate_time_slots(cfg)) == expected

    @given(cfg=configs)
    def test_slots_unique_and_in_range(self, cfg):
        slots = generate_time_slots(cfg)
        keys = [(s.date, s.shift) for s in slots]
        assert len(keys) == len(set(keys))
        assert all(cfg.start_date <= s.date <= cfg.end_date for s in slots)
        assert all(s.week == (s.date - cfg.start_date).days // 7 for s in slots)


class TestPlannerProperties:
    """Invariants of generated plans."""

    @settings(max_examples=40, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    @given(team=teams(), stations=stations_strategy, cfg=configs, seed=st.integers(0, 10_000))
    def test_plan_invariants(self, team, stations, cfg, seed):
        result = generate(team, stations, cfg, rng=random.Random(seed), enforce_capacity=False)
        by_id = {p.id: p for p in team}

        # No double booking
        keys = Counter((a.date, a.shift, a.person_id) for a in result.assignments)
        assert all(v == 1 for v in keys.values())

        # At most two per station slot
        per_station = Counter((a.date, a.shift, a.station_id) for a in result.assignments)
        assert all(v <= 2 for v in per_station.values())

        for a in result.assignments:
            person = by_id[a.person_id]
            assert not person.excludes(a.shift)
            if person.available_dates:
                assert a.date in person.available_dates
            if person.unavailable_dates:
                assert a.date not in person.unavailable_dates

        assert 0.0 <= result.fairness.fairness_score <= 1.0
        assert result.success == (not result.issues)

    @settings(max_examples=25, deadline=None)
    @given(n_people=st.integers(min_value=8, max_value=14), cfg=configs, seed=st.integers(0, 1000))
    def test_unrestricted_team_fully_staffs(self, n_people, cfg, seed):
        """Eight free people are always enough for four stations."""
        team = [Person(id=f"p{i}", name=f"P{i}") for i in range(n_people)]
        stations = [Station(id=str(i), name=str(i)) for i in range(4)]
        result = generate(team, stations, cfg, seed=seed)
        assert result.success
        assert len(result.assignments) == len(generate_time_slots(cfg)) * 8


class TestFairnessProperties:
    """Property-based tests for the fairness score."""

    @given(counts=st.lists(st.integers(min_value=0, max_value=50), max_size=30))
    def test_bounded(self, counts):
        assert 0.0 <= fairness_score(counts) <= 1.0

    @given(value=st.integers(min_value=0, max_value=50), n=st.integers(min_value=1, max_value=30))
    def test_even_is_perfect(self, value, n):
        assert fairness_score([value] * n) == 1.0

    @given(counts=st.lists(st.integers(min_value=0, max_value=50), min_size=1, max_size=30))
    def test_order_independent(self, counts):
        assert fairness_score(counts) == pytest.approx(fairness_score(list(reversed(counts))))
