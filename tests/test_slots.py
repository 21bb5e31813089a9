"""Tests for time slot generation."""
from datetime import date, timedelta
from unittest.mock import patch

import pytest

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.shift import ShiftType
from stationplan.solver.slots import CalendarError, generate_time_slots, group_by_week, weekday_label

from conftest import MONDAY, SATURDAY, SUNDAY


class TestGenerateTimeSlots:
    """Tests for generate_time_slots."""

    def test_single_day_both_flags(self):
        cfg = ScheduleConfig(MONDAY, MONDAY, include_start_morning=True, include_end_evening=True)
        slots = generate_time_slots(cfg)
        assert [s.shift for s in slots] == [ShiftType.EARLY, ShiftType.LATE]
        assert all(s.iso_date == "2026-01-05" for s in slots)

    def test_single_day_default_flags(self):
        """Start morning excluded, end evening included."""
        slots = generate_time_slots(ScheduleConfig(MONDAY, MONDAY))
        assert [s.shift for s in slots] == [ShiftType.LATE]

    def test_single_day_no_boundary_shifts(self):
        cfg = ScheduleConfig(MONDAY, MONDAY, include_start_morning=False, include_end_evening=False)
        assert generate_time_slots(cfg) == []

    def test_full_week(self, week_config):
        slots = generate_time_slots(week_config)
        # 6 working days × 2 minus the start-date morning
        assert len(slots) == 11
        assert slots[0].iso_date == "2026-01-05"
        assert slots[0].shift is ShiftType.LATE
        assert slots[-1].iso_date == "2026-01-10"
        assert slots[-1].shift is ShiftType.LATE

    def test_order_early_before_late(self, week_config):
        slots = generate_time_slots(week_config)
        keys = [(s.date, s.shift.order) for s in slots]
        assert keys == sorted(keys)

    def test_rest_day_skipped(self):
        cfg = ScheduleConfig(MONDAY, MONDAY + timedelta(days=13), include_start_morning=True)
        slots = generate_time_slots(cfg)
        assert all(s.date.weekday() != 6 for s in slots)
        assert len(slots) == 24

    def test_sunday_only_yields_nothing(self):
        cfg = ScheduleConfig(SUNDAY, SUNDAY, include_start_morning=True, include_end_evening=True)
        assert generate_time_slots(cfg) == []

    def test_weekday_labels_and_index(self, week_config):
        slots = generate_time_slots(week_config)
        saturday = [s for s in slots if s.date == SATURDAY]
        assert saturday[0].weekday == "Saturday"
        assert saturday[0].day_index == 5

    def test_week_index_relative_to_start(self):
        # Wednesday start: the next Wednesday is week 1
        start = date(2026, 1, 7)
        cfg = ScheduleConfig(start, start + timedelta(days=8))
        slots = generate_time_slots(cfg)
        by_date = {s.date: s.week for s in slots}
        assert by_date[date(2026, 1, 13)] == 0
        assert by_date[date(2026, 1, 14)] == 1
        assert by_date[date(2026, 1, 15)] == 1

    def test_inverted_range_raises(self):
        cfg = ScheduleConfig(SATURDAY, MONDAY)
        with pytest.raises(CalendarError, match="after"):
            generate_time_slots(cfg)

    def test_calendar_error_is_value_error(self):
        assert issubclass(CalendarError, ValueError)

    def test_unknown_weekday_raises(self, week_config):
        with patch("stationplan.solver.slots.WEEKDAY_NAMES", {}):
            with pytest.raises(CalendarError, match="weekday"):
                generate_time_slots(week_config)


class TestWeekHelpers:
    """Tests for week grouping and labels."""

    def test_weekday_label(self):
        assert weekday_label(MONDAY) == "Monday"

    def test_group_by_week(self):
        cfg = ScheduleConfig(MONDAY, MONDAY + timedelta(days=9))
        groups = group_by_week(generate_time_slots(cfg))
        assert list(groups) == [0, 1]
        assert all(s.week == 0 for s in groups[0])
        assert groups[1][0].date == date(2026, 1, 12)
