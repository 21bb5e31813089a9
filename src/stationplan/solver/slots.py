"""
Time Slot Generation
====================
Expands a schedule period into the ordered (date, shift) slots to staff.
"""
from datetime import timedelta
from typing import Dict, List

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.rules import RULES
from stationplan.models.schedule import TimeSlot
from stationplan.models.shift import WEEKDAY_NAMES, ShiftType
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.solver.slots")


class CalendarError(ValueError):
    """The period cannot be turned into slots."""


def weekday_label(day) -> str:
    """English weekday label of a date."""
    label = WEEKDAY_NAMES.get(day.weekday())
    if label is None:
        raise CalendarError(f"{day.isoformat()} does not resolve to a known weekday")
    return label


def generate_time_slots(config: ScheduleConfig) -> List[TimeSlot]:
    """
    Generate all slots between start and end date (inclusive).

    Every working day yields an early and a late slot. The weekly rest day is
    skipped. The early slot of the start date and the late slot of the end
    date are only included when the matching config flag is set.

    Args:
        config: Schedule period

    Returns:
        Slots ordered by date, early before late

    Raises:
        CalendarError: start date after end date, or unknown weekday
    """
    errors = config.validate()
    if errors:
        raise CalendarError("; ".join(errors))

    slots = []
    current = config.start_date
    while current <= config.end_date:
        label = weekday_label(current)
        if current.weekday() != RULES.rest_weekday:
            week = (current - config.start_date).days // 7
            for shift in (ShiftType.EARLY, ShiftType.LATE):
                if shift is ShiftType.EARLY and current == config.start_date and not config.include_start_morning:
                    continue
                if shift is ShiftType.LATE and current == config.end_date and not config.include_end_evening:
                    continue
                slots.append(TimeSlot(
                    date=current,
                    shift=shift,
                    weekday=label,
                    day_index=current.weekday(),
                    week=week,
                ))
        current += timedelta(days=1)

    logger.debug(f"Generated {len(slots)} slots for {config.start_date} → {config.end_date}")
    return slots


def group_by_week(slots: List[TimeSlot]) -> Dict[int, List[TimeSlot]]:
    """Group slots by week index, keeping their order."""
    weeks: Dict[int, List[TimeSlot]] = {}
    for slot in slots:
        weeks.setdefault(slot.week, []).append(slot)
    return dict(sorted(weeks.items()))
