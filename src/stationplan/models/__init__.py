# stationplan/models - Data models for the scheduling system
from .constraints import ScheduleConfig
from .person import DEFAULT_STATIONS, Person, Station, active_stations, default_stations
from .rules import RULES, RulesConfig
from .schedule import (
    Assignment,
    Diagnostic,
    DiagnosticKind,
    FairnessMetrics,
    ScheduleResult,
    TimeSlot,
)
from .shift import SHIFTS, WEEKDAY_NAMES, WORKING_DAYS, ShiftType

__all__ = [
    "Person", "Station", "DEFAULT_STATIONS", "default_stations", "active_stations",
    "ShiftType", "SHIFTS", "WEEKDAY_NAMES", "WORKING_DAYS",
    "TimeSlot", "Assignment", "FairnessMetrics", "Diagnostic", "DiagnosticKind",
    "ScheduleResult",
    "ScheduleConfig",
    "RULES", "RulesConfig",
]
