"""Schedule, slot and assignment models."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd

from .shift import ShiftType


@dataclass(frozen=True)
class TimeSlot:
    """A single (date, shift) staffing opportunity."""
    date: date
    shift: ShiftType
    weekday: str
    day_index: int  # 0 = Monday
    week: int       # 7-day periods elapsed since the start date

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()

    def __repr__(self):
        return f"W{self.week} {self.iso_date} {self.weekday} {self.shift.value}"


@dataclass(frozen=True)
class Assignment:
    """A person staffing a station during one slot."""
    date: str  # ISO 8601 (YYYY-MM-DD)
    shift: ShiftType
    weekday: str
    station_id: str
    person_id: str

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "shift": self.shift.value,
            "weekday": self.weekday,
            "station_id": self.station_id,
            "person_id": self.person_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Assignment":
        return cls(
            date=str(d["date"]),
            shift=ShiftType.from_string(d["shift"]),
            weekday=str(d.get("weekday", "")),
            station_id=str(d["station_id"]),
            person_id=str(d["person_id"]),
        )


@dataclass
class FairnessMetrics:
    """How evenly assignments are spread over persons and stations."""
    assignments_per_person: Dict[str, int] = field(default_factory=dict)
    assignments_per_station: Dict[str, int] = field(default_factory=dict)
    min_assignments: int = 0
    max_assignments: int = 0
    fairness_score: float = 1.0

    @property
    def spread(self) -> int:
        return self.max_assignments - self.min_assignments

    def to_dict(self) -> dict:
        return {
            "assignments_per_person": dict(self.assignments_per_person),
            "assignments_per_station": dict(self.assignments_per_station),
            "min_assignments": self.min_assignments,
            "max_assignments": self.max_assignments,
            "fairness_score": self.fairness_score,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "FairnessMetrics":
        return cls(
            assignments_per_person={str(k): int(v) for k, v in d.get("assignments_per_person", {}).items()},
            assignments_per_station={str(k): int(v) for k, v in d.get("assignments_per_station", {}).items()},
            min_assignments=int(d.get("min_assignments", 0)),
            max_assignments=int(d.get("max_assignments", 0)),
            fairness_score=float(d.get("fairness_score", 1.0)),
        )


class DiagnosticKind(str, Enum):
    """Categories of problems reported by the planner."""
    VALIDATION = "validation"
    CAPACITY = "capacity"
    CALENDAR = "calendar"
    PARTIAL_STAFFING = "partial_staffing"


@dataclass
class Diagnostic:
    """Single problem found while planning."""
    kind: DiagnosticKind
    severity: str  # "critical", "warning"
    message: str
    date: str = ""
    shift: Optional[ShiftType] = None
    station_id: str = ""
    placed: int = 0  # People placed for partial staffing

    @property
    def is_fatal(self) -> bool:
        return self.severity == "critical"


@dataclass
class ScheduleResult:
    """Complete result of a generation run."""

    assignments: List[Assignment] = field(default_factory=list)
    fairness: FairnessMetrics = field(default_factory=FairnessMetrics)
    success: bool = False
    issues: List[Diagnostic] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def diagnostics(self) -> List[str]:
        """Human-readable diagnostic messages."""
        return [i.message for i in self.issues]

    def get_person_assignments(self, person_id: str) -> List[Assignment]:
        return [a for a in self.assignments if a.person_id == person_id]

    def get_slot_assignments(self, iso_date: str, shift: ShiftType, station_id: str) -> List[Assignment]:
        return [
            a for a in self.assignments
            if a.date == iso_date and a.shift == shift and a.station_id == station_id
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert assignments to a DataFrame sorted by date and shift."""
        if not self.assignments:
            return pd.DataFrame(columns=["date", "weekday", "shift", "station_id", "person_id"])

        rows = [
            {
                "date": a.date,
                "weekday": a.weekday,
                "shift": a.shift.value,
                "station_id": a.station_id,
                "person_id": a.person_id,
                "_order": a.shift.order,
            }
            for a in self.assignments
        ]
        df = pd.DataFrame(rows).sort_values(["date", "_order", "station_id"])
        return df.drop(columns="_order").reset_index(drop=True)

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "success": self.success,
            "assignments": len(self.assignments),
            "fairness_score": round(self.fairness.fairness_score, 3),
            "min_assignments": self.fairness.min_assignments,
            "max_assignments": self.fairness.max_assignments,
            "diagnostics": len(self.issues),
            "passes": self.stats.get("passes", 0),
        }
