"""Person and station models."""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from .shift import ShiftType


def _normalize_dates(values: Optional[Iterable]) -> Optional[List[str]]:
    """Normalize a date list to sorted, unique ISO strings."""
    if values is None:
        return None
    out = set()
    for v in values:
        if isinstance(v, date):
            out.add(v.isoformat())
        else:
            out.add(date.fromisoformat(str(v).strip()).isoformat())
    return sorted(out)


@dataclass
class Person:
    """Represents a staff member with their scheduling constraints."""

    id: str
    name: str

    # Shift exclusions
    exclude_morning_shifts: bool = False
    exclude_evening_shifts: bool = False

    # Date availability (ISO strings). Allow-list and deny-list.
    available_dates: Optional[List[str]] = None
    unavailable_dates: Optional[List[str]] = None

    def __post_init__(self):
        """Validate and normalize fields."""
        self.id = str(self.id)
        self.name = str(self.name).strip()
        self.available_dates = _normalize_dates(self.available_dates)
        self.unavailable_dates = _normalize_dates(self.unavailable_dates)

    def excludes(self, shift: ShiftType) -> bool:
        """True if the person never works this shift type."""
        if shift is ShiftType.EARLY:
            return self.exclude_morning_shifts
        return self.exclude_evening_shifts

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "exclude_morning_shifts": self.exclude_morning_shifts,
            "exclude_evening_shifts": self.exclude_evening_shifts,
            "available_dates": self.available_dates,
            "unavailable_dates": self.unavailable_dates,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            id=d.get("id", ""),
            name=d.get("name", ""),
            exclude_morning_shifts=bool(d.get("exclude_morning_shifts", False)),
            exclude_evening_shifts=bool(d.get("exclude_evening_shifts", False)),
            available_dates=d.get("available_dates"),
            unavailable_dates=d.get("unavailable_dates"),
        )


@dataclass
class Station:
    """A location that needs staffing."""

    id: str
    name: str
    active: bool = True

    def __post_init__(self):
        self.id = str(self.id)
        self.name = str(self.name).strip()

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "active": self.active}

    @classmethod
    def from_dict(cls, d: dict) -> "Station":
        return cls(
            id=d.get("id", ""),
            name=d.get("name", ""),
            active=bool(d.get("active", True)),
        )


def default_stations() -> List[Station]:
    """Fresh copies of the stations configured out of the box."""
    return [
        Station(id="1", name="Pool"),
        Station(id="2", name="TT-Platten"),
        Station(id="3", name="Klettergerüst"),
        Station(id="4", name="Spieletheke"),
    ]


DEFAULT_STATIONS = default_stations()


def active_stations(stations: Iterable[Station]) -> List[Station]:
    """Filter stations down to the active ones."""
    return [s for s in stations if s.active]
