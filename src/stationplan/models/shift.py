"""Shift type definitions and weekday constants."""
from enum import Enum


class ShiftType(str, Enum):
    """Types of shifts in the scheduling system."""
    EARLY = "early"   # Frühdienst (morning)
    LATE = "late"     # Spätdienst (evening)

    @property
    def label(self) -> str:
        """German label used in exports and the UI."""
        return {
            ShiftType.EARLY: "Frühdienst",
            ShiftType.LATE: "Spätdienst",
        }[self]

    @property
    def order(self) -> int:
        """Position of the shift within a day."""
        return 0 if self is ShiftType.EARLY else 1

    @classmethod
    def from_string(cls, s: str) -> "ShiftType":
        """Parse shift from various string formats."""
        mapping = {
            "early": cls.EARLY, "morning": cls.EARLY, "m": cls.EARLY,
            "früh": cls.EARLY, "frühdienst": cls.EARLY, "morgen": cls.EARLY,
            "late": cls.LATE, "evening": cls.LATE, "e": cls.LATE,
            "spät": cls.LATE, "spätdienst": cls.LATE, "abend": cls.LATE,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown shift type: {s!r}")


# Python weekday() index -> label
WEEKDAY_NAMES = {
    0: "Monday",
    1: "Tuesday",
    2: "Wednesday",
    3: "Thursday",
    4: "Friday",
    5: "Saturday",
    6: "Sunday",
}

# German short labels (as rendered by de-DE locales)
WEEKDAY_SHORT_DE = {
    0: "Mo.",
    1: "Di.",
    2: "Mi.",
    3: "Do.",
    4: "Fr.",
    5: "Sa.",
    6: "So.",
}

WORKING_DAYS = [WEEKDAY_NAMES[i] for i in range(6)]
SHIFTS = [ShiftType.EARLY, ShiftType.LATE]
