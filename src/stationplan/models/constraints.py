"""Schedule period configuration."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Union


def _as_date(value: Union[str, date]) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


@dataclass
class ScheduleConfig:
    """Configuration of the period to schedule."""

    start_date: date
    end_date: date  # Inclusive

    # Boundary shifts
    include_start_morning: bool = False  # Early shift on the start date
    include_end_evening: bool = True     # Late shift on the end date

    def __post_init__(self):
        self.start_date = _as_date(self.start_date)
        self.end_date = _as_date(self.end_date)

    @property
    def days(self) -> int:
        """Number of calendar days in the period (0 if inverted)."""
        return max(0, (self.end_date - self.start_date).days + 1)

    def validate(self) -> List[str]:
        """
        Validate the configuration.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors = []
        if self.start_date > self.end_date:
            errors.append(
                f"Start date {self.start_date.isoformat()} is after "
                f"end date {self.end_date.isoformat()}"
            )
        return errors

    @classmethod
    def default(cls, today: Optional[date] = None) -> "ScheduleConfig":
        """Next Monday (today if Monday) through the following Saturday."""
        today = today or date.today()
        monday = today + timedelta(days=(7 - today.weekday()) % 7)
        return cls(
            start_date=monday,
            end_date=monday + timedelta(days=5),
            include_start_morning=False,
            include_end_evening=True,
        )

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "include_start_morning": self.include_start_morning,
            "include_end_evening": self.include_end_evening,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "ScheduleConfig":
        """Create from dictionary."""
        return cls(
            start_date=d["start_date"],
            end_date=d["end_date"],
            include_start_morning=bool(d.get("include_start_morning", False)),
            include_end_evening=bool(d.get("include_end_evening", True)),
        )
