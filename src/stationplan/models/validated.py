"""
Pydantic Validated Models
=========================
Validation layer for configuration and person input at the boundaries
(CLI arguments, web forms).

Usage:
    from stationplan.models.validated import ValidatedScheduleConfig

    config = ValidatedScheduleConfig(start_date="2026-01-05", end_date="2026-01-10")

Note: the dataclass models stay the types the engine works with.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ValidatedScheduleConfig(BaseModel):
    """
    Pydantic-validated schedule configuration.

    Use this for strict validation at API boundaries.
    Can be converted to/from the dataclass ScheduleConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    start_date: date = Field(description="First day of the period")
    end_date: date = Field(description="Last day of the period (inclusive)")
    include_start_morning: bool = Field(default=False)
    include_end_evening: bool = Field(default=True)

    @model_validator(mode="after")
    def validate_model(self):
        """Cross-field validation."""
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self

    def to_dataclass(self):
        """Convert to dataclass ScheduleConfig for the planner."""
        from stationplan.models.constraints import ScheduleConfig

        return ScheduleConfig(
            start_date=self.start_date,
            end_date=self.end_date,
            include_start_morning=self.include_start_morning,
            include_end_evening=self.include_end_evening,
        )

    @classmethod
    def from_dataclass(cls, config) -> "ValidatedScheduleConfig":
        """Create from dataclass ScheduleConfig."""
        return cls(
            start_date=config.start_date,
            end_date=config.end_date,
            include_start_morning=config.include_start_morning,
            include_end_evening=config.include_end_evening,
        )


class ValidatedPerson(BaseModel):
    """Pydantic-validated person input."""

    id: str = Field(min_length=1)
    name: str
    exclude_morning_shifts: bool = False
    exclude_evening_shifts: bool = False
    available_dates: Optional[List[date]] = None
    unavailable_dates: Optional[List[date]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_model(self):
        """Allow-list and deny-list are mutually exclusive."""
        if self.available_dates and self.unavailable_dates:
            raise ValueError("available_dates and unavailable_dates cannot both be set")
        return self

    def to_dataclass(self):
        """Convert to dataclass Person."""
        from stationplan.models.person import Person

        return Person(
            id=self.id,
            name=self.name,
            exclude_morning_shifts=self.exclude_morning_shifts,
            exclude_evening_shifts=self.exclude_evening_shifts,
            available_dates=self.available_dates,
            unavailable_dates=self.unavailable_dates,
        )
