"""
Abstract Schedule Repository
============================
Defines the persistence interface for the planning session: team, stations,
period configuration, the generated assignments and their fairness metrics.
Surfaces (CLI, Streamlit) program against this interface.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station
from stationplan.models.schedule import Assignment, FairnessMetrics


class ScheduleRepository(ABC):
    """Load/save/clear per entity plus a full reset."""

    @abstractmethod
    def load_persons(self) -> List[Person]:
        pass

    @abstractmethod
    def save_persons(self, persons: List[Person]) -> None:
        pass

    @abstractmethod
    def clear_persons(self) -> None:
        pass

    @abstractmethod
    def load_stations(self) -> List[Station]:
        """Stored stations, or the default stations when none are stored."""
        pass

    @abstractmethod
    def save_stations(self, stations: List[Station]) -> None:
        pass

    @abstractmethod
    def clear_stations(self) -> None:
        pass

    @abstractmethod
    def load_assignments(self) -> List[Assignment]:
        pass

    @abstractmethod
    def save_assignments(self, assignments: List[Assignment]) -> None:
        pass

    @abstractmethod
    def clear_assignments(self) -> None:
        pass

    @abstractmethod
    def load_schedule_config(self) -> ScheduleConfig:
        """Stored period, or ``ScheduleConfig.default()`` when none is stored."""
        pass

    @abstractmethod
    def save_schedule_config(self, config: ScheduleConfig) -> None:
        pass

    @abstractmethod
    def clear_schedule_config(self) -> None:
        pass

    @abstractmethod
    def load_fairness_metrics(self) -> Optional[FairnessMetrics]:
        pass

    @abstractmethod
    def save_fairness_metrics(self, metrics: FairnessMetrics) -> None:
        pass

    @abstractmethod
    def clear_fairness_metrics(self) -> None:
        pass

    def clear_results(self) -> None:
        """Drop the generated plan but keep team, stations and period."""
        self.clear_assignments()
        self.clear_fairness_metrics()

    def clear_all(self) -> None:
        """Remove every stored entity."""
        self.clear_persons()
        self.clear_stations()
        self.clear_schedule_config()
        self.clear_results()
