"""
Mapping-backed repository.

Entities are stored as JSON strings under ``<prefix>_<entity>`` keys of any
mutable mapping: a plain dict in tests and the CLI, ``st.session_state`` in
the Streamlit app.
"""
import json
from typing import Any, Callable, List, MutableMapping, Optional, TypeVar

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station, default_stations
from stationplan.models.rules import RULES
from stationplan.models.schedule import Assignment, FairnessMetrics
from stationplan.storage.base import ScheduleRepository
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.storage")

T = TypeVar("T")

ENTITIES = ("persons", "stations", "assignments", "schedule_config", "fairness_metrics")


class MappingRepository(ScheduleRepository):
    """JSON repository over a ``MutableMapping``."""

    def __init__(self, store: MutableMapping[str, Any], prefix: str = RULES.storage_prefix):
        self.store = store
        self.prefix = prefix

    def key(self, entity: str) -> str:
        return f"{self.prefix}_{entity}"

    # Generic helpers

    def _load(self, entity: str, decode: Callable[[Any], T], default: Callable[[], T]) -> T:
        raw = self.store.get(self.key(entity))
        if raw is None:
            return default()
        try:
            return decode(json.loads(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Stored {entity} could not be read, using default: {e}")
            return default()

    def _save(self, entity: str, payload: Any) -> None:
        self.store[self.key(entity)] = json.dumps(payload, ensure_ascii=False)
        logger.debug(f"Saved {entity}")

    def _clear(self, entity: str) -> None:
        self.store.pop(self.key(entity), None)

    # Persons

    def load_persons(self) -> List[Person]:
        return self._load("persons", lambda data: [Person.from_dict(d) for d in data], list)

    def save_persons(self, persons: List[Person]) -> None:
        self._save("persons", [p.to_dict() for p in persons])

    def clear_persons(self) -> None:
        self._clear("persons")

    # Stations

    def load_stations(self) -> List[Station]:
        return self._load(
            "stations", lambda data: [Station.from_dict(d) for d in data], default_stations
        )

    def save_stations(self, stations: List[Station]) -> None:
        self._save("stations", [s.to_dict() for s in stations])

    def clear_stations(self) -> None:
        self._clear("stations")

    # Assignments

    def load_assignments(self) -> List[Assignment]:
        return self._load(
            "assignments", lambda data: [Assignment.from_dict(d) for d in data], list
        )

    def save_assignments(self, assignments: List[Assignment]) -> None:
        self._save("assignments", [a.to_dict() for a in assignments])

    def clear_assignments(self) -> None:
        self._clear("assignments")

    # Schedule config

    def load_schedule_config(self) -> ScheduleConfig:
        return self._load("schedule_config", ScheduleConfig.from_dict, ScheduleConfig.default)

    def save_schedule_config(self, config: ScheduleConfig) -> None:
        self._save("schedule_config", config.to_dict())

    def clear_schedule_config(self) -> None:
        self._clear("schedule_config")

    # Fairness metrics

    def load_fairness_metrics(self) -> Optional[FairnessMetrics]:
        return self._load("fairness_metrics", FairnessMetrics.from_dict, lambda: None)

    def save_fairness_metrics(self, metrics: FairnessMetrics) -> None:
        self._save("fairness_metrics", metrics.to_dict())

    def clear_fairness_metrics(self) -> None:
        self._clear("fairness_metrics")

    def clear_all(self) -> None:
        super().clear_all()
        logger.info("Cleared all stored planning data")
