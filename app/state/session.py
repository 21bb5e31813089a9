"""
Session State Management
========================
Encapsulates all Streamlit session state interactions.

Team, stations, period and the generated plan are persisted through a
MappingRepository over ``st.session_state``; widget flags live beside them.
"""
from typing import List, Optional, TYPE_CHECKING
import streamlit as st

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station
from stationplan.storage.mapping import MappingRepository

if TYPE_CHECKING:
    from stationplan.models.schedule import ScheduleResult


class SessionStateManager:
    """Manages type-safe access to session state."""

    @staticmethod
    def init_state():
        """Initialize default session state values."""
        defaults = {
            "result": None,
            "trigger_generate": False,
            "config_seed": 0,
            "allow_understaffed": False,
            "csv_exported": False,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    @property
    def repository(self) -> MappingRepository:
        return MappingRepository(st.session_state)

    @property
    def people(self) -> List[Person]:
        return self.repository.load_persons()

    @people.setter
    def people(self, value: List[Person]):
        self.repository.save_persons(value)

    @property
    def stations(self) -> List[Station]:
        return self.repository.load_stations()

    @stations.setter
    def stations(self, value: List[Station]):
        self.repository.save_stations(value)

    @property
    def config(self) -> ScheduleConfig:
        return self.repository.load_schedule_config()

    @config.setter
    def config(self, value: ScheduleConfig):
        self.repository.save_schedule_config(value)

    @property
    def result(self) -> Optional['ScheduleResult']:
        return st.session_state.get("result")

    @result.setter
    def result(self, value: 'ScheduleResult'):
        st.session_state["result"] = value
        self.repository.save_assignments(value.assignments)
        self.repository.save_fairness_metrics(value.fairness)

    @property
    def trigger_generate(self) -> bool:
        return bool(st.session_state.get("trigger_generate", False))

    @trigger_generate.setter
    def trigger_generate(self, value: bool):
        st.session_state["trigger_generate"] = value

    @property
    def config_seed(self) -> int:
        return int(st.session_state.get("config_seed", 0))

    @property
    def allow_understaffed(self) -> bool:
        return bool(st.session_state.get("allow_understaffed", False))

    def clear_results(self):
        """Clear the generated plan, keep team, stations and period."""
        st.session_state["result"] = None
        self.repository.clear_results()

    def clear_all(self):
        """Forget everything (after the plan was exported)."""
        self.repository.clear_all()
        st.session_state["result"] = None
        st.session_state["csv_exported"] = True
