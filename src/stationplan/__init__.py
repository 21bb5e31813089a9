"""Fair two-person station scheduling."""
from stationplan.models import Person, ScheduleConfig, ScheduleResult, Station
from stationplan.solver import generate

__version__ = "0.1.0"

__all__ = ["generate", "Person", "Station", "ScheduleConfig", "ScheduleResult"]
