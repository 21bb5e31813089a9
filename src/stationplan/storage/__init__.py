# stationplan/storage - Session persistence
from .base import ScheduleRepository
from .mapping import ENTITIES, MappingRepository

__all__ = ["ScheduleRepository", "MappingRepository", "ENTITIES"]
