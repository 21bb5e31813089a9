"""Pytest configuration and fixtures."""
import logging
import random
import sys
from datetime import date
from pathlib import Path

# Add src and project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import structlog

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station, default_stations
from stationplan.utils.structured_logging import route_to_stdlib

MONDAY = date(2026, 1, 5)
SATURDAY = date(2026, 1, 10)
SUNDAY = date(2026, 1, 11)


@pytest.fixture
def sample_people():
    """Create a sample team for testing."""
    return [
        Person(id="p1", name="Anna Berg"),
        Person(id="p2", name="Ben Kurz"),
        Person(id="p3", name="Clara Lang", exclude_morning_shifts=True),
        Person(id="p4", name="David Ost"),
        Person(id="p5", name="Eva Nord", exclude_evening_shifts=True),
        Person(id="p6", name="Finn West"),
        Person(id="p7", name="Greta Süd"),
        Person(id="p8", name="Hans Mai"),
        Person(id="p9", name="Ida Roth"),
    ]


@pytest.fixture
def stations():
    return default_stations()


@pytest.fixture
def one_station():
    return [Station(id="s1", name="Pool")]


@pytest.fixture
def week_config():
    """Monday to Saturday with default boundary flags."""
    return ScheduleConfig(start_date=MONDAY, end_date=SATURDAY)


@pytest.fixture
def single_day_config():
    """Monday with both shifts."""
    return ScheduleConfig(
        start_date=MONDAY,
        end_date=MONDAY,
        include_start_morning=True,
        include_end_evening=True,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def team_dummy_path():
    """Path to the sample team file."""
    return Path(__file__).parent.parent / "team_dummy.csv"


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so streams never outlive a test."""
    yield
    logger = logging.getLogger("stationplan")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()
    route_to_stdlib()
