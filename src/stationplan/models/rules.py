"""
Business Rules and Constants
============================
Central source of truth for staffing targets, retry bounds and scoring weights.
"""
from dataclasses import dataclass


@dataclass
class RulesConfig:
    """Business rules constants."""

    # Staffing
    target_staffing: int = 2  # People per station and slot

    # Planner
    max_passes: int = 3
    fairness_threshold: float = 0.8

    # Candidate scoring (lower is better)
    total_load_weight: int = 10
    station_load_weight: int = 5

    # Calendar: Python weekday() of the weekly rest day (6 = Sunday)
    rest_weekday: int = 6

    # Storage
    storage_prefix: str = "stationplan"


RULES = RulesConfig()
