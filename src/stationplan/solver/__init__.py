# stationplan/solver - Greedy station assignment engine
from .availability import eligible_persons, is_eligible
from .capacity import CapacityAnalysis, analyze_capacity
from .fairness import calculate_fairness, fairness_score
from .ledger import AssignmentLedger
from .planner import AssignmentPlanner, PassRecord, PlannerState, generate
from .selection import CandidateSelector
from .slots import CalendarError, generate_time_slots
from .stats import PersonStats, calculate_person_stats

__all__ = [
    "generate",
    "AssignmentPlanner",
    "PlannerState",
    "PassRecord",
    "CandidateSelector",
    "AssignmentLedger",
    "is_eligible",
    "eligible_persons",
    "generate_time_slots",
    "CalendarError",
    "calculate_fairness",
    "fairness_score",
    "analyze_capacity",
    "CapacityAnalysis",
    "calculate_person_stats",
    "PersonStats",
]
