"""
Assignment Planner
==================
Greedy planner with bounded randomized retries.

Each pass walks the slots week by week (shuffled inside the week), visits the
stations of every slot in shuffled order and asks the CandidateSelector for
two people. After each pass the fairness score is computed; the best pass is
kept and the loop stops early once a pass is fair enough.
"""
import random
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Person, Station, active_stations
from stationplan.models.rules import RULES
from stationplan.models.schedule import (
    Assignment,
    Diagnostic,
    DiagnosticKind,
    FairnessMetrics,
    ScheduleResult,
    TimeSlot,
)
from stationplan.solver.capacity import capacity_from_slots
from stationplan.solver.fairness import calculate_fairness
from stationplan.solver.ledger import AssignmentLedger
from stationplan.solver.selection import CandidateSelector
from stationplan.solver.slots import CalendarError, generate_time_slots, group_by_week
from stationplan.utils.logging_setup import PlanLogger
from stationplan.utils.structured_logging import bound_context, get_structured_logger

plan_log = PlanLogger("stationplan.solver.planner")
events = get_structured_logger("stationplan.planner")


class PlannerState(Enum):
    """Lifecycle of a planner run."""
    INITIALIZING = "initializing"
    ITERATING = "iterating"
    DONE = "done"


@dataclass
class PassRecord:
    """Outcome of one planning pass."""
    number: int
    assignments: List[Assignment]
    issues: List[Diagnostic]
    fairness: FairnessMetrics = field(default_factory=FairnessMetrics)

    @property
    def fully_staffed(self) -> bool:
        return not self.issues

    def beats(self, other: Optional["PassRecord"]) -> bool:
        """Fewer staffing gaps win; on equal gaps the fairer pass wins."""
        if other is None:
            return True
        if len(self.issues) != len(other.issues):
            return len(self.issues) < len(other.issues)
        return self.fairness.fairness_score > other.fairness.fairness_score


class AssignmentPlanner:
    """
    Orchestrates slot generation, selection and retries for one run.

    The planner holds no state between runs: build a new one per call.
    """

    def __init__(
        self,
        persons: Sequence[Person],
        stations: Sequence[Station],
        config: ScheduleConfig,
        rng=None,
        max_passes: int = RULES.max_passes,
        fairness_threshold: float = RULES.fairness_threshold,
        target_staffing: int = RULES.target_staffing,
        enforce_capacity: bool = True,
    ):
        self.persons = list(persons)
        self.stations = active_stations(stations)
        self.config = config
        self.rng = rng if rng is not None else random
        self.max_passes = max(1, max_passes)
        self.fairness_threshold = fairness_threshold
        self.target_staffing = target_staffing
        self.enforce_capacity = enforce_capacity

        self.state = PlannerState.INITIALIZING
        self.passes: List[PassRecord] = []
        self.best: Optional[PassRecord] = None

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def _check_preconditions(self) -> tuple:
        """
        Returns:
            (slots, fatal diagnostic or None)
        """
        if not self.persons:
            return [], Diagnostic(
                kind=DiagnosticKind.VALIDATION,
                severity="critical",
                message="No persons available: import at least one person before planning",
            )
        if not self.stations:
            return [], Diagnostic(
                kind=DiagnosticKind.VALIDATION,
                severity="critical",
                message="No active stations: activate at least one station before planning",
            )

        try:
            slots = generate_time_slots(self.config)
        except CalendarError as e:
            return [], Diagnostic(
                kind=DiagnosticKind.CALENDAR,
                severity="critical",
                message=f"Invalid schedule period: {e}",
            )

        capacity = capacity_from_slots(slots, self.persons, self.stations, self.target_staffing)
        plan_log.capacity(
            capacity.is_feasible,
            capacity.total_assignments_needed,
            capacity.max_possible_assignments,
        )
        if not capacity.is_feasible and self.enforce_capacity:
            return slots, Diagnostic(
                kind=DiagnosticKind.CAPACITY,
                severity="critical",
                message=(
                    f"Not enough persons: {capacity.total_assignments_needed} assignments needed "
                    f"({capacity.total_slots} slots × {capacity.station_count} stations × "
                    f"{self.target_staffing}), at most {capacity.max_possible_assignments} possible "
                    f"with {capacity.person_count} persons"
                ),
            )
        return slots, None

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _partial_issue(self, slot: TimeSlot, station: Station, placed: int) -> Diagnostic:
        if placed == 0:
            detail = "no person available"
        elif placed == 1:
            detail = "only one person available"
        else:
            detail = f"only {placed} persons available"
        return Diagnostic(
            kind=DiagnosticKind.PARTIAL_STAFFING,
            severity="warning",
            message=(
                f"{slot.weekday} {slot.iso_date} {slot.shift.label}, station {station.name}: "
                f"{detail} ({placed}/{self.target_staffing})"
            ),
            date=slot.iso_date,
            shift=slot.shift,
            station_id=station.id,
            placed=placed,
        )

    def run_pass(self, number: int, slots: Sequence[TimeSlot]) -> PassRecord:
        """Staff every slot × station once and score the result."""
        ledger = AssignmentLedger()
        selector = CandidateSelector(self.persons, self.rng)
        issues: List[Diagnostic] = []

        for week, week_slots in group_by_week(slots).items():
            order = list(week_slots)
            self.rng.shuffle(order)
            plan_log.week(number, week, len(order))

            for slot in order:
                stations = list(self.stations)
                self.rng.shuffle(stations)

                for station in stations:
                    chosen = selector.select_persons(slot, station.id, ledger, self.target_staffing)
                    for person in chosen:
                        ledger.record(Assignment(
                            date=slot.iso_date,
                            shift=slot.shift,
                            weekday=slot.weekday,
                            station_id=station.id,
                            person_id=person.id,
                        ))
                    if len(chosen) < self.target_staffing:
                        issue = self._partial_issue(slot, station, len(chosen))
                        issues.append(issue)
                        plan_log.gap(number, issue.message)

        record = PassRecord(
            number=number,
            assignments=ledger.assignments,
            issues=issues,
            fairness=calculate_fairness(ledger, self.persons, self.stations),
        )
        plan_log.pass_finished(number, len(record.assignments), len(issues), record.fairness.fairness_score)
        return record

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def _fatal(self, issue: Diagnostic) -> ScheduleResult:
        plan_log.aborted(issue.message)
        events.error("planning_aborted", kind=issue.kind.value, reason=issue.message)
        self.state = PlannerState.DONE
        return ScheduleResult(
            assignments=[],
            fairness=calculate_fairness([], self.persons, self.stations),
            success=False,
            issues=[issue],
            stats={"passes": 0, "best_pass": None, "state": self.state.value},
        )

    def plan(self) -> ScheduleResult:
        """
        Run the planner to completion.

        Returns:
            ScheduleResult of the best pass (or of the failed preconditions)
        """
        plan_log.run_started(len(self.persons), len(self.stations), self.config.start_date, self.config.end_date)

        slots, fatal = self._check_preconditions()
        if fatal is not None:
            return self._fatal(fatal)

        self.state = PlannerState.ITERATING
        for number in range(1, self.max_passes + 1):
            record = self.run_pass(number, slots)
            self.passes.append(record)
            events.info(
                "pass_complete",
                pass_number=number,
                assignments=len(record.assignments),
                gaps=len(record.issues),
                fairness=round(record.fairness.fairness_score, 4),
            )

            if record.beats(self.best):
                self.best = record
                plan_log.new_best(number)

            if record.fairness.fairness_score > self.fairness_threshold:
                break

        self.state = PlannerState.DONE
        best = self.best

        result = ScheduleResult(
            assignments=best.assignments,
            fairness=best.fairness,
            success=best.fully_staffed,
            issues=best.issues,
            stats={
                "passes": len(self.passes),
                "best_pass": best.number,
                "slots": len(slots),
                "state": self.state.value,
            },
        )
        plan_log.run_finished(len(self.passes), result.success, result.fairness.fairness_score, result.diagnostics)
        return result


def generate(
    persons: Sequence[Person],
    stations: Sequence[Station],
    config: ScheduleConfig,
    rng=None,
    seed: Optional[int] = None,
    **planner_kwargs,
) -> ScheduleResult:
    """
    Generate a schedule.

    Args:
        persons: Team members
        stations: Stations (inactive ones are ignored)
        config: Schedule period
        rng: Random source with a ``shuffle`` method (e.g. random.Random)
        seed: Seed for a fresh random.Random when no rng is given
        **planner_kwargs: Forwarded to AssignmentPlanner (max_passes, ...)

    Returns:
        ScheduleResult with assignments, fairness, success flag and diagnostics
    """
    if rng is None and seed is not None:
        rng = random.Random(seed)

    with bound_context(run_id=uuid.uuid4().hex[:8]):
        result = AssignmentPlanner(persons, stations, config, rng=rng, **planner_kwargs).plan()
        if seed is not None:
            result.stats["seed"] = seed
        events.info(
            "schedule_generated",
            success=result.success,
            assignments=len(result.assignments),
            fairness=round(result.fairness.fairness_score, 4),
        )
    return result
