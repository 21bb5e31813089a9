"""
Logging Setup
=============
Console and rotating file handlers for the ``stationplan`` logger tree, and
PlanLogger, the readable trace of a planner run.

    run header    Planning 9 persons on 4 stations, 2026-01-05 to 2026-01-10
    per pass      Pass 2: 88 assignments, 0 gaps, fairness 0.912
    summary       Planning finished after 2 passes: success=True, fairness 0.912

Per-week and per-gap lines are DEBUG; the rest is INFO, capacity shortfalls
and remaining gaps are WARNING.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER = "stationplan"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d | %(message)s"

# ANSI colour codes per level
LEVEL_COLORS = {
    logging.DEBUG: "36",
    logging.INFO: "32",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "35",
}


class ConsoleFormatter(logging.Formatter):
    """Wraps each line in the colour of its level when writing to a terminal."""

    def __init__(self, colored: bool = False):
        super().__init__(CONSOLE_FORMAT, datefmt="%H:%M:%S")
        self.colored = colored

    def format(self, record):
        line = super().format(record)
        code = LEVEL_COLORS.get(record.levelno)
        if self.colored and code:
            return f"\033[{code}m{line}\033[0m"
        return line


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/stationplan.log",
    stream: Optional[TextIO] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Install the console handler and, when log_file is set, a rotating file
    handler on the ``stationplan`` logger. Calling it again replaces the
    handlers of the previous call.

    Args:
        level: Level name for both handlers ("DEBUG", "INFO", ...)
        log_file: Log file path, None for console only
        stream: Console stream, stdout when None
        max_bytes: File size that triggers rotation
        backup_count: Rotated files to keep

    Returns:
        The ``stationplan`` logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(_parse_level(level))

    console_stream = stream or sys.stdout
    console = logging.StreamHandler(console_stream)
    isatty = getattr(console_stream, "isatty", None)
    console.setFormatter(ConsoleFormatter(colored=bool(isatty and isatty())))
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    root.debug(f"Logging at {level.upper()} to {log_file or 'console only'}")
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger below the ``stationplan`` tree, e.g. "stationplan.solver.slots"."""
    return logging.getLogger(name)


class PlanLogger:
    """Human readable progress of one planner run."""

    def __init__(self, name: str = "stationplan.solver.planner"):
        self.logger = logging.getLogger(name)

    def run_started(self, persons: int, stations: int, start, end):
        self.logger.info(f"Planning {persons} persons on {stations} stations, {start} to {end}")

    def capacity(self, feasible: bool, needed: int, possible: int):
        if feasible:
            self.logger.debug(f"Capacity ok: {needed} assignments needed, {possible} possible")
        else:
            self.logger.warning(f"Capacity short: {needed} assignments needed, only {possible} possible")

    def week(self, pass_number: int, week: int, slots: int):
        self.logger.debug(f"Pass {pass_number}, week {week}: {slots} slots")

    def gap(self, pass_number: int, message: str):
        self.logger.debug(f"Pass {pass_number} gap: {message}")

    def pass_finished(self, pass_number: int, assignments: int, gaps: int, fairness: float):
        self.logger.info(
            f"Pass {pass_number}: {assignments} assignments, {gaps} gaps, fairness {fairness:.3f}"
        )

    def new_best(self, pass_number: int):
        self.logger.info(f"Pass {pass_number} is the best so far")

    def aborted(self, reason: str):
        self.logger.error(f"Planning aborted: {reason}")

    def run_finished(self, passes: int, success: bool, fairness: float, gaps=()):
        """Summary line; every remaining gap is repeated as a warning."""
        for message in gaps:
            self.logger.warning(message)
        self.logger.info(
            f"Planning finished after {passes} passes: success={success}, fairness {fairness:.3f}"
        )
