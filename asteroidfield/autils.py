"""Numeric helpers, timing, list compaction, log file and argument setup."""

from __future__ import annotations

import math
import random
import re
import time
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator

from .logger import Logger
from .structs import LogLevel, Session, Tracker

_CONSOLE_FLAGS = ("-lc", "--loglevelconsole")
_FILE_FLAGS = ("-lf", "--loglevelfile")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def f_get_sign(value: float) -> int:
    """Return -1 if the sign bit of ``value`` is set (including -0.0), else 1."""
    return int(math.copysign(1.0, value))


def get_sign(value: int) -> int:
    """Return -1 for negative integers, else 1."""
    return -1 if value < 0 else 1


def get_random_float(low: float, high: float) -> float:
    """Random float between the bounds, in steps of one thousandth."""
    lo, hi = sorted((int(low * 1000), int(high * 1000)))
    return random.randint(lo, hi) / 1000


def roll_over_float(value: float, low: float, high: float) -> float:
    """Wrap to ``high`` below ``low`` and to ``low`` above ``high``."""
    value = high if value < low else value
    return low if value > high else value


def roll_over_int(value: int, low: int, high: int) -> int:
    """Wrap to ``high`` below ``low`` and to ``low`` above ``high``."""
    value = high if value < low else value
    return low if value > high else value


def f_cut_off(value: float, digits: int) -> float:
    """Truncate ``value`` after ``digits`` decimal places, toward zero."""
    if digits == 0:
        return float(int(value))
    mult = 10.0**digits
    return int(value * mult) / mult


def clamp_float(value: float, low: float, high: float) -> float:
    value = low if value < low else value
    return high if value > high else value


def clamp_int(value: int, low: int, high: int) -> int:
    value = low if value < low else value
    return high if value > high else value


def get_time_mics() -> int:
    """Current wall-clock time in microseconds."""
    return time.time_ns() // 1000


def cleanup_memory(tracker: Tracker) -> None:
    """Drop emptied slots from the tracker, keeping the order of the rest."""
    tracker.objects[:] = [wrap for wrap in tracker.objects if wrap is not None]


def create_log_file(session: Session, directory: str | Path = "logs") -> Path:
    """Open a timestamped log file in ``directory`` and attach it to the logger.

    A regular file standing where the directory should be is removed first.
    """
    folder = Path(directory)
    if folder.is_file():
        folder.unlink()
    folder.mkdir(mode=0o755, parents=True, exist_ok=True)

    path = folder / datetime.now().strftime("asteroids-%Y-%m-%d_%H-%M-%S.log")
    logger = session.logger
    if logger.file is not None:
        logger.file.close()
    logger.file = path.open("a", encoding="utf-8")
    session.log_file_name = str(path)
    return path


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_level(text: str) -> LogLevel | None:
    level = clamp_int(_atoi(text), 0, 8)
    if level:
        return LogLevel(level)
    if text == "0":
        return LogLevel.NOLOG
    return None


def _take_value(args: Iterator[str], flag: str) -> str:
    try:
        return next(args)
    except StopIteration:
        raise ValueError(f"missing value for {flag}") from None


def parse_startup_arguments(session: Session, argv: Iterable[str]) -> None:
    """Apply ``-lc``/``-lf`` log level options (program name not included).

    Levels are clamped to 0..8. A value that is not a level is then itself
    checked as a file-level flag.
    """
    logger = session.logger
    args = iter(argv)
    for arg in args:
        if arg in _CONSOLE_FLAGS:
            arg = _take_value(args, arg)
            level = _parse_level(arg)
            if level is not None:
                logger.console_level = level
                continue

        if arg in _FILE_FLAGS:
            arg = _take_value(args, arg)
            level = _parse_level(arg)
            if level is not None:
                logger.file_level = level


class BenchTimer:
    """Measures a span of time and logs it at BENCH level."""

    def __init__(self, logger: Logger) -> None:
        self.logger = logger
        self.started = 0

    def start(self) -> int:
        self.started = get_time_mics()
        return self.started

    def end(self, name: str) -> int:
        """Log and return the microseconds since :meth:`start`."""
        elapsed = get_time_mics() - self.started
        self.logger.log(LogLevel.BENCH, f"{name} took {elapsed}us")
        return elapsed