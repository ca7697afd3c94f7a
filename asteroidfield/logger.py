"""Levelled logging to the console and a log file."""

from __future__ import annotations

import inspect
import sys
import time
from pathlib import Path
from typing import TextIO

from .structs import DEFAULT_LOG_LEVEL, LogLevel


def _timestamp() -> str:
    micros = time.time_ns() // 1000
    seconds, usec = divmod(micros, 1_000_000)
    hours = (seconds // 3600 + 3) % 24
    minutes = seconds // 60 % 60
    return f"{hours:02d}-{minutes:02d}-{seconds % 60:02d}.{usec}"


class Logger:
    """Writes messages at or below the configured levels.

    A message is dropped only when both the console and the file level are
    below it; once it passes, it always goes to the file, and to the console
    only when the console level admits it.
    """

    def __init__(
        self,
        console_level: LogLevel | int = DEFAULT_LOG_LEVEL,
        file_level: LogLevel | int = DEFAULT_LOG_LEVEL,
        console: TextIO | None = None,
        file: TextIO | None = None,
    ) -> None:
        self.console_level = LogLevel(console_level)
        self.file_level = LogLevel(file_level)
        self.console = console
        self.file = file
        self.bench_file: TextIO | None = None

    def log(self, level: LogLevel | int, message: str) -> None:
        """Log ``message`` at ``level``, tagged with the caller's location."""
        level = LogLevel(level)
        if self.file_level < level and self.console_level < level:
            return

        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is not None:
            code = caller.f_code
            where = f"{Path(code.co_filename).name}->{code.co_name}:{caller.f_lineno}"
        else:
            where = "?->?:0"
        del frame, caller

        stamp = _timestamp()
        if self.console_level >= level:
            console = self.console if self.console is not None else sys.stderr
            console.write(f"[{level.colored}] {stamp} {where} {message}\n")

        target = self.file
        if level is LogLevel.BENCH and self.bench_file is not None:
            target = self.bench_file
        if target is not None:
            target.write(f"[{level.label}] {stamp} {where} {message}\n")

    def close(self) -> None:
        """Close the log file and the benchmark file, if open."""
        for handle in (self.file, self.bench_file):
            if handle is not None:
                handle.close()
        self.file = None
        self.bench_file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()