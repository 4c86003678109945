# flowcomp/logger.py
from __future__ import annotations
import csv
import logging
import os
import sys
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    # smaller numbers are more severe
    NONE = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    INFORMATION = 4
    DEBUG = 5

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown log level: {name}") from None


_FROM_STDLIB = {
    logging.CRITICAL: LogLevel.FATAL,
    logging.ERROR: LogLevel.ERROR,
    logging.WARNING: LogLevel.WARNING,
    logging.INFO: LogLevel.INFORMATION,
    logging.DEBUG: LogLevel.DEBUG,
}

_LABELS = {
    LogLevel.FATAL: "FATAL",
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: " WARN",
    LogLevel.INFORMATION: " INFO",
    LogLevel.DEBUG: "DEBUG",
}


def to_log_level(levelno: int) -> LogLevel:
    """Map a stdlib level number onto the nearest LogLevel at or above it in severity."""
    for stdlib_level in sorted(_FROM_STDLIB):
        if levelno <= stdlib_level:
            return _FROM_STDLIB[stdlib_level]
    return LogLevel.FATAL


class SeverityFilter(logging.Filter):
    """Passes a record when its ordinal is at or below the threshold."""

    def __init__(self, threshold: LogLevel):
        super().__init__()
        self.threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        level = to_log_level(record.levelno)
        if level > self.threshold:
            return False
        record.flowcomp_label = _LABELS[level]
        return True


LOG_FORMAT = "%(asctime)s [%(flowcomp_label)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_file: Optional[str] = None,
                      level: LogLevel = LogLevel.INFORMATION) -> logging.Handler:
    """
    Route the ``flowcomp`` logger to stderr, or append to ``log_file``.
    Replaces handlers from a previous call.
    """
    root = logging.getLogger("flowcomp")
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(SeverityFilter(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    root.propagate = False
    return handler


class AdjustmentLog:
    """CSV record of every rewritten line, one row per line."""

    COLUMNS = ["line", "old_e", "new_e", "length_mm", "multiplier"]

    def __init__(self, path: str):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        self._f = open(path, "w", newline="", encoding="utf-8")
        self._w = csv.writer(self._f)
        self._w.writerow(self.COLUMNS)
        self._f.flush()
        self.rows = 0

    def record(self, line_no: int, old_e: float, new_e: float, length: float, multiplier: float):
        self._w.writerow([line_no, old_e, f"{new_e:.5f}", f"{length:.5f}", f"{multiplier:.6f}"])
        self._f.flush()
        self.rows += 1

    def close(self):
        self._f.close()

    def __enter__(self) -> "AdjustmentLog":
        return self

    def __exit__(self, *exc):
        self.close()
