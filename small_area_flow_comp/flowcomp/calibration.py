# flowcomp/calibration.py
from __future__ import annotations
import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import (
    BoundaryViolationError,
    CalibrationCreateError,
    CalibrationStorageError,
    InsufficientPointsError,
    InvalidLengthError,
    InvalidMultiplierError,
    MalformedLineError,
    UnorderedLengthsError,
)

log = logging.getLogger(__name__)

_LENGTH_RE = re.compile(r"^\d+(\.\d+)?$")
_MULTIPLIER_RE = re.compile(r"^(0(\.\d+)?|1(\.0+)?)$")

MIN_POINTS = 3


@dataclass(frozen=True)
class CalibrationPoint:
    length: float       # extrusion segment length (mm)
    multiplier: float   # flow multiplier in [0, 1]


CalibrationSequence = Tuple[CalibrationPoint, ...]

DEFAULT_POINTS: CalibrationSequence = (
    CalibrationPoint(0.0, 0.0),
    CalibrationPoint(0.2, 0.4444),
    CalibrationPoint(0.4, 0.6145),
    CalibrationPoint(0.6, 0.7059),
    CalibrationPoint(0.8, 0.7619),
    CalibrationPoint(1.5, 0.8571),
    CalibrationPoint(2.0, 0.8889),
    CalibrationPoint(3.0, 0.9231),
    CalibrationPoint(5.0, 0.9520),
    CalibrationPoint(10.0, 1.0),
)


def format_point(p: CalibrationPoint) -> str:
    return f"{p.length:g}, {p.multiplier:g}"


def write_calibration(path: str, points: Iterable[CalibrationPoint]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for p in points:
            f.write(format_point(p) + "\n")


def create_default(path: str) -> None:
    log.warning("Creating %s (as one doesn't exist)", path)
    try:
        write_calibration(path, DEFAULT_POINTS)
    except OSError as e:
        raise CalibrationCreateError(f"Error with creating {path}: {e}") from e
    log.info("Successfully created %s", path)


def parse_line(line: str) -> CalibrationPoint:
    """Parse one ``length, multiplier`` line."""
    parts = line.strip().split(",")
    if len(parts) != 2:
        raise MalformedLineError(line)

    length_text = parts[0].strip()
    multiplier_text = parts[1].strip()
    if not _LENGTH_RE.match(length_text):
        raise InvalidLengthError(length_text)
    if not _MULTIPLIER_RE.match(multiplier_text):
        raise InvalidMultiplierError(multiplier_text)
    return CalibrationPoint(float(length_text), float(multiplier_text))


def validate(points: List[CalibrationPoint]) -> CalibrationSequence:
    if len(points) < MIN_POINTS:
        raise InsufficientPointsError(
            f"Please specify at least {MIN_POINTS} flow model points (got {len(points)})")
    if points[0].length != 0.0 or points[-1].multiplier != 1.0:
        raise BoundaryViolationError("First E length must be 0.0 and last flowComp must be 1.0")
    for prev, cur in zip(points, points[1:]):
        if cur.length <= prev.length:
            raise UnorderedLengthsError(
                f"E lengths must be strictly increasing: {prev.length:g} then {cur.length:g}")
    return tuple(points)


def load_calibration(path: str) -> CalibrationSequence:
    """
    Load calibration points from ``path``, writing the default table first
    when the file does not exist. Any problem raises a CalibrationError.
    """
    if not os.path.exists(path):
        create_default(path)

    points: List[CalibrationPoint] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if not line.strip():
                    continue
                log.debug(line)
                points.append(parse_line(line))
    except OSError as e:
        raise CalibrationStorageError(f"Issue loading {path}: {e}") from e

    return validate(points)
