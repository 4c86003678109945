# flowcomp/gcode.py
from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

log = logging.getLogger(__name__)

COMMENT = ";"

# X, Y or E followed by an unsigned number
_LINE_OF_INTEREST_RE = re.compile(r"[XYE]\d+(?:\.\d+)?")
# E followed by a non-negative decimal, nothing else
_EXTRUSION_MOVE_RE = re.compile(r"^E(?:0\.\d+|\.\d+|[1-9]\d*|\d+\.\d+)$")


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


def is_line_of_interest(line: str) -> bool:
    return _LINE_OF_INTEREST_RE.search(line) is not None


def is_extrusion_move(token: str) -> bool:
    return _EXTRUSION_MOVE_RE.match(token) is not None


def split_tokens(line: str) -> list:
    """Single-space split of the stripped line; empty tokens are kept so a join restores spacing."""
    return line.strip().split(" ")


def extrusion_length(end: Position, start: Position) -> float:
    return math.hypot(end.x - start.x, end.y - start.y)


def scan_coordinates(line: str) -> Tuple[Optional[float], Optional[float]]:
    """X and Y found on ``line``; None for an axis the line does not set."""
    x: Optional[float] = None
    y: Optional[float] = None

    stripped = line.strip()
    if stripped == "" or stripped.startswith(COMMENT):
        return x, y

    for token in stripped.split():
        head = token[0]
        if head == COMMENT:
            break
        if head not in "XxYy":
            continue
        try:
            value = float(token[1:])
        except ValueError as e:
            log.error("Tried converting %s to double but got error: %s", token[1:], e)
            continue
        if head in "Xx":
            x = value
        else:
            y = value
    return x, y


def updated_position(line: str, previous: Position) -> Position:
    x, y = scan_coordinates(line)
    return Position(
        x=previous.x if x is None else x,
        y=previous.y if y is None else y,
    )
