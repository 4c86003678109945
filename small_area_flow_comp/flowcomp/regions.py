# flowcomp/regions.py
from __future__ import annotations
import logging
from enum import Enum

log = logging.getLogger(__name__)


class RegionState(Enum):
    IDLE = "idle"
    COMPENSATING = "compensating"


# Exact (stripped) lines that open a region to compensate
START_MARKERS = frozenset({
    ";TYPE:Solid infill",
    ";TYPE:Top solid infill",
    ";TYPE:Internal solid infill",
    ";TYPE:Top surface",
    ";TYPE:Bottom surface",
    "; FEATURE: Top surface",
    "; FEATURE: Internal solid infill",
    "; FEATURE: Bottom surface",
})

# Any line containing one of these changes the extrusion type
CHANGE_MARKERS = (";TYPE:", "; FEATURE:")


def is_start_marker(line: str) -> bool:
    return line.strip() in START_MARKERS


def is_change_marker(line: str) -> bool:
    return any(marker in line for marker in CHANGE_MARKERS)


def next_state(state: RegionState, line: str) -> RegionState:
    if is_start_marker(line):
        return RegionState.COMPENSATING
    if state is RegionState.COMPENSATING and is_change_marker(line):
        return RegionState.IDLE
    return state


class RegionTracker:
    def __init__(self, state: RegionState = RegionState.IDLE):
        self.state = state

    @property
    def compensating(self) -> bool:
        return self.state is RegionState.COMPENSATING

    def update(self, line: str) -> RegionState:
        new = next_state(self.state, line)
        if new is not self.state:
            log.debug("Region %s -> %s at %r", self.state.value, new.value, line.strip())
        self.state = new
        return new
