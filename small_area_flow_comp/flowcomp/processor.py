# flowcomp/processor.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from .errors import AlreadyProcessedError
from .flow_model import FlowModel
from .gcode import (
    Position,
    extrusion_length,
    is_extrusion_move,
    is_line_of_interest,
    split_tokens,
    updated_position,
)
from .logger import AdjustmentLog
from .regions import RegionState, RegionTracker

log = logging.getLogger(__name__)

SCRIPT_VERSION = "V0.7.1"
FLOW_MODEL_VERSION = "V0.2.1"
LOGGER_VERSION = "V0.0.1"

PROCESSED_MARKER = "; File Parsed By Flow Comp Script"


@dataclass
class ProcessingState:
    region: RegionTracker = field(default_factory=RegionTracker)
    extrusion_length: float = -1.0
    previous_position: Position = field(default_factory=Position)
    line_no: int = 0
    adjusted_lines: int = 0


def header_lines() -> List[str]:
    return [
        PROCESSED_MARKER,
        f"; Script Ver. {SCRIPT_VERSION}",
        f"; Flow Model Ver. {FLOW_MODEL_VERSION}",
        f"; Logger Ver. {LOGGER_VERSION}",
    ]


class FlowCompProcessor:
    """
    Single pass over a gcode stream. Inside flagged infill/surface regions,
    E values of short extrusion moves are scaled by the flow model; every
    line is written as soon as it has been handled.
    """

    def __init__(self, model: FlowModel, adjustments: Optional[AdjustmentLog] = None):
        self.model = model
        self.adjustments = adjustments

    def run(self, input_stream: TextIO, output_stream: TextIO) -> ProcessingState:
        for h in header_lines():
            output_stream.write(h + "\n")

        state = ProcessingState()
        for raw in input_stream:
            state.line_no += 1
            line = self.process_line(raw.rstrip("\r\n"), state)
            output_stream.write(line + "\n")

        log.info("Processed %d lines, adjusted %d", state.line_no, state.adjusted_lines)
        return state

    def process_line(self, line: str, state: ProcessingState) -> str:
        if line.strip() == PROCESSED_MARKER:
            raise AlreadyProcessedError("File has already been processed by this script")

        state.region.update(line)
        current = updated_position(line, state.previous_position)

        if state.region.state is RegionState.COMPENSATING and is_line_of_interest(line):
            line = self._rewrite_extrusion(line, current, state)

        state.previous_position = current
        return line

    def _rewrite_extrusion(self, line: str, current: Position, state: ProcessingState) -> str:
        old_value: float = -1.0
        new_value: float = -1.0
        rewritten = False
        tokens = split_tokens(line)

        for i, token in enumerate(tokens):
            if not is_extrusion_move(token):
                continue
            try:
                old_value = float(token[1:])
            except ValueError:
                log.error("Unable to convert %s to double", token[1:])
                continue

            state.extrusion_length = extrusion_length(current, state.previous_position)
            if 0.0 < state.extrusion_length < self.model.max_length():
                new_value = self.model.apply(state.extrusion_length, old_value)
                tokens[i] = f"E{new_value:.5f}"
                rewritten = True

        # retractions and E values the model maps to themselves leave the line as it was
        if old_value <= 0 or old_value == new_value:
            return line

        if rewritten:
            state.adjusted_lines += 1
            if self.adjustments is not None:
                self.adjustments.record(state.line_no, old_value, new_value, state.extrusion_length,
                                        self.model.multiplier_at(state.extrusion_length))
        return " ".join(tokens) + f"; Old Flow Value: {old_value}   Length: {state.extrusion_length:.5f}"
