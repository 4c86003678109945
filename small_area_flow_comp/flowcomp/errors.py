# flowcomp/errors.py
from __future__ import annotations


class FlowCompError(Exception):
    """Fatal condition; cli.main maps it to ``exit_code``."""
    exit_code: int = 999


class AlreadyProcessedError(FlowCompError):
    exit_code = 1


class StreamOpenError(FlowCompError):
    exit_code = 2


class CalibrationError(FlowCompError):
    exit_code = 5


class InvalidLengthError(CalibrationError):
    exit_code = 3

    def __init__(self, text: str):
        super().__init__(f"Incorrect format of eLength in model file: {text}")
        self.text = text


class InvalidMultiplierError(CalibrationError):
    exit_code = 4

    def __init__(self, text: str):
        super().__init__(f"Incorrect format of flowComp in model file: {text}")
        self.text = text


class CalibrationStorageError(CalibrationError):
    exit_code = 5


class MalformedLineError(CalibrationError):
    exit_code = 6

    def __init__(self, text: str):
        super().__init__(f"Incorrect format of parameter line in model file: {text!r}")
        self.text = text


class BoundaryViolationError(CalibrationError):
    exit_code = 7


class InsufficientPointsError(CalibrationError):
    exit_code = 8


class CalibrationCreateError(CalibrationError):
    exit_code = 10


class UnorderedLengthsError(CalibrationError):
    exit_code = 11


UNKNOWN_ERROR_EXIT_CODE = 999
