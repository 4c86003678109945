import logging

import pytest

from flowcomp.calibration import CalibrationPoint
from flowcomp.flow_model import FlowModel


@pytest.fixture(autouse=True)
def reset_flowcomp_logger():
    yield
    root = logging.getLogger("flowcomp")
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def small_model():
    return FlowModel([
        CalibrationPoint(0.0, 0.0),
        CalibrationPoint(5.0, 0.9),
        CalibrationPoint(10.0, 1.0),
    ])


def write_model(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)
