# flowcomp/flow_model.py
from __future__ import annotations
import logging
from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

from .calibration import CalibrationPoint

log = logging.getLogger(__name__)

DECIMALS = 5


class FlowModel:
    """
    Natural cubic spline through calibration points, mapping an extrusion
    segment length (mm) to a flow multiplier.

    The spline is not clamped to [0, 1]; between steep points it can
    overshoot the calibration data.
    """

    def __init__(self, points: Sequence[CalibrationPoint]):
        self._points: Tuple[CalibrationPoint, ...] = tuple(points)
        self._lengths = np.array([p.length for p in self._points], dtype=float)
        self._multipliers = np.array([p.multiplier for p in self._points], dtype=float)
        self._spline = CubicSpline(self._lengths, self._multipliers, bc_type="natural")

    def max_length(self) -> float:
        return float(self._lengths[-1])

    def multiplier_at(self, length: float) -> float:
        if length < 0.0:
            log.warning("Tried to apply flow comp to extrusion length < 0")
            return 1.0
        if length > self.max_length():
            log.warning("Tried to apply flow comp to extrusion length > max flow comp length: %g",
                        self.max_length())
            return 1.0

        # knots return the calibration value itself
        idx = int(np.searchsorted(self._lengths, length))
        if idx < len(self._lengths) and self._lengths[idx] == length:
            return float(self._multipliers[idx])
        return float(self._spline(length))

    def apply(self, length: float, raw_extrusion: float) -> float:
        """Scaled extrusion, rounded half-to-even to 5 decimals by ``round``."""
        return round(raw_extrusion * self.multiplier_at(length), DECIMALS)

    def describe(self) -> Tuple[Tuple[float, float], ...]:
        return tuple((p.length, p.multiplier) for p in self._points)

    def comment_lines(self) -> List[str]:
        lines = ["; Flow Comp Model Points:"]
        lines += [f"; ({length:g}, {multiplier:g})" for length, multiplier in self.describe()]
        lines.append("")
        return lines

    def sample(self, samples: int = 200) -> Tuple[np.ndarray, np.ndarray]:
        """Evenly spaced (lengths, multipliers) over [0, max_length]."""
        xs = np.linspace(0.0, self.max_length(), samples)
        return xs, self._spline(xs)
