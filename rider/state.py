"""
Simulation state representation
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class MotionState:
    """Scalar state carried between ticks"""

    position: float  # Curve parameter (free running, track decides wrap/clamp)
    velocity: float  # Curve parameter units per second


@dataclass(frozen=True)
class CurveSample:
    """World-space curve geometry at one parameter value"""

    position: np.ndarray  # Point on the curve
    tangent: np.ndarray  # Direction of travel (not normalized)
    up: np.ndarray  # Local up/normal of the curve


@dataclass(frozen=True)
class PoseState:
    """Published poses for one tick (quaternions are scalar-last x, y, z, w)"""

    ground_position: np.ndarray
    ground_orientation: np.ndarray
    model_position: np.ndarray
    model_orientation: np.ndarray

    def as_array(self) -> np.ndarray:
        """Flatten to [ground_pos(3), ground_quat(4), model_pos(3), model_quat(4)]"""
        return np.concatenate([
            self.ground_position,
            self.ground_orientation,
            self.model_position,
            self.model_orientation,
        ])
