"""
Ground follower and player model poses
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation, Slerp

from rider.motion import normalized
from rider.params import PoseParams
from rider.state import PoseState

logger = logging.getLogger(__name__)

WORLD_UP = np.array([0.0, 1.0, 0.0])
# Tried in order when forward is parallel to the up hint
_FALLBACK_HINTS = (np.array([0.0, 0.0, -1.0]), np.array([1.0, 0.0, 0.0]))


def look_rotation(forward: Sequence[float], up_hint: Sequence[float] = WORLD_UP) -> Rotation:
    """
    Rotation whose +Z axis faces `forward` and whose +Y is as close to `up_hint` as possible

    Args:
        forward: Facing direction (any length)
        up_hint: Preferred up direction

    Returns:
        Rotation; identity if forward has zero length
    """
    z = normalized(forward)
    if z is None:
        logger.debug("Zero-length look direction, using identity rotation")
        return Rotation.identity()

    up = normalized(up_hint)
    hints = ((up,) if up is not None else ()) + _FALLBACK_HINTS

    for hint in hints:
        x = np.cross(hint, z)
        norm = np.linalg.norm(x)
        if norm > 1e-9:
            break
    x /= norm
    y = np.cross(z, x)
    return Rotation.from_matrix(np.column_stack([x, y, z]))


def blend_rotation(start: Rotation, end: Rotation, t: float) -> Rotation:
    """Spherical interpolation from start to end, t clamped into [0, 1]"""
    t = min(max(t, 0.0), 1.0)
    keys = Rotation.from_quat(np.vstack([start.as_quat(), end.as_quat()]))
    return Slerp([0.0, 1.0], keys)(t)


class PoseComposer:
    """Turns the rider's curve position into world poses"""

    def __init__(self, params: Optional[PoseParams] = None) -> None:
        """
        Initialize pose composer

        Args:
            params: Presentation tunables (defaults if None)
        """
        self.params = params if params is not None else PoseParams()
        self.world_up = np.asarray(self.params.world_up, dtype=float)
        self.model_offset = np.asarray(self.params.model_offset, dtype=float)
        # Constant reference, not curve dependent
        self.flat_rotation = look_rotation(self.params.flat_axis, self.world_up)

    def ground_rotation(self, tangent: np.ndarray) -> Rotation:
        """Ground follower faces the direction of travel"""
        return look_rotation(tangent, self.world_up)

    def compose(
        self,
        ground_position: np.ndarray,
        tangent: np.ndarray,
        jump_height: float,
        host_rotation: Optional[Rotation] = None,
    ) -> PoseState:
        """
        Compose ground and model poses for one tick

        The model orientation blends from ground-aligned (on the ground) to
        flat (at full jump height). This is a presentation heuristic; the
        angle is not derived from a jump trajectory.

        Args:
            ground_position: World position on the curve
            tangent: World tangent at the rider's parameter
            jump_height: Jump input, clamped into [0, 1] (NaN counts as 0)
            host_rotation: Rotation applied to the model offset (identity if None)

        Returns:
            PoseState for this tick
        """
        jump = float(jump_height)
        if np.isnan(jump):
            logger.debug("NaN jump height, treating as grounded")
            jump = 0.0
        jump = min(max(jump, 0.0), 1.0)
        ground_position = np.asarray(ground_position, dtype=float)

        ground_rotation = self.ground_rotation(tangent)
        model_rotation = blend_rotation(self.flat_rotation, ground_rotation, 1.0 - jump)

        offset = host_rotation.apply(self.model_offset) if host_rotation is not None else self.model_offset
        model_position = ground_position + offset + self.world_up * (self.params.max_jump_height * jump)

        return PoseState(
            ground_position=ground_position,
            ground_orientation=ground_rotation.as_quat(),
            model_position=model_position,
            model_orientation=model_rotation.as_quat(),
        )
