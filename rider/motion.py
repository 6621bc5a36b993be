"""
Slope-reactive motion along the curve parameter
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

import numpy as np

from rider.params import RiderParams
from rider.state import CurveSample, MotionState

logger = logging.getLogger(__name__)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a to b with t clamped into [0, 1]"""
    t = min(max(t, 0.0), 1.0)
    return a + (b - a) * t


def normalized(vector: Sequence[float]) -> Optional[np.ndarray]:
    """
    Unit vector in the direction of `vector`, promoted to 3D

    Args:
        vector: 2D or 3D vector

    Returns:
        Normalized 3D vector, or None if the vector has zero length
    """
    v = np.zeros(3)
    v[: len(vector)] = vector
    norm = np.linalg.norm(v)
    if norm == 0 or not np.isfinite(norm):
        return None
    return v / norm


def slope_signal(direction: Sequence[float], up: Sequence[float]) -> float:
    """
    How aligned the travel direction is with the curve up vector

    Positive when the up vector leans towards the direction of travel
    (downhill), negative when it leans away (uphill).

    Args:
        direction: Travel reference vector (2D or 3D)
        up: Curve up vector at the current parameter

    Returns:
        Slope in [-1, 1]; 0.0 if either vector is degenerate
    """
    d = normalized(direction)
    u = normalized(up)
    if d is None or u is None:
        logger.debug("Degenerate slope input (direction=%s, up=%s), using slope 0", direction, up)
        return 0.0
    return float(np.clip(np.dot(d, u), -1.0, 1.0))


class MotionSimulator:
    """Advances the rider's curve parameter with a slope-reactive velocity"""

    def __init__(self, params: RiderParams) -> None:
        """
        Initialize motion simulator

        Args:
            params: Rider motion tunables
        """
        self.params = params

    def slope(self, sample: CurveSample) -> float:
        """Slope signal for a curve sample"""
        return slope_signal(self.params.direction, sample.up)

    def clamp_velocity(self, velocity: float) -> float:
        """Cap the velocity into [min_velocity, max_velocity]"""
        return min(max(velocity, self.params.min_velocity), self.params.max_velocity)

    def update_velocity(self, velocity: float, slope: float, dt: float) -> float:
        """
        Apply the velocity law for one tick

        Args:
            velocity: Current velocity
            slope: Slope signal in [-1, 1]
            dt: Time step (s), must be non-negative

        Returns:
            New velocity, clamped into [min_velocity, max_velocity]
        """
        p = self.params

        if slope > 0:
            # Accelerating down hills
            velocity = lerp(velocity, p.max_velocity, abs(slope * p.acceleration_rate) * dt)
        elif slope < 0:
            # Hill friction, ease towards the slowest speed
            velocity = lerp(velocity, p.min_velocity, abs(slope * p.hill_friction_amount) * dt)

        # Almost horizontal: subtle friction overrides the result above
        if -p.flat_band < slope < p.flat_band:
            velocity = lerp(velocity, p.min_velocity, p.subtle_friction_amount * dt)

        return self.clamp_velocity(velocity)

    def step(self, state: MotionState, dt: float, sample: CurveSample) -> MotionState:
        """
        Advance the motion state by one tick

        Args:
            state: Current motion state
            dt: Time step (s), must be non-negative
            sample: Curve geometry at state.position

        Returns:
            New motion state
        """
        if not self.params.simulate_movement:
            return state

        velocity = self.update_velocity(state.velocity, self.slope(sample), dt)
        return replace(state, position=state.position + velocity * dt, velocity=velocity)
