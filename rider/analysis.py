"""
Run analysis functions
"""

from typing import Any, Dict

import numpy as np

from rider.params import RiderParams


class RunAnalyzer:
    """Summarizes a simulated run: speed profile, terrain mix and invariants"""

    def __init__(self, params: RiderParams, closed: bool = False, tolerance: float = 1e-9) -> None:
        """
        Initialize run analyzer

        Args:
            params: Rider motion tunables the run used
            closed: Whether the run was on a closed track (laps are only counted there)
            tolerance: Slack for floating point comparisons against the bounds
        """
        self.params = params
        self.closed = closed
        self.tolerance = tolerance

    def analyze(self, t: np.ndarray, state: np.ndarray) -> Dict[str, Any]:
        """
        Analyze simulation results

        Args:
            t: Time array
            state: State history [N x 3] with [position, velocity, slope]

        Returns:
            Dictionary with analysis results
        """
        if len(t) == 0:
            return {
                "distance_travelled": 0.0,
                "final_position": 0.0,
                "laps": 0,
                "mean_velocity": 0.0,
                "max_velocity": 0.0,
                "min_velocity": 0.0,
                "time_at_max_fraction": 0.0,
                "time_at_min_fraction": 0.0,
                "downhill_fraction": 0.0,
                "uphill_fraction": 0.0,
                "flat_fraction": 0.0,
                "velocity_in_bounds": True,
                "monotonic": True,
                "speedometer": 0.0,
            }

        position = state[:, 0]
        velocity = state[:, 1]
        slope = state[:, 2]
        p = self.params
        tol = self.tolerance

        # Distance between the first and last recorded ticks, in curve parameter units
        final_position = float(position[-1])
        distance_travelled = float(position[-1] - position[0])

        # Fraction of ticks spent pinned at either speed bound
        at_max = np.isclose(velocity, p.max_velocity, rtol=0.0, atol=1e-4 * max(p.max_velocity, tol))
        at_min = np.isclose(velocity, p.min_velocity, rtol=0.0, atol=1e-4 * max(p.max_velocity, tol))

        # Terrain mix from the slope signal
        flat = (slope > -p.flat_band) & (slope < p.flat_band)
        downhill = slope >= p.flat_band
        uphill = slope <= -p.flat_band

        velocity_in_bounds = bool(
            np.all(velocity >= p.min_velocity - tol) and np.all(velocity <= p.max_velocity + tol)
        )
        monotonic = bool(np.all(np.diff(position) >= -tol))

        return {
            "distance_travelled": distance_travelled,
            "final_position": final_position,
            # Open tracks hold the end point, so the parameter past 1 is not a lap
            "laps": int(np.floor(final_position)) if self.closed else 0,
            "mean_velocity": float(np.mean(velocity)),
            "max_velocity": float(np.max(velocity)),
            "min_velocity": float(np.min(velocity)),
            "time_at_max_fraction": float(np.mean(at_max)),
            "time_at_min_fraction": float(np.mean(at_min)),
            "downhill_fraction": float(np.mean(downhill)),
            "uphill_fraction": float(np.mean(uphill)),
            "flat_fraction": float(np.mean(flat)),
            "velocity_in_bounds": velocity_in_bounds,
            "monotonic": monotonic,
            "speedometer": float(velocity[-1] / p.max_velocity) if p.max_velocity > 0 else 0.0,
        }
