"""
Spline track geometry: the curve the rider follows
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.interpolate import CubicSpline
from scipy.spatial.transform import Rotation

from rider.params import ConfigurationError
from rider.state import CurveSample

logger = logging.getLogger(__name__)

# Fallback lateral axis when the tangent runs parallel to the reference up
LATERAL_AXIS = np.array([0.0, 0.0, 1.0])


class TrackTransform:
    """Local-to-world transform of a track (scale, then rotate, then translate)"""

    def __init__(
        self,
        translation: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Optional[Rotation] = None,
        scale: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> None:
        """
        Initialize transform

        Args:
            translation: World position of the track origin
            rotation: World rotation of the track (identity if None)
            scale: Per-axis scale applied to points only
        """
        self.translation = np.asarray(translation, dtype=float)
        self.rotation = rotation if rotation is not None else Rotation.identity()
        self.scale = np.asarray(scale, dtype=float)

    def transform_point(self, point: np.ndarray) -> np.ndarray:
        """Map a local point to world space"""
        return self.rotation.apply(point * self.scale) + self.translation

    def transform_direction(self, direction: np.ndarray) -> np.ndarray:
        """Map a local direction to world space (unaffected by scale and translation)"""
        return self.rotation.apply(direction)


class SplineTrack:
    """
    Cubic spline through control points, parameterized over [0, 1]

    Knots are placed by chord length so the parameter advances roughly
    uniformly along the track. Out-of-range parameters wrap on closed tracks
    and clamp on open ones.
    """

    def __init__(
        self,
        control_points: Sequence[Sequence[float]],
        closed: bool = False,
        transform: Optional[TrackTransform] = None,
        reference_up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        """
        Initialize track

        Args:
            control_points: Local-space points the curve passes through [N x 3]
            closed: Whether the track loops back to its first point
            transform: Local-to-world transform (identity if None)
            reference_up: Local up the curve normal is derived from

        Raises:
            ConfigurationError: If the control points cannot define a curve
        """
        points = np.asarray(control_points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ConfigurationError(f"control points must be an N x 3 array, got shape {points.shape}")
        min_points = 3 if closed else 2
        if len(points) < min_points:
            raise ConfigurationError(f"{'closed' if closed else 'open'} track needs at least {min_points} points")

        if closed:
            # Periodic splines need the first and last points to match exactly
            if np.allclose(points[0], points[-1]):
                points = points.copy()
                points[-1] = points[0]
            else:
                points = np.vstack([points, points[:1]])

        chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
        if np.any(chords <= 0):
            raise ConfigurationError("consecutive control points must be distinct")

        knots = np.concatenate([[0.0], np.cumsum(chords)])
        knots /= knots[-1]

        self.closed = closed
        self.control_points = points
        self.transform = transform if transform is not None else TrackTransform()
        self.reference_up = np.asarray(reference_up, dtype=float)
        self.length = float(np.sum(chords))  # Polyline length, local units

        self._spline = CubicSpline(knots, points, axis=0, bc_type="periodic" if closed else "not-a-knot")
        self._derivative = self._spline.derivative()

    def to_domain(self, t: float) -> float:
        """Map any curve parameter into [0, 1] (wrap when closed, clamp when open)"""
        if self.closed:
            return float(t % 1.0)
        return float(np.clip(t, 0.0, 1.0))

    def _local_up(self, tangent: np.ndarray) -> np.ndarray:
        norm = np.linalg.norm(tangent)
        if norm == 0:
            return self.reference_up.copy()
        forward = tangent / norm

        # Remove the tangent component from the reference up
        up = self.reference_up - np.dot(self.reference_up, forward) * forward
        up_norm = np.linalg.norm(up)
        if up_norm < 1e-9:
            up = np.cross(LATERAL_AXIS, forward)
            up_norm = np.linalg.norm(up)
            if up_norm < 1e-9:
                logger.debug("Tangent %s parallel to both reference axes", forward)
                return self.reference_up.copy()
        return up / up_norm

    def evaluate_position(self, t: float) -> np.ndarray:
        """World-space position at parameter t"""
        return self.transform.transform_point(self._spline(self.to_domain(t)))

    def evaluate_tangent(self, t: float) -> np.ndarray:
        """World-space tangent (derivative w.r.t. the parameter) at t"""
        return self.transform.transform_direction(self._derivative(self.to_domain(t)))

    def evaluate_up_vector(self, t: float) -> np.ndarray:
        """World-space unit up vector at t"""
        tangent = self._derivative(self.to_domain(t))
        return self.transform.transform_direction(self._local_up(tangent))

    def sample(self, t: float) -> CurveSample:
        """
        Evaluate all geometry at parameter t

        Args:
            t: Curve parameter (any value, mapped through to_domain)

        Returns:
            CurveSample with world-space position, tangent and up
        """
        u = self.to_domain(t)
        local_tangent = self._derivative(u)
        return CurveSample(
            position=self.transform.transform_point(self._spline(u)),
            tangent=self.transform.transform_direction(local_tangent),
            up=self.transform.transform_direction(self._local_up(local_tangent)),
        )


def default_track() -> SplineTrack:
    """Rolling hills track travelling along +X, used by the batch runner and dashboard"""
    return SplineTrack([
        [0.0, 12.0, 0.0],
        [10.0, 8.0, 0.0],
        [20.0, 4.0, 0.0],
        [30.0, 1.0, 0.0],
        [40.0, 2.5, 0.0],
        [50.0, 5.0, 0.0],
        [60.0, 4.0, 0.0],
        [70.0, 0.0, 0.0],
        [85.0, 0.0, 0.0],
        [100.0, 3.0, 0.0],
    ])
