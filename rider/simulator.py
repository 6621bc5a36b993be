"""
Main rider simulator: per-tick pipeline and driver loop
"""

import logging
from typing import Callable, Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from rider.analysis import RunAnalyzer
from rider.camera import CameraFollow
from rider.motion import MotionSimulator
from rider.params import ConfigurationError, PoseParams, RiderParams
from rider.pose import PoseComposer
from rider.state import MotionState, PoseState
from rider.track import SplineTrack

logger = logging.getLogger(__name__)

# Columns of the state history returned by RiderSimulator.simulate
POSITION, VELOCITY, SLOPE = 0, 1, 2


def init_state(params: RiderParams, track: Optional[SplineTrack], start_position: float = 0.0) -> MotionState:
    """
    Create the motion state for a new run

    Args:
        params: Rider motion tunables
        track: Track to ride on
        start_position: Initial curve parameter

    Returns:
        Initial motion state seeded with params.initial_velocity

    Raises:
        ConfigurationError: If no track is assigned
    """
    if track is None:
        raise ConfigurationError("Rider does not have a track to follow")
    return MotionState(position=start_position, velocity=params.initial_velocity)


def tick(
    state: MotionState,
    dt: float,
    track: SplineTrack,
    simulator: MotionSimulator,
    composer: PoseComposer,
    jump_height: float = 0.0,
    host_rotation: Optional[Rotation] = None,
) -> Tuple[MotionState, PoseState]:
    """
    Run one simulation tick

    Geometry is sampled at the current parameter, the velocity and parameter
    are advanced, then the poses are composed at the advanced parameter. The
    ground follower faces along the tangent sampled before the advance.

    Args:
        state: Motion state at the start of the tick
        dt: Time step (s), must be non-negative
        track: Curve geometry
        simulator: Motion simulator
        composer: Pose composer
        jump_height: External jump input for this tick
        host_rotation: Rotation applied to the model offset

    Returns:
        Tuple of (new_state, pose)
    """
    sample = track.sample(state.position)
    new_state = simulator.step(state, dt, sample)
    ground_position = track.evaluate_position(new_state.position)
    pose = composer.compose(ground_position, sample.tangent, jump_height, host_rotation)
    return new_state, pose


class RiderSimulator:
    """Simulates a rider following a spline track"""

    def __init__(
        self,
        params: RiderParams,
        pose_params: Optional[PoseParams] = None,
        track: Optional[SplineTrack] = None,
        camera: Optional[CameraFollow] = None,
        start_position: float = 0.0,
    ) -> None:
        """
        Initialize simulator

        Args:
            params: Rider motion tunables
            pose_params: Presentation tunables (defaults if None)
            track: Track to follow, required
            camera: Follow camera updated after every tick
            start_position: Initial curve parameter

        Raises:
            ConfigurationError: If no track is assigned
        """
        self.state = init_state(params, track, start_position)
        self.params = params
        self.track = track
        self.motion = MotionSimulator(params)
        self.composer = PoseComposer(pose_params)
        self.camera = camera
        self.analyzer = RunAnalyzer(params, closed=track.closed)
        self.start_position = start_position

        self.pose: Optional[PoseState] = None
        self.host_rotation: Optional[Rotation] = None

    def reset(self) -> None:
        """Return to the initial state"""
        self.state = init_state(self.params, self.track, self.start_position)
        self.pose = None

    def slope(self) -> float:
        """Slope signal at the current position"""
        return self.motion.slope(self.track.sample(self.state.position))

    def step(self, dt: float, jump_height: float = 0.0) -> PoseState:
        """
        Advance one tick and publish the pose

        Args:
            dt: Time step (s)
            jump_height: External jump input for this tick

        Returns:
            Published pose
        """
        self.state, self.pose = tick(
            self.state, dt, self.track, self.motion, self.composer, jump_height, self.host_rotation
        )
        if self.camera is not None:
            self.camera.follow(self.pose)
        return self.pose

    def simulate(
        self,
        duration: float = 10.0,
        dt: float = 1.0 / 60.0,
        jump_profile: Optional[Callable[[float], float]] = None,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Run simulation from the current state

        Args:
            duration: Simulated time (s)
            dt: Time step (s), one tick per frame
            jump_profile: Jump input as a function of time (0 if None)

        Returns:
            Tuple of (time_array, state_history, pose_history)
            state_history is [N x 3] with [position, velocity, slope] after each tick
            pose_history is [N x 14] (see PoseState.as_array)
        """
        t = np.arange(dt, duration + dt * 0.5, dt)
        state_history = np.zeros((len(t), 3))
        pose_history = np.zeros((len(t), 14))

        logger.info("Simulating %.2fs at dt=%.4f (%d ticks)", duration, dt, len(t))

        for i, time in enumerate(t):
            # Slope that drove this tick's velocity update
            slope = self.slope()
            jump_height = jump_profile(float(time)) if jump_profile is not None else 0.0
            pose = self.step(dt, jump_height)
            state_history[i] = [self.state.position, self.state.velocity, slope]
            pose_history[i] = pose.as_array()

        logger.info("Finished at position %.4f, velocity %.4f", self.state.position, self.state.velocity)
        return t, state_history, pose_history

    def analyze(self, t: np.ndarray, state: np.ndarray) -> dict:
        """
        Summarize simulation results

        Args:
            t: Time array
            state: State history

        Returns:
            Dictionary with analysis results
        """
        return self.analyzer.analyze(t, state)
