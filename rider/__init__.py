"""
Spline Rider Simulation

This package simulates a rider travelling along a spline track, accelerating
down hills and slowing on climbs, and derives the ground follower, player
model and camera poses from that motion.
"""

from rider.params import ConfigurationError, PoseParams, RiderParams, load_config, load_config_file
from rider.state import CurveSample, MotionState, PoseState
from rider.track import SplineTrack, TrackTransform, default_track
from rider.motion import MotionSimulator, slope_signal
from rider.pose import PoseComposer, look_rotation
from rider.camera import CameraFollow
from rider.simulator import RiderSimulator, init_state, tick
from rider.analysis import RunAnalyzer
from rider.sweep import run_friction_sweep

__all__ = [
    "ConfigurationError",
    "PoseParams",
    "RiderParams",
    "load_config",
    "load_config_file",
    "CurveSample",
    "MotionState",
    "PoseState",
    "SplineTrack",
    "TrackTransform",
    "default_track",
    "MotionSimulator",
    "slope_signal",
    "PoseComposer",
    "look_rotation",
    "CameraFollow",
    "RiderSimulator",
    "init_state",
    "tick",
    "RunAnalyzer",
    "run_friction_sweep",
]
