"""
Parameter sweep functions
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from rider.params import PoseParams, RiderParams
from rider.simulator import RiderSimulator
from rider.track import SplineTrack, default_track

logger = logging.getLogger(__name__)


def run_friction_sweep(
    hill_friction_amounts: list[float],
    duration: float = 20.0,
    dt: float = 1.0 / 60.0,
    track: Optional[SplineTrack] = None,
    params: Optional[RiderParams] = None,
    pose_params: Optional[PoseParams] = None,
) -> Dict[float, Dict[str, Any]]:
    """
    Run simulation for multiple hill friction values

    Args:
        hill_friction_amounts: List of hill friction values to try
        duration: Simulated time per run (s)
        dt: Time step (s)
        track: Track to ride on (default_track() if None)
        params: Base rider tunables, hill_friction_amount is overridden per run
        pose_params: Presentation tunables

    Returns:
        Dictionary with results for each hill friction value
    """
    base_params = params if params is not None else RiderParams()
    track = track if track is not None else default_track()
    results: Dict[float, Dict[str, Any]] = {}

    for friction in hill_friction_amounts:
        logger.info("Running hill_friction_amount=%s", friction)
        run_params = replace(base_params, hill_friction_amount=friction)
        simulator = RiderSimulator(run_params, pose_params=pose_params, track=track)

        t, state, poses = simulator.simulate(duration=duration, dt=dt)
        analysis = simulator.analyze(t, state)

        results[friction] = {
            "time": t,
            "state": state,
            "poses": poses,
            "analysis": analysis,
            "simulator": simulator,
        }

    return results
