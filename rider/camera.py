"""
Fixed-offset follow camera
"""

from typing import Optional, Sequence

import numpy as np

from rider.state import PoseState


class CameraFollow:
    """Keeps the camera at a fixed offset from the ground follower"""

    def __init__(self, offset: Sequence[float] = (0.0, 0.0, -10.0)) -> None:
        self.offset = np.asarray(offset, dtype=float)
        self.position: Optional[np.ndarray] = None

    def follow(self, pose: PoseState) -> np.ndarray:
        """Move the camera after the pose for this tick has been published"""
        self.position = pose.ground_position + self.offset
        return self.position
