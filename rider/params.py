"""
Rider tunables and configuration loading
"""

import json
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union


class ConfigurationError(ValueError):
    """Raised at setup time when a run cannot be configured"""


@dataclass(frozen=True)
class RiderParams:
    """Motion tunables of the rider"""

    acceleration_rate: float = 1.4  # how quickly to accelerate downhill
    min_velocity: float = 0.01  # curve parameter units per second
    max_velocity: float = 0.1  # curve parameter units per second
    hill_friction_amount: float = 2.0  # damping when going uphill
    subtle_friction_amount: float = 0.125  # damping when riding almost horizontally
    direction: Tuple[float, float] = (1.0, 0.0)  # travelling right all the time
    initial_velocity: float = 0.1  # seed velocity, non-zero to avoid a stuck start
    flat_band: float = 0.1  # |slope| below this counts as almost horizontal
    simulate_movement: bool = True

    def __post_init__(self) -> None:
        """Validate tunables"""
        for name in (
            "acceleration_rate",
            "min_velocity",
            "max_velocity",
            "hill_friction_amount",
            "subtle_friction_amount",
            "initial_velocity",
            "flat_band",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
            if value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")

        if self.min_velocity > self.max_velocity:
            raise ConfigurationError(
                f"min_velocity ({self.min_velocity}) exceeds max_velocity ({self.max_velocity})"
            )
        if self.initial_velocity == 0:
            raise ConfigurationError("initial_velocity must be non-zero")
        if self.flat_band == 0:
            raise ConfigurationError("flat_band must be positive")
        if len(self.direction) != 2:
            raise ConfigurationError(f"direction must be a 2D vector, got {self.direction}")

        # Lists coming from config files are frozen into tuples
        object.__setattr__(self, "direction", tuple(float(c) for c in self.direction))


@dataclass(frozen=True)
class PoseParams:
    """Presentation tunables for the ground follower and player model"""

    model_offset: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # player model origin offset
    max_jump_height: float = 0.0  # lift at full jump height
    flat_axis: Tuple[float, float, float] = (1.0, 0.0, 0.0)  # facing while fully airborne
    world_up: Tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self) -> None:
        """Validate tunables"""
        if not math.isfinite(self.max_jump_height) or self.max_jump_height < 0:
            raise ConfigurationError(
                f"max_jump_height must be a non-negative number, got {self.max_jump_height}"
            )
        for name in ("model_offset", "flat_axis", "world_up"):
            value = getattr(self, name)
            if len(value) != 3:
                raise ConfigurationError(f"{name} must be a 3D vector, got {value}")
            object.__setattr__(self, name, tuple(float(c) for c in value))


# Option names as they appear in config files
_RIDER_KEYS = {
    "accelerationRate": "acceleration_rate",
    "minVelocity": "min_velocity",
    "maxVelocity": "max_velocity",
    "hillFrictionAmount": "hill_friction_amount",
    "subtleFrictionAmount": "subtle_friction_amount",
    "direction": "direction",
    "initialVelocity": "initial_velocity",
    "flatBand": "flat_band",
    "simulateMovement": "simulate_movement",
}

_POSE_KEYS = {
    "modelOffset": "model_offset",
    "maxJumpHeight": "max_jump_height",
    "flatAxis": "flat_axis",
    "worldUp": "world_up",
}


def load_config(config: Mapping[str, Any]) -> Tuple[RiderParams, PoseParams]:
    """
    Build rider and pose parameters from a config mapping

    Both camelCase option names (``maxVelocity``) and the dataclass field
    names (``max_velocity``) are accepted. Missing options keep their defaults.

    Args:
        config: Mapping of option name to value

    Returns:
        Tuple of (rider_params, pose_params)

    Raises:
        ConfigurationError: On unknown options or invalid values
    """
    rider_fields = {f.name for f in fields(RiderParams)}
    pose_fields = {f.name for f in fields(PoseParams)}
    rider_kwargs: Dict[str, Any] = {}
    pose_kwargs: Dict[str, Any] = {}

    for key, value in config.items():
        if key in _RIDER_KEYS or key in rider_fields:
            rider_kwargs[_RIDER_KEYS.get(key, key)] = value
        elif key in _POSE_KEYS or key in pose_fields:
            pose_kwargs[_POSE_KEYS.get(key, key)] = value
        else:
            raise ConfigurationError(f"Unknown configuration option: {key!r}")

    try:
        return RiderParams(**rider_kwargs), PoseParams(**pose_kwargs)
    except TypeError as e:
        # e.g. a string where a vector was expected
        raise ConfigurationError(str(e)) from e


def load_config_file(path: Union[str, Path]) -> Tuple[RiderParams, PoseParams]:
    """
    Load rider and pose parameters from a JSON file

    Args:
        path: Path to a JSON object of options (see load_config)

    Returns:
        Tuple of (rider_params, pose_params)
    """
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ConfigurationError(f"{path}: expected a JSON object at top level")
    return load_config(config)
