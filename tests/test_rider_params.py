"""
Unit tests for RiderParams, PoseParams and configuration loading.

Tests default values, validation at construction time and loading options
from mappings and JSON files.
"""

import json
import math
from pathlib import Path

import pytest

from rider import ConfigurationError, PoseParams, RiderParams, load_config, load_config_file


class TestRiderParams:
    """Test suite for RiderParams dataclass"""

    def test_default_initialization(self) -> None:
        """Test that RiderParams initializes with default values"""
        params = RiderParams()

        assert params.acceleration_rate == 1.4
        assert params.min_velocity == 0.01
        assert params.max_velocity == 0.1
        assert params.hill_friction_amount == 2.0
        assert params.subtle_friction_amount == 0.125
        assert params.direction == (1.0, 0.0)
        assert params.initial_velocity == 0.1
        assert params.simulate_movement is True

    def test_custom_initialization(self) -> None:
        """Test that RiderParams can be initialized with custom values"""
        params = RiderParams(acceleration_rate=3.0, min_velocity=0.0, max_velocity=0.5, direction=[0.0, 1.0])

        assert params.acceleration_rate == 3.0
        assert params.min_velocity == 0.0
        assert params.max_velocity == 0.5
        assert params.direction == (0.0, 1.0)

    def test_params_are_immutable(self) -> None:
        """Test that parameters cannot change during a run"""
        params = RiderParams()

        with pytest.raises(AttributeError):
            params.max_velocity = 1.0  # type: ignore[misc]

    def test_min_above_max_rejected(self) -> None:
        """Test that min_velocity > max_velocity fails at construction"""
        with pytest.raises(ConfigurationError):
            RiderParams(min_velocity=0.2, max_velocity=0.1)

    def test_equal_bounds_allowed(self) -> None:
        """Test that a fixed speed (min == max) is valid"""
        params = RiderParams(min_velocity=0.05, max_velocity=0.05)

        assert params.min_velocity == params.max_velocity

    @pytest.mark.parametrize("field", [
        "min_velocity",
        "max_velocity",
        "acceleration_rate",
        "hill_friction_amount",
        "subtle_friction_amount",
    ])
    def test_negative_values_rejected(self, field: str) -> None:
        """Test that negative rates and bounds are rejected"""
        with pytest.raises(ConfigurationError):
            RiderParams(**{field: -0.5})

    def test_non_finite_rejected(self) -> None:
        """Test that NaN and infinity are rejected"""
        with pytest.raises(ConfigurationError):
            RiderParams(acceleration_rate=math.nan)
        with pytest.raises(ConfigurationError):
            RiderParams(max_velocity=math.inf)

    def test_zero_seed_velocity_rejected(self) -> None:
        """Test that the run cannot start without a seed velocity"""
        with pytest.raises(ConfigurationError):
            RiderParams(initial_velocity=0.0)

    def test_zero_flat_band_rejected(self) -> None:
        """Test that the flat band must have a positive width"""
        with pytest.raises(ConfigurationError):
            RiderParams(flat_band=0.0)

    def test_direction_must_be_2d(self) -> None:
        """Test that the travel reference is a 2D vector"""
        with pytest.raises(ConfigurationError):
            RiderParams(direction=(1.0, 0.0, 0.0))

    def test_configuration_error_is_value_error(self) -> None:
        """Test that callers catching ValueError also catch configuration errors"""
        assert issubclass(ConfigurationError, ValueError)


class TestPoseParams:
    """Test suite for PoseParams dataclass"""

    def test_default_initialization(self) -> None:
        """Test that PoseParams initializes with default values"""
        params = PoseParams()

        assert params.model_offset == (0.0, 0.0, 0.0)
        assert params.max_jump_height == 0.0
        assert params.flat_axis == (1.0, 0.0, 0.0)
        assert params.world_up == (0.0, 1.0, 0.0)

    def test_negative_jump_height_rejected(self) -> None:
        """Test that max_jump_height must be non-negative"""
        with pytest.raises(ConfigurationError):
            PoseParams(max_jump_height=-1.0)

    def test_offset_must_be_3d(self) -> None:
        """Test that the model offset is a 3D vector"""
        with pytest.raises(ConfigurationError):
            PoseParams(model_offset=(1.0, 2.0))


class TestLoadConfig:
    """Test suite for configuration loading"""

    def test_camel_case_options(self) -> None:
        """Test that camelCase option names are recognised"""
        params, pose_params = load_config({
            "accelerationRate": 2.0,
            "minVelocity": 0.02,
            "maxVelocity": 0.2,
            "hillFrictionAmount": 3.0,
            "subtleFrictionAmount": 0.25,
            "direction": [1.0, 0.0],
            "modelOffset": [0.0, 0.5, 0.0],
            "maxJumpHeight": 1.5,
        })

        assert params == RiderParams(
            acceleration_rate=2.0,
            min_velocity=0.02,
            max_velocity=0.2,
            hill_friction_amount=3.0,
            subtle_friction_amount=0.25,
        )
        assert pose_params.model_offset == (0.0, 0.5, 0.0)
        assert pose_params.max_jump_height == 1.5

    def test_field_names_accepted(self) -> None:
        """Test that dataclass field names work as option names"""
        params, pose_params = load_config({"max_velocity": 0.3, "max_jump_height": 2.0})

        assert params.max_velocity == 0.3
        assert pose_params.max_jump_height == 2.0

    def test_empty_config_gives_defaults(self) -> None:
        """Test that missing options keep their defaults"""
        params, pose_params = load_config({})

        assert params == RiderParams()
        assert pose_params == PoseParams()

    def test_unknown_option_rejected(self) -> None:
        """Test that misspelled options fail loudly"""
        with pytest.raises(ConfigurationError, match="maxVelocty"):
            load_config({"maxVelocty": 0.2})

    def test_invalid_values_rejected(self) -> None:
        """Test that validation runs on loaded values"""
        with pytest.raises(ConfigurationError):
            load_config({"minVelocity": 1.0, "maxVelocity": 0.5})

    def test_wrong_type_rejected(self) -> None:
        """Test that non-numeric values surface as configuration errors"""
        with pytest.raises(ConfigurationError):
            load_config({"accelerationRate": "fast"})

    def test_load_config_file(self, tmp_path: Path) -> None:
        """Test loading options from a JSON file"""
        path = tmp_path / "rider.json"
        path.write_text(json.dumps({"maxVelocity": 0.25, "maxJumpHeight": 1.0}), encoding="utf-8")

        params, pose_params = load_config_file(path)

        assert params.max_velocity == 0.25
        assert pose_params.max_jump_height == 1.0

    def test_load_config_file_requires_object(self, tmp_path: Path) -> None:
        """Test that a JSON file must contain an object"""
        path = tmp_path / "rider.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config_file(path)
