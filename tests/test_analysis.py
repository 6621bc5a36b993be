"""
Unit tests for run analysis.

Tests the RunAnalyzer summary on synthetic histories and on real runs.
"""

import numpy as np
import pytest

from rider import RiderParams, RiderSimulator, RunAnalyzer, SplineTrack, default_track

EXPECTED_KEYS = {
    "distance_travelled",
    "final_position",
    "laps",
    "mean_velocity",
    "max_velocity",
    "min_velocity",
    "time_at_max_fraction",
    "time_at_min_fraction",
    "downhill_fraction",
    "uphill_fraction",
    "flat_fraction",
    "velocity_in_bounds",
    "monotonic",
    "speedometer",
}


class TestRunAnalysis:
    """Test suite for run analysis"""

    @pytest.fixture
    def params(self) -> RiderParams:
        """Create default rider parameters for testing"""
        return RiderParams()

    @pytest.fixture
    def analyzer(self, params: RiderParams) -> RunAnalyzer:
        """Create analyzer with default parameters"""
        return RunAnalyzer(params)

    @pytest.fixture
    def synthetic(self) -> tuple:
        """Four ticks: downhill at max speed, uphill, then two flat ticks at min speed"""
        t = np.array([0.25, 0.5, 0.75, 1.0])
        state = np.array([
            [0.10, 0.10, 0.5],
            [0.15, 0.05, -0.5],
            [0.20, 0.01, 0.0],
            [1.30, 0.01, 0.05],
        ])
        return t, state

    def test_analysis_returns_all_keys(self, params: RiderParams) -> None:
        """Test that analysis returns all expected keys"""
        simulator = RiderSimulator(params, track=default_track())
        t, state, _ = simulator.simulate(duration=1.0)

        analysis = simulator.analyze(t, state)

        assert set(analysis.keys()) == EXPECTED_KEYS

    def test_analysis_values_are_numeric(self, params: RiderParams) -> None:
        """Test that all analysis values are numeric (not NaN or inf)"""
        simulator = RiderSimulator(params, track=default_track())
        t, state, _ = simulator.simulate(duration=5.0)

        analysis = simulator.analyze(t, state)

        for key, value in analysis.items():
            if key in ["velocity_in_bounds", "monotonic"]:
                assert isinstance(value, bool)
            else:
                assert isinstance(value, (int, float))
                assert not np.isnan(value)
                assert not np.isinf(value)

    def test_real_run_holds_invariants(self, params: RiderParams) -> None:
        """Test that a full run reports in-bounds velocity and monotonic position"""
        simulator = RiderSimulator(params, track=default_track())
        t, state, _ = simulator.simulate(duration=20.0)

        analysis = simulator.analyze(t, state)

        assert analysis["velocity_in_bounds"]
        assert analysis["monotonic"]
        assert analysis["max_velocity"] <= params.max_velocity
        assert analysis["min_velocity"] >= params.min_velocity

    def test_terrain_fractions(self, analyzer: RunAnalyzer, synthetic: tuple) -> None:
        """Test downhill, uphill and flat fractions from the slope column"""
        analysis = analyzer.analyze(*synthetic)

        assert analysis["downhill_fraction"] == pytest.approx(0.25)
        assert analysis["uphill_fraction"] == pytest.approx(0.25)
        assert analysis["flat_fraction"] == pytest.approx(0.5)

    def test_speed_fractions(self, analyzer: RunAnalyzer, synthetic: tuple) -> None:
        """Test the share of ticks pinned at either speed bound"""
        analysis = analyzer.analyze(*synthetic)

        assert analysis["time_at_max_fraction"] == pytest.approx(0.25)
        assert analysis["time_at_min_fraction"] == pytest.approx(0.5)

    def test_position_summary(self, params: RiderParams, synthetic: tuple) -> None:
        """Test distance, final position and laps on a closed track"""
        analysis = RunAnalyzer(params, closed=True).analyze(*synthetic)

        assert analysis["distance_travelled"] == pytest.approx(1.2)
        assert analysis["final_position"] == pytest.approx(1.3)
        assert analysis["laps"] == 1
        assert analysis["speedometer"] == pytest.approx(0.1)

    def test_detects_out_of_bounds_velocity(self, analyzer: RunAnalyzer, synthetic: tuple) -> None:
        """Test that a velocity above max_velocity is flagged"""
        t, state = synthetic
        state = state.copy()
        state[1, 1] = 0.2

        analysis = analyzer.analyze(t, state)

        assert not analysis["velocity_in_bounds"]

    def test_detects_position_reset(self, analyzer: RunAnalyzer, synthetic: tuple) -> None:
        """Test that a backwards jump in position is flagged"""
        t, state = synthetic
        state = state.copy()
        state[2, 0] = 0.0

        analysis = analyzer.analyze(t, state)

        assert not analysis["monotonic"]

    def test_empty_history(self, analyzer: RunAnalyzer) -> None:
        """Test that an empty run gives a neutral summary"""
        analysis = analyzer.analyze(np.array([]), np.zeros((0, 3)))

        assert set(analysis.keys()) == EXPECTED_KEYS
        assert analysis["distance_travelled"] == 0.0
        assert analysis["velocity_in_bounds"]

    def test_open_track_has_no_laps(self, analyzer: RunAnalyzer, synthetic: tuple) -> None:
        """Test that running past the end of an open track is not counted as a lap"""
        analysis = analyzer.analyze(*synthetic)

        assert analysis["final_position"] == pytest.approx(1.3)
        assert analysis["laps"] == 0

    def test_simulator_counts_laps_from_track(self) -> None:
        """Test that the driver counts laps only when its track is closed"""
        params = RiderParams(min_velocity=0.5, max_velocity=0.5, initial_velocity=0.5)
        closed = SplineTrack(
            [[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [10.0, 0.0, 10.0], [0.0, 0.0, 10.0]],
            closed=True,
        )
        open_track = SplineTrack([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]])

        for track, expected in [(closed, 1), (open_track, 0)]:
            simulator = RiderSimulator(params, track=track)
            t, state, _ = simulator.simulate(duration=2.5, dt=0.05)

            assert simulator.analyze(t, state)["laps"] == expected
