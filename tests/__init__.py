"""
Test suite for the Spline Rider Simulation.

This package contains unit tests organized by component:
- test_rider_params.py: Tests for RiderParams, PoseParams and config loading
- test_motion.py: Tests for the slope-reactive velocity law
- test_pose.py: Tests for look rotations and pose composition
- test_track.py: Tests for spline track evaluation and parameter domain
- test_simulation.py: Tests for the tick pipeline, driver loop and camera
- test_analysis.py: Tests for run analysis
- test_integration.py: Integration tests for the hill friction sweep
"""
