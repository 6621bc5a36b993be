"""
Spline Rider Simulation

Headless batch runner: simulates the rider on the default track for a range
of hill friction values and prints a summary of each run.
"""

import argparse
import logging

from rider import load_config_file, run_friction_sweep


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a hill friction sweep on the default track")
    parser.add_argument("--config", help="JSON file of rider options")
    parser.add_argument("--duration", type=float, default=20.0, help="Simulated time per run (s)")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Time step (s)")
    parser.add_argument(
        "--friction", type=float, nargs="+", default=[0.5, 1.0, 2.0, 4.0, 8.0], help="Hill friction values"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log simulation progress")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    params, pose_params = (load_config_file(args.config) if args.config else (None, None))
    results = run_friction_sweep(
        args.friction, duration=args.duration, dt=args.dt, params=params, pose_params=pose_params
    )

    # Print results
    print("Hill Friction Sweep Results:")
    print("-" * 80)
    for friction, data in results.items():
        analysis = data["analysis"]
        print(f"\nHill friction: {friction}")
        print(f"  Final position: {analysis['final_position']:.4f}")
        print(f"  Mean velocity: {analysis['mean_velocity']:.4f}")
        print(f"  Max velocity: {analysis['max_velocity']:.4f}")
        print(f"  Time at max speed: {analysis['time_at_max_fraction']*100:.1f}%")
        print(f"  Time at min speed: {analysis['time_at_min_fraction']*100:.1f}%")
        print(f"  Downhill / uphill / flat: {analysis['downhill_fraction']*100:.1f}% / "
              f"{analysis['uphill_fraction']*100:.1f}% / {analysis['flat_fraction']*100:.1f}%")
        print(f"  Velocity in bounds: {analysis['velocity_in_bounds']}")


if __name__ == "__main__":
    main()
