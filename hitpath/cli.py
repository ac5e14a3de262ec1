"""Command line interface implemented with argparse."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from .errors import HitPathError
from .events import CoordinateTransform, HitParameters
from .output import OutputWriter
from .paths import DEFAULT_COORDINATE_PATH, DEFAULT_PHYSICS_PATH
from .physics import FlightConstants
from .simulate import SimulationResult, Simulator, TrajectoryModel

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn batted-ball launch conditions into 3D flight paths")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    sim = subparsers.add_parser("simulate", help="Simulate a single hit")
    sim.add_argument("--speed", type=float, required=True, help="Exit velocity in mph")
    sim.add_argument("--launch-angle", type=float, required=True, help="Launch angle in degrees")
    sim.add_argument("--spray", type=float, default=0.0, help="Spray angle in degrees")
    sim.add_argument("--spin", type=float, help="Spin rate in rpm")
    sim.add_argument("--distance", type=float, help="Recorded hit distance in feet (sizes the arc model)")
    sim.add_argument("--id", dest="hit_id", type=str, help="Label used for output files")
    _add_common_options(sim)

    batch = subparsers.add_parser("batch", help="Simulate every hit record in a JSON file")
    batch.add_argument("records", type=Path, help="JSON list of hit records (launch_speed, launch_angle, hc_x, ...)")
    batch.add_argument("--coordinates", type=Path, help="Hit-coordinate transform JSON")
    _add_common_options(batch)

    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--model",
        choices=[model.value for model in TrajectoryModel],
        default=TrajectoryModel.FLIGHT.value,
        help="Trajectory model to run",
    )
    parser.add_argument("--steps", type=int, default=50, help="Number of arc segments for the arc model")
    parser.add_argument("--physics-config", type=Path, help="Physics constants JSON")
    parser.add_argument("--out", type=Path, help="Directory for trajectory JSON files and summary.csv")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    try:
        if args.command == "simulate":
            return _run_simulate(args)
        if args.command == "batch":
            return _run_batch(args)
    except HitPathError as err:
        raise SystemExit(str(err)) from err
    parser.print_help()
    return 0


def _load_constants(path: Path | None) -> FlightConstants:
    if path is not None:
        return FlightConstants.from_file(path)
    if DEFAULT_PHYSICS_PATH.exists():
        return FlightConstants.from_file(DEFAULT_PHYSICS_PATH)
    logger.debug("No physics config at %s; using built-in constants", DEFAULT_PHYSICS_PATH)
    return FlightConstants()


def _load_transform(path: Path | None) -> CoordinateTransform:
    if path is not None:
        return CoordinateTransform.from_file(path)
    if DEFAULT_COORDINATE_PATH.exists():
        return CoordinateTransform.from_file(DEFAULT_COORDINATE_PATH)
    return CoordinateTransform()


def _build_simulator(args: argparse.Namespace) -> Simulator:
    if args.steps < 1:
        raise SystemExit("--steps must be at least 1")
    return Simulator(
        model=args.model,
        constants=_load_constants(args.physics_config),
        arc_steps=args.steps,
    )


def _run_simulate(args: argparse.Namespace) -> int:
    hit = HitParameters(
        launch_speed=args.speed,
        launch_angle=args.launch_angle,
        spray_angle=args.spray,
        spin_rate=args.spin,
        hit_distance=args.distance,
        hit_id=args.hit_id,
    )
    simulator = _build_simulator(args)
    result = simulator.simulate(hit)
    _emit([result], args.out, single=True)
    return 0


def _run_batch(args: argparse.Namespace) -> int:
    try:
        records = json.loads(args.records.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read hit records from {args.records}: {exc}") from exc
    if not isinstance(records, list) or not records:
        raise SystemExit("Hit records file must contain a non-empty JSON list")
    transform = _load_transform(args.coordinates)
    hits: list[HitParameters] = []
    for index, record in enumerate(records):
        try:
            hits.append(HitParameters.from_record(record, transform=transform, default_id=f"hit-{index + 1:04d}"))
        except (KeyError, AttributeError) as exc:
            logger.warning("Skipping record %d: %s", index, exc)
    if not hits:
        raise SystemExit("No usable hit records were found")
    logger.info("Loaded %d hits from %s", len(hits), args.records)
    simulator = _build_simulator(args)
    _emit(simulator.simulate_all(hits), args.out)
    return 0


def _emit(results: list[SimulationResult], out_dir: Path | None, *, single: bool = False) -> None:
    if out_dir is None:
        payload = [_result_payload(result) for result in results]
        print(json.dumps(payload[0] if single else payload, indent=2))
        return
    bundle = OutputWriter(out_dir).write(results)
    print(f"Summary written to {bundle.summary_path}")
    print(f"Trajectories stored in {bundle.trajectories_dir}")


def _result_payload(result: SimulationResult) -> dict[str, Any]:
    trajectory = result.trajectory
    return {
        "hit_id": result.hit.hit_id,
        "model": result.model.value,
        "apex": trajectory.apex,
        "landing_distance": trajectory.landing_distance,
        "flight_time": trajectory.flight_time,
        "distance_error": result.distance_error,
        "points": trajectory.to_json(),
    }


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
