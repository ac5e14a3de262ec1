"""hitpath package — turn batted-ball launch conditions into 3D flight paths."""

from .arc import ArcControl, derive_arc_control, quadratic_bezier
from .events import CoordinateTransform, HitParameters
from .physics import FlightConstants, Trajectory, TrajectoryPoint, simulate_flight
from .simulate import SimulationResult, Simulator, TrajectoryModel, build_model

__all__ = [
    "ArcControl",
    "CoordinateTransform",
    "FlightConstants",
    "HitParameters",
    "SimulationResult",
    "Simulator",
    "Trajectory",
    "TrajectoryModel",
    "TrajectoryPoint",
    "build_model",
    "derive_arc_control",
    "quadratic_bezier",
    "simulate_flight",
]
