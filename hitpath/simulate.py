"""High level simulation orchestrator."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from .arc import DEFAULT_ARC_STEPS, derive_arc_control
from .events import HitParameters
from .physics import FlightConstants, Trajectory, simulate_flight

logger = logging.getLogger(__name__)


class TrajectoryModel(str, Enum):
    """Available trajectory models, from cheapest to most faithful."""

    ARC = "arc"
    FLIGHT = "flight"


class ArcModel:
    kind = TrajectoryModel.ARC

    def __init__(self, *, steps: int = DEFAULT_ARC_STEPS):
        self.steps = steps

    def trajectory(self, hit: HitParameters) -> Trajectory:
        return derive_arc_control(hit).trajectory(self.steps)


class FlightModel:
    kind = TrajectoryModel.FLIGHT

    def __init__(self, *, constants: FlightConstants | None = None):
        self.constants = constants or FlightConstants()

    def trajectory(self, hit: HitParameters) -> Trajectory:
        return simulate_flight(hit, self.constants)


def build_model(
    kind: TrajectoryModel | str,
    *,
    constants: FlightConstants | None = None,
    arc_steps: int = DEFAULT_ARC_STEPS,
) -> ArcModel | FlightModel:
    kind = TrajectoryModel(kind)
    if kind is TrajectoryModel.ARC:
        return ArcModel(steps=arc_steps)
    return FlightModel(constants=constants)


@dataclass(slots=True)
class SimulationResult:
    hit: HitParameters
    model: TrajectoryModel
    trajectory: Trajectory
    distance_error: float | None


class Simulator:
    def __init__(
        self,
        *,
        model: TrajectoryModel | str = TrajectoryModel.FLIGHT,
        constants: FlightConstants | None = None,
        arc_steps: int = DEFAULT_ARC_STEPS,
    ):
        self.model = build_model(model, constants=constants, arc_steps=arc_steps)

    def simulate(self, hit: HitParameters) -> SimulationResult:
        trajectory = self.model.trajectory(hit)
        err = (trajectory.landing_distance - hit.hit_distance) if hit.hit_distance else None
        logger.debug(
            "Simulated hit %s with %s model: %d points, apex %.1f ft, landing %.1f ft",
            hit.hit_id,
            self.model.kind.value,
            len(trajectory.points),
            trajectory.apex,
            trajectory.landing_distance,
        )
        return SimulationResult(hit=hit, model=self.model.kind, trajectory=trajectory, distance_error=err)

    def simulate_all(self, hits: list[HitParameters]) -> list[SimulationResult]:
        return [self.simulate(hit) for hit in hits]
