"""Geometric flight arcs built from a quadratic Bezier curve."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from .events import HitParameters
from .physics import GRAVITY_FTPS2, MPH_TO_FPS, Trajectory, TrajectoryPoint

logger = logging.getLogger(__name__)

ARC_START = TrajectoryPoint(0.0, 2.5, -0.5)
LANDING_HEIGHT_FT = 1.0
DEFAULT_LAUNCH_ANGLE_DEG = 45.0
DEFAULT_ARC_STEPS = 50
# Lifts the control point so the drawn curve peaks near the projectile apex.
APEX_HEIGHT_FACTOR = 2.005


@dataclass(frozen=True, slots=True)
class ArcControl:
    start: TrajectoryPoint
    apex: TrajectoryPoint
    end: TrajectoryPoint

    def curve(self, steps: int = DEFAULT_ARC_STEPS) -> list[TrajectoryPoint]:
        return quadratic_bezier(self.start, self.apex, self.end, steps=steps)

    def trajectory(self, steps: int = DEFAULT_ARC_STEPS) -> Trajectory:
        return Trajectory(points=tuple(self.curve(steps)))


def quadratic_bezier(
    start: TrajectoryPoint,
    apex: TrajectoryPoint,
    end: TrajectoryPoint,
    steps: int = DEFAULT_ARC_STEPS,
) -> list[TrajectoryPoint]:
    """Sample ``steps + 1`` evenly parameterised points, both ends included."""

    if steps < 1:
        msg = f"steps must be at least 1, got {steps}"
        raise ValueError(msg)
    points: list[TrajectoryPoint] = []
    for i in range(steps + 1):
        t = i / steps
        w0 = (1.0 - t) * (1.0 - t)
        w1 = 2.0 * (1.0 - t) * t
        w2 = t * t
        points.append(
            TrajectoryPoint(
                w0 * start.x + w1 * apex.x + w2 * end.x,
                w0 * start.y + w1 * apex.y + w2 * end.y,
                w0 * start.z + w1 * apex.z + w2 * end.z,
            )
        )
    return points


def apex_height(launch_speed: float, launch_angle: float) -> float:
    """Control-point height above the start for a given launch."""

    vy0 = launch_speed * MPH_TO_FPS * math.sin(math.radians(launch_angle))
    return vy0 * vy0 / (2.0 * GRAVITY_FTPS2) * APEX_HEIGHT_FACTOR


def drag_free_range(launch_speed: float, launch_angle: float, height: float) -> float:
    """Horizontal carry of a drag-free projectile released ``height`` feet up."""

    speed_fps = launch_speed * MPH_TO_FPS
    launch_rad = math.radians(launch_angle)
    vy0 = speed_fps * math.sin(launch_rad)
    hang_time = (vy0 + math.sqrt(max(vy0 * vy0 + 2.0 * GRAVITY_FTPS2 * height, 0.0))) / GRAVITY_FTPS2
    return speed_fps * math.cos(launch_rad) * hang_time


def derive_arc_control(hit: HitParameters, *, start: TrajectoryPoint = ARC_START) -> ArcControl:
    launch_angle = hit.launch_angle or DEFAULT_LAUNCH_ANGLE_DEG
    distance = hit.hit_distance
    if distance is None:
        distance = drag_free_range(hit.launch_speed, launch_angle, start.y)
        logger.debug("Hit %s has no recorded distance; using drag-free range %.1f ft", hit.hit_id, distance)
    spray_rad = math.radians(hit.spray_angle)
    landing_x = -distance * math.sin(spray_rad)
    landing_z = -distance * math.cos(spray_rad)
    apex = TrajectoryPoint(
        landing_x / 2.0,
        start.y + apex_height(hit.launch_speed, launch_angle),
        landing_z / 2.0,
    )
    end = TrajectoryPoint(landing_x, LANDING_HEIGHT_FT, landing_z)
    return ArcControl(start=start, apex=apex, end=end)
