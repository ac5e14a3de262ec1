"""Trajectory integration with drag and vertical Magnus lift (standard-library implementation)."""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
from pathlib import Path
from typing import Any, Sequence

from .errors import ConfigError
from .events import HitParameters
from .paths import DEFAULT_PHYSICS_PATH

logger = logging.getLogger(__name__)

MPH_TO_FPS = 1.467
GRAVITY_FTPS2 = 32.174
AIR_DENSITY_SLUG_FT3 = 0.002376
BALL_AREA_FT2 = 0.00426
BALL_MASS_SLUG = 0.32
DRAG_COEFFICIENT = 0.35
LIFT_COEFFICIENT = 0.2
SPIN_REFERENCE_RPM = 2200.0
RELEASE_HEIGHT_FT = 3.0
DEFAULT_DT = 0.01
DEFAULT_MAX_STEPS = 10_000

_MIN_SPEED_FPS = 1e-9

# JSON key -> FlightConstants field
_CONFIG_KEYS = {
    "air_density": "air_density",
    "drag_coefficient": "drag_coefficient",
    "lift_coefficient": "lift_coefficient",
    "cross_section_ft2": "area",
    "mass_slug": "mass",
    "gravity": "gravity",
    "dt": "dt",
    "release_height_ft": "release_height",
    "spin_reference_rpm": "spin_reference_rpm",
    "max_steps": "max_steps",
}


def _vec_add(a: Sequence[float], b: Sequence[float]) -> list[float]:
    return [ax + bx for ax, bx in zip(a, b)]


def _vec_scale(a: Sequence[float], scalar: float) -> list[float]:
    return [ax * scalar for ax in a]


def _vec_len(a: Sequence[float]) -> float:
    return math.sqrt(sum(ax * ax for ax in a))


@dataclass(frozen=True, slots=True)
class TrajectoryPoint:
    x: float
    y: float
    z: float

    def as_list(self) -> list[float]:
        return [self.x, self.y, self.z]


@dataclass(frozen=True, slots=True)
class Trajectory:
    """Ordered points of one simulated hit plus derived summaries.

    ``time_step`` is the seconds between consecutive points for integrated
    flights and ``None`` for geometric arcs, whose points are not evenly
    spaced in time.
    """

    points: tuple[TrajectoryPoint, ...]
    time_step: float | None = None

    def __post_init__(self) -> None:
        if not self.points:
            msg = "A trajectory needs at least one point"
            raise ValueError(msg)

    @property
    def apex(self) -> float:
        return max(point.y for point in self.points)

    @property
    def landing(self) -> TrajectoryPoint:
        return self.points[-1]

    @property
    def landing_distance(self) -> float:
        return math.hypot(self.landing.x, self.landing.z)

    @property
    def flight_time(self) -> float | None:
        if self.time_step is None:
            return None
        return (len(self.points) - 1) * self.time_step

    def to_json(self) -> list[dict[str, float]]:
        return [{"x": point.x, "y": point.y, "z": point.z} for point in self.points]


@dataclass(frozen=True, slots=True)
class FlightConstants:
    """Physical constants for :func:`simulate_flight`.

    Units are feet, seconds and slugs. The mass default is the value the
    visualiser was tuned with, not a regulation baseball, so drag and lift
    are gentle.
    """

    air_density: float = AIR_DENSITY_SLUG_FT3
    drag_coefficient: float = DRAG_COEFFICIENT
    lift_coefficient: float = LIFT_COEFFICIENT
    area: float = BALL_AREA_FT2
    mass: float = BALL_MASS_SLUG
    gravity: float = GRAVITY_FTPS2
    dt: float = DEFAULT_DT
    release_height: float = RELEASE_HEIGHT_FT
    spin_reference_rpm: float = SPIN_REFERENCE_RPM
    max_steps: int = DEFAULT_MAX_STEPS

    def __post_init__(self) -> None:
        # Without these the loop may never come back to the ground.
        for name in ("mass", "gravity", "dt", "spin_reference_rpm", "max_steps"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                msg = f"{name} must be a positive finite number, got {value!r}"
                raise ConfigError(msg)
        for name in ("air_density", "drag_coefficient", "lift_coefficient", "area"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                msg = f"{name} must be a non-negative finite number, got {value!r}"
                raise ConfigError(msg)

    @classmethod
    def from_file(cls, path: Path = DEFAULT_PHYSICS_PATH) -> "FlightConstants":
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Could not read physics config {path}: {exc}"
            raise ConfigError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Physics config {path} must contain a JSON object"
            raise ConfigError(msg)
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "FlightConstants":
        kwargs: dict[str, Any] = {}
        for key, field_name in _CONFIG_KEYS.items():
            if key not in data:
                continue
            try:
                value = float(data[key])
            except (TypeError, ValueError) as exc:
                msg = f"Physics config value {key}={data[key]!r} is not a number"
                raise ConfigError(msg) from exc
            if field_name == "max_steps" and math.isfinite(value):
                value = int(value)
            kwargs[field_name] = value
        unknown = sorted(set(data) - set(_CONFIG_KEYS))
        if unknown:
            logger.warning("Ignoring unknown physics config keys: %s", ", ".join(unknown))
        return cls(**kwargs)

    @property
    def drag_factor(self) -> float:
        """Drag acceleration per unit speed squared."""

        return 0.5 * self.air_density * self.drag_coefficient * self.area / self.mass

    @property
    def lift_factor(self) -> float:
        """Lift acceleration per unit speed squared, before spin scaling."""

        return 0.5 * self.air_density * self.lift_coefficient * self.area / self.mass


def spin_factor(spin_rate: float | None, reference_rpm: float = SPIN_REFERENCE_RPM) -> float:
    """Scale applied to the lift force; missing or zero spin is neutral."""

    if not spin_rate:
        return 1.0
    return spin_rate / reference_rpm


def initial_velocity(hit: HitParameters) -> tuple[float, float, float]:
    speed_fps = hit.launch_speed * MPH_TO_FPS
    launch_rad = math.radians(hit.launch_angle)
    spray_rad = math.radians(hit.spray_angle)
    horizontal = speed_fps * math.cos(launch_rad)
    return (
        horizontal * math.sin(spray_rad),
        speed_fps * math.sin(launch_rad),
        -horizontal * math.cos(spray_rad),
    )


def simulate_flight(hit: HitParameters, constants: FlightConstants | None = None) -> Trajectory:
    """Integrate the hit until it drops below ground.

    Explicit Euler with a fixed step: velocity is advanced first and the new
    velocity moves the position. Every pre-step position is recorded; the
    first sample below ground is appended as the final point without being
    pulled back to ``y = 0``.
    """

    constants = constants or FlightConstants()
    dt = constants.dt
    drag_factor = constants.drag_factor
    # Lift is modelled as vertical only, scaled by the launch elevation.
    lift_scale = (
        constants.lift_factor
        * spin_factor(hit.spin_rate, constants.spin_reference_rpm)
        * math.cos(math.radians(hit.launch_angle))
    )
    gravity = (0.0, -constants.gravity, 0.0)

    pos = [0.0, constants.release_height, 0.0]
    vel = list(initial_velocity(hit))
    points: list[TrajectoryPoint] = []

    steps = 0
    while pos[1] >= 0.0:
        points.append(TrajectoryPoint(pos[0], pos[1], pos[2]))
        speed = _vec_len(vel)
        if speed <= _MIN_SPEED_FPS:
            logger.debug("Hit %s has no speed; stopping after %d points", hit.hit_id, len(points))
            break
        if steps >= constants.max_steps:
            logger.warning(
                "Hit %s still airborne after %d steps; returning a truncated trajectory",
                hit.hit_id,
                steps,
            )
            break
        speed_sq = speed * speed
        drag = _vec_scale(vel, -drag_factor * speed_sq / speed)
        lift = (0.0, lift_scale * speed_sq, 0.0)
        accel = _vec_add(_vec_add(gravity, drag), lift)
        vel = _vec_add(vel, _vec_scale(accel, dt))
        pos = _vec_add(pos, _vec_scale(vel, dt))
        steps += 1
    else:
        points.append(TrajectoryPoint(pos[0], pos[1], pos[2]))

    logger.debug("Hit %s integrated in %d steps", hit.hit_id, steps)
    return Trajectory(points=tuple(points), time_step=dt)
