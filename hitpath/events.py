"""Hit descriptions and feature extraction from raw hit records."""
from __future__ import annotations

from dataclasses import dataclass
import json
import math
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .paths import DEFAULT_COORDINATE_PATH

SPRAY_CORRECTION = 0.95

_SPEED_COLUMNS = ("launch_speed", "ev_mph", "exit_velocity")
_ANGLE_COLUMNS = ("launch_angle", "la_angle", "la_deg")
_SPRAY_COLUMNS = (("hc_x", "hit_coord_x"), ("hc_y", "hit_coord_y"))
_DISTANCE_COLUMNS = ("hit_distance_sc", "hit_distance", "estimated_distance")
_SPIN_COLUMNS = ("hit_spin_rate", "hit_spin_rate_rpm", "batted_ball_spin_rate", "spin_rate")
_ID_COLUMNS = ("play_id", "hit_id", "id")


@dataclass(frozen=True, slots=True)
class HitParameters:
    """Launch conditions of a single batted ball.

    Attributes:
        launch_speed: Exit velocity in mph.
        launch_angle: Elevation above horizontal in degrees.
        spray_angle: Horizontal deflection from straight-away in degrees. In
            the arc model positive spray lands toward negative x (the
            third-base side of hit-coordinate records); the flight model
            sends positive spray toward positive x.
        spin_rate: Spin in rpm. ``None`` or ``0`` means neutral lift scaling.
        hit_distance: Recorded distance in feet, used to size geometric arcs.
        hit_offset: ``(dx, dy)`` offsets of the raw hit coordinates from home
            plate, when the hit was built from a record.
        hit_id: Label used in logs and output file names.
    """

    launch_speed: float
    launch_angle: float
    spray_angle: float = 0.0
    spin_rate: float | None = None
    hit_distance: float | None = None
    hit_offset: tuple[float, float] | None = None
    hit_id: str | None = None

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        *,
        transform: "CoordinateTransform | None" = None,
        default_id: str | None = None,
    ) -> "HitParameters":
        """Build a hit from a Statcast-style record.

        Exit velocity is required; a blank launch angle becomes ``0`` and the
        arc model later substitutes its default. Records without hit
        coordinates are treated as straight-away hits.
        """

        speed = _optional_float(record, _SPEED_COLUMNS)
        if speed is None:
            msg = f"Record has none of the columns {_SPEED_COLUMNS}"
            raise KeyError(msg)
        angle = _optional_float(record, _ANGLE_COLUMNS) or 0.0
        hc_x = _optional_float(record, _SPRAY_COLUMNS[0])
        hc_y = _optional_float(record, _SPRAY_COLUMNS[1])
        spray = 0.0
        offset = None
        if hc_x is not None and hc_y is not None:
            transform = transform or CoordinateTransform()
            spray = transform.spray_angle(hc_x, hc_y)
            offset = transform.offsets(hc_x, hc_y)
        hit_id = None
        for name in _ID_COLUMNS:
            value = record.get(name)
            if value is not None and str(value).strip() != "":
                hit_id = str(value)
                break
        return cls(
            launch_speed=speed,
            launch_angle=angle,
            spray_angle=spray,
            spin_rate=_optional_float(record, _SPIN_COLUMNS),
            hit_distance=_optional_float(record, _DISTANCE_COLUMNS),
            hit_offset=offset,
            hit_id=hit_id or default_id,
        )


@dataclass(frozen=True, slots=True)
class CoordinateTransform:
    """Map Statcast hit coordinates (``hc_x``/``hc_y``) to a spray angle.

    Home plate sits at ``(x_offset, y_offset)`` in the hit-coordinate image.
    The angle is mirrored so positive spray points toward the third-base
    line in the arc model's frame, then shrunk by ``correction`` to line
    the landing spots up with real stadium geometry.
    """

    x_offset: float = 125.42
    y_offset: float = 198.27
    correction: float = SPRAY_CORRECTION
    angle_offset_deg: float = 0.0

    @classmethod
    def from_file(cls, path: Path = DEFAULT_COORDINATE_PATH) -> "CoordinateTransform":
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Could not read coordinate config {path}: {exc}"
            raise ConfigError(msg) from exc
        cfg = data.get("hc_transform", {})
        return cls(
            x_offset=float(cfg.get("x_offset", 125.42)),
            y_offset=float(cfg.get("y_offset", 198.27)),
            correction=float(cfg.get("correction", SPRAY_CORRECTION)),
            angle_offset_deg=float(cfg.get("angle_offset_deg", 0.0)),
        )

    def offsets(self, hc_x: float, hc_y: float) -> tuple[float, float]:
        return hc_x - self.x_offset, self.y_offset - hc_y

    def spray_angle(self, hc_x: float, hc_y: float) -> float:
        dx, dy = self.offsets(hc_x, hc_y)
        base = -math.degrees(math.atan2(dx, dy))
        return base * self.correction + self.angle_offset_deg


def _optional_float(record: Mapping[str, Any], choices: tuple[str, ...]) -> float | None:
    for name in choices:
        value = record.get(name)
        if value is not None and str(value).strip() != "":
            try:
                number = float(value)
            except (TypeError, ValueError):
                continue
            # NaN and inf mark missing Statcast values.
            if math.isfinite(number):
                return number
    return None
