from __future__ import annotations

import dataclasses
import json
import math
from pathlib import Path

import pytest

from hitpath.errors import ConfigError
from hitpath.events import CoordinateTransform, HitParameters
from hitpath.physics import simulate_flight


def test_center_field_hit_has_zero_spray() -> None:
    assert CoordinateTransform().spray_angle(125.42, 100.0) == pytest.approx(0.0)


def test_spray_is_mirrored_and_corrected() -> None:
    transform = CoordinateTransform()
    assert transform.spray_angle(25.42, 98.27) == pytest.approx(45.0 * 0.95)
    assert transform.spray_angle(225.42, 98.27) == pytest.approx(-45.0 * 0.95)


def test_offsets_are_relative_to_home_plate() -> None:
    assert CoordinateTransform().offsets(25.42, 98.27) == pytest.approx((-100.0, 100.0))


def test_transform_from_file(tmp_path: Path) -> None:
    path = tmp_path / "coordinates.json"
    path.write_text(json.dumps({"hc_transform": {"correction": 1.0, "angle_offset_deg": 2.0}}))
    transform = CoordinateTransform.from_file(path)
    assert transform.x_offset == 125.42
    assert transform.spray_angle(25.42, 98.27) == pytest.approx(47.0)


def test_transform_from_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        CoordinateTransform.from_file(tmp_path / "nope.json")


def test_hit_from_statcast_record() -> None:
    record = {
        "play_id": "abc-123",
        "launch_speed": "101.5",
        "launch_angle": "28",
        "hc_x": "25.42",
        "hc_y": "98.27",
        "hit_distance_sc": "410",
        "hit_spin_rate": "",
    }
    hit = HitParameters.from_record(record)
    assert hit.hit_id == "abc-123"
    assert hit.launch_speed == 101.5
    assert hit.launch_angle == 28.0
    assert hit.spray_angle == pytest.approx(42.75)
    assert hit.hit_offset == pytest.approx((-100.0, 100.0))
    assert hit.hit_distance == 410.0
    assert hit.spin_rate is None


def test_record_without_coordinates_is_straight_away() -> None:
    hit = HitParameters.from_record({"ev_mph": 88, "la_deg": 12}, default_id="hit-0007")
    assert hit.spray_angle == 0.0
    assert hit.hit_offset is None
    assert hit.hit_id == "hit-0007"


def test_record_without_speed_is_rejected() -> None:
    with pytest.raises(KeyError):
        HitParameters.from_record({"launch_angle": 20})


def test_hit_parameters_are_immutable() -> None:
    hit = HitParameters(launch_speed=100.0, launch_angle=30.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        hit.launch_speed = 90.0  # type: ignore[misc]


def test_nan_values_in_records_count_as_missing() -> None:
    record = json.loads('{"launch_speed": 100, "launch_angle": 30, "hit_spin_rate": NaN, "hit_distance_sc": NaN}')
    hit = HitParameters.from_record(record)
    assert hit.spin_rate is None
    assert hit.hit_distance is None
    trajectory = simulate_flight(hit)
    assert all(math.isfinite(value) for point in trajectory.points for value in point.as_list())
    assert trajectory.points == simulate_flight(HitParameters(launch_speed=100.0, launch_angle=30.0)).points


def test_record_with_non_finite_speed_is_rejected() -> None:
    with pytest.raises(KeyError):
        HitParameters.from_record({"launch_speed": float("nan"), "launch_angle": 20})
    with pytest.raises(KeyError):
        HitParameters.from_record({"launch_speed": "inf", "launch_angle": 20})
