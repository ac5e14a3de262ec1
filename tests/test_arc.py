from __future__ import annotations

import math

import pytest

from hitpath.arc import (
    ARC_START,
    ArcControl,
    apex_height,
    derive_arc_control,
    drag_free_range,
    quadratic_bezier,
)
from hitpath.events import HitParameters
from hitpath.physics import TrajectoryPoint

START = TrajectoryPoint(0.0, 2.5, -0.5)
APEX = TrajectoryPoint(-20.0, 90.0, -180.0)
END = TrajectoryPoint(-40.0, 1.0, -360.0)


@pytest.mark.parametrize("steps", [1, 10, 50, 200])
def test_curve_has_steps_plus_one_points(steps: int) -> None:
    points = quadratic_bezier(START, APEX, END, steps)
    assert len(points) == steps + 1
    assert points[0] == START
    assert points[-1] == END


def test_default_curve_has_fifty_segments() -> None:
    assert len(quadratic_bezier(START, APEX, END)) == 51


def test_curve_midpoint_blends_control_points() -> None:
    points = quadratic_bezier(START, APEX, END, steps=2)
    mid = points[1]
    assert mid.x == pytest.approx(0.25 * START.x + 0.5 * APEX.x + 0.25 * END.x)
    assert mid.y == pytest.approx(0.25 * START.y + 0.5 * APEX.y + 0.25 * END.y)
    assert mid.z == pytest.approx(0.25 * START.z + 0.5 * APEX.z + 0.25 * END.z)


def test_curve_is_deterministic() -> None:
    assert quadratic_bezier(START, APEX, END, 37) == quadratic_bezier(START, APEX, END, 37)


def test_curve_rejects_zero_steps() -> None:
    with pytest.raises(ValueError):
        quadratic_bezier(START, APEX, END, 0)


def test_control_points_for_straight_away_hit() -> None:
    hit = HitParameters(launch_speed=100.0, launch_angle=30.0, spray_angle=0.0, hit_distance=400.0)
    control = derive_arc_control(hit)
    vy0 = 100.0 * 1.467 * math.sin(math.radians(30.0))
    expected_height = vy0 * vy0 / (2.0 * 32.174) * 2.005
    assert control.start == ARC_START
    assert control.end.x == pytest.approx(0.0)
    assert control.end.y == 1.0
    assert control.end.z == pytest.approx(-400.0)
    assert control.apex.x == pytest.approx(0.0)
    assert control.apex.y == pytest.approx(2.5 + expected_height)
    assert control.apex.z == pytest.approx(-200.0)


def test_positive_spray_lands_toward_negative_x() -> None:
    for spray in (10.0, 25.0, 40.0):
        control = derive_arc_control(
            HitParameters(launch_speed=95.0, launch_angle=25.0, spray_angle=spray, hit_distance=350.0)
        )
        assert control.end.x < 0.0
        assert control.end.z < 0.0
        assert math.hypot(control.end.x, control.end.z) == pytest.approx(350.0)


def test_missing_launch_angle_defaults_to_forty_five() -> None:
    defaulted = derive_arc_control(HitParameters(launch_speed=90.0, launch_angle=0.0, hit_distance=300.0))
    explicit = derive_arc_control(HitParameters(launch_speed=90.0, launch_angle=45.0, hit_distance=300.0))
    assert defaulted == explicit


def test_missing_distance_uses_drag_free_range() -> None:
    control = derive_arc_control(HitParameters(launch_speed=100.0, launch_angle=30.0))
    assert control.end.z == pytest.approx(-drag_free_range(100.0, 30.0, ARC_START.y))


def test_apex_sits_above_both_ends() -> None:
    control = derive_arc_control(HitParameters(launch_speed=70.0, launch_angle=15.0, hit_distance=180.0))
    assert control.apex.y >= control.start.y
    assert control.apex.y >= control.end.y
    assert apex_height(70.0, 15.0) > 0.0


def test_arc_trajectory_has_no_time_step() -> None:
    control = ArcControl(start=START, apex=APEX, end=END)
    trajectory = control.trajectory(steps=20)
    assert len(trajectory.points) == 21
    assert trajectory.flight_time is None
    assert trajectory.landing == END
