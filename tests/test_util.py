import math

import pytest

from jarchassis.util import (
    clamp,
    clamp_min_voltage,
    deadband,
    is_line_settled,
    is_reversed,
    left_voltage_scaling,
    reduce_0_to_360,
    reduce_negative_180_to_180,
    reduce_negative_90_to_90,
    right_voltage_scaling,
    to_deg,
    to_port,
    to_rad,
    to_volt,
)

ANGLES = [-1080.5, -721.0, -360.0, -180.0, -90.0, -1.0, 0.0, 45.0, 90.0, 179.9, 180.0, 359.0, 360.0, 725.25]


@pytest.mark.parametrize("angle", ANGLES)
def test_reduce_0_to_360_range_and_equivalence(angle):
    result = reduce_0_to_360(angle)
    assert 0 <= result < 360
    assert ((result - angle) / 360) == pytest.approx(round((result - angle) / 360))


@pytest.mark.parametrize("angle", ANGLES)
def test_reduce_negative_180_to_180_range_and_equivalence(angle):
    result = reduce_negative_180_to_180(angle)
    assert -180 <= result < 180
    assert ((result - angle) / 360) == pytest.approx(round((result - angle) / 360))


@pytest.mark.parametrize("angle", ANGLES)
def test_reduce_negative_90_to_90_range_and_equivalence(angle):
    result = reduce_negative_90_to_90(angle)
    assert -90 <= result < 90
    assert ((result - angle) / 180) == pytest.approx(round((result - angle) / 180))


def test_reduce_pinned_values():
    assert reduce_0_to_360(-90) == pytest.approx(270)
    assert reduce_negative_180_to_180(180) == pytest.approx(-180)
    assert reduce_0_to_360(360) == pytest.approx(0)


def test_reduce_is_identity_inside_range():
    assert reduce_0_to_360(45.5) == 45.5
    assert reduce_negative_180_to_180(-179.5) == -179.5
    assert reduce_negative_90_to_90(89.0) == 89.0


def test_reduce_rejects_nan():
    with pytest.raises(ValueError):
        reduce_0_to_360(float("nan"))


def test_angle_conversions():
    assert to_rad(180) == pytest.approx(math.pi)
    assert to_deg(math.pi) == pytest.approx(180)
    for angle in ANGLES:
        assert to_deg(to_rad(angle)) == pytest.approx(angle)


def test_clamp():
    assert clamp(15, -12, 12) == 12
    assert clamp(-15, -12, 12) == -12
    assert clamp(3.5, -12, 12) == 3.5


def test_is_reversed():
    assert is_reversed(-2) is True
    assert is_reversed(2) is False
    assert is_reversed(0) is False


def test_to_volt_full_scale():
    assert to_volt(100) == pytest.approx(12)
    assert to_volt(-100) == pytest.approx(-12)
    assert to_volt(0) == 0


def test_to_port():
    for port in range(1, 9):
        assert to_port(port) == port - 1
    assert to_port(0) == 0
    assert to_port(9) == 0
    assert to_port(-3) == 0


def test_deadband():
    assert deadband(3, 5) == 0
    assert deadband(-4.9, 5) == 0
    assert deadband(7, 5) == 7
    assert deadband(-5, 5) == -5


def test_is_line_settled():
    assert is_line_settled(0, 10, 0, 0, 10) is True
    assert is_line_settled(0, 10, 0, 0, 5) is False
    assert is_line_settled(0, 10, 0, 0, 15) is True
    assert is_line_settled(10, 0, 90, 5, 0) is False
    assert is_line_settled(10, 0, 90, 15, 0) is True


def test_voltage_scaling_passthrough_when_in_range():
    assert left_voltage_scaling(5, 2) == 7
    assert right_voltage_scaling(5, 2) == 3


@pytest.mark.parametrize("drive,heading", [(12, 6), (20, -3), (-15, 10), (0, 30)])
def test_voltage_scaling_limits_and_preserves_ratio(drive, heading):
    left = left_voltage_scaling(drive, heading)
    right = right_voltage_scaling(drive, heading)
    assert max(abs(left), abs(right)) == pytest.approx(12)
    assert left * (drive - heading) == pytest.approx(right * (drive + heading))


def test_clamp_min_voltage():
    assert clamp_min_voltage(0, 3) == 0
    assert clamp_min_voltage(1, 3) == 3
    assert clamp_min_voltage(-1, 3) == -3
    assert clamp_min_voltage(5, 3) == 5
    assert clamp_min_voltage(-5, 3) == -5