"""Angle arithmetic, clamping and voltage helpers shared by the motion code."""

from __future__ import annotations

import math

__all__ = [
    "reduce_0_to_360",
    "reduce_negative_180_to_180",
    "reduce_negative_90_to_90",
    "to_rad",
    "to_deg",
    "clamp",
    "is_reversed",
    "to_volt",
    "to_port",
    "deadband",
    "is_line_settled",
    "left_voltage_scaling",
    "right_voltage_scaling",
    "clamp_min_voltage",
]

MAX_VOLTAGE = 12.0


def _wrap(angle: float, low: float, span: float) -> float:
    """Return the angle equivalent to ``angle`` modulo ``span`` in ``[low, low + span)``."""
    if not math.isfinite(angle):
        raise ValueError(f"cannot reduce non-finite angle {angle!r}")
    result = (angle - low) % span + low
    # Floating-point modulo can land exactly on the open upper bound.
    if result >= low + span:
        result -= span
    if result < low:
        result = low
    return result


def reduce_0_to_360(angle: float) -> float:
    """Return the equivalent angle in degrees within ``[0, 360)``."""
    return _wrap(angle, 0.0, 360.0)


def reduce_negative_180_to_180(angle: float) -> float:
    """Return the equivalent angle in degrees within ``[-180, 180)``."""
    return _wrap(angle, -180.0, 360.0)


def reduce_negative_90_to_90(angle: float) -> float:
    """Return the angle within ``[-90, 90)``, flipping by 180 degrees where needed."""
    return _wrap(angle, -90.0, 180.0)


def to_rad(angle_deg: float) -> float:
    """Convert degrees to radians."""
    return angle_deg / (180.0 / math.pi)


def to_deg(angle_rad: float) -> float:
    """Convert radians to degrees."""
    return angle_rad * (180.0 / math.pi)


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to ``[low, high]``; assumes ``low <= high``."""
    if value > high:
        return high
    if value < low:
        return low
    return value


def is_reversed(value: float) -> bool:
    """Whether a port number denotes a reversed motor (it is negative)."""
    return value < 0


def to_volt(percent: float) -> float:
    """Scale a joystick percentage to motor volts (100% is 12 V)."""
    return percent * MAX_VOLTAGE / 100.0


def to_port(port: int) -> int:
    """Convert a 1-based three-wire port to a 0-based index; out-of-range ports map to 0."""
    if port > 8 or port < 1:
        return 0
    return port - 1


def deadband(value: float, width: float) -> float:
    """Zero out values whose magnitude is below ``width``."""
    if abs(value) < width:
        return 0.0
    return value


def is_line_settled(
    desired_x: float,
    desired_y: float,
    desired_angle: float,
    current_x: float,
    current_y: float,
) -> bool:
    """Whether the robot has crossed the line through the target perpendicular to ``desired_angle``."""
    angle = to_rad(desired_angle)
    return (desired_y - current_y) * math.cos(angle) <= -(desired_x - current_x) * math.sin(angle)


def _scaling_ratio(drive_output: float, heading_output: float) -> float:
    return max(abs(drive_output + heading_output), abs(drive_output - heading_output)) / MAX_VOLTAGE


def left_voltage_scaling(drive_output: float, heading_output: float) -> float:
    """Left-side voltage, scaled so neither side exceeds 12 V."""
    ratio = _scaling_ratio(drive_output, heading_output)
    left = drive_output + heading_output
    return left / ratio if ratio > 1 else left


def right_voltage_scaling(drive_output: float, heading_output: float) -> float:
    """Right-side voltage, scaled so neither side exceeds 12 V."""
    ratio = _scaling_ratio(drive_output, heading_output)
    right = drive_output - heading_output
    return right / ratio if ratio > 1 else right


def clamp_min_voltage(drive_output: float, drive_min_voltage: float) -> float:
    """Raise a nonzero output to at least ``drive_min_voltage`` in magnitude."""
    if -drive_min_voltage < drive_output < 0:
        return -drive_min_voltage
    if 0 < drive_output < drive_min_voltage:
        return drive_min_voltage
    return drive_output