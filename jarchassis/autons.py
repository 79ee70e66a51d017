"""Autonomous routines and the default motion constants they rely on."""

from __future__ import annotations

import itertools
import time
from typing import Callable, Iterable

from .drive import Drive

__all__ = [
    "default_constants",
    "odom_constants",
    "drive_test",
    "turn_test",
    "swing_test",
    "full_test",
    "odom_readout",
    "odom_test",
    "tank_odom_test",
    "holonomic_odom_test",
]

_READOUT_PERIOD_MS = 20


def default_constants(chassis: Drive) -> None:
    """Reset the motion constants and exit conditions to their defaults."""
    # Constant sets are (max_voltage, kp, ki, kd, starti).
    chassis.set_drive_constants(10, 1.5, 0, 10, 0)
    chassis.set_heading_constants(6, 0.4, 0, 1, 0)
    chassis.set_turn_constants(12, 0.4, 0.03, 3, 15)
    chassis.set_swing_constants(12, 0.3, 0.001, 2, 15)

    # Exit conditions are (settle_error, settle_time, timeout).
    chassis.set_drive_exit_conditions(1.5, 300, 5000)
    chassis.set_turn_exit_conditions(1, 300, 3000)
    chassis.set_swing_exit_conditions(1, 300, 3000)


def odom_constants(chassis: Drive) -> None:
    """Defaults tuned for odometry movements: slower and with looser settling."""
    default_constants(chassis)
    chassis.heading_max_voltage = 10
    chassis.drive_max_voltage = 8
    chassis.drive_settle_error = 3
    chassis.boomerang_lead = 0.5
    chassis.drive_min_voltage = 0


def drive_test(chassis: Drive) -> None:
    """Drive out and back; should end where it started."""
    for distance in (6, 12, 18, -36):
        chassis.drive_distance(distance)


def turn_test(chassis: Drive) -> None:
    """Turn through a full circle back to the starting angle."""
    for angle in (5, 30, 90, 225, 0):
        chassis.turn_to_angle(angle)


def swing_test(chassis: Drive) -> None:
    """Swing in an S shape."""
    chassis.left_swing_to_angle(90)
    chassis.right_swing_to_angle(0)


def full_test(chassis: Drive) -> None:
    """A mix of drives, turns and swings ending roughly at the start."""
    chassis.drive_distance(24)
    chassis.turn_to_angle(-45)
    chassis.drive_distance(-36)
    chassis.right_swing_to_angle(-90)
    chassis.drive_distance(24)
    chassis.turn_to_angle(0)


def odom_readout(chassis: Drive) -> list[str]:
    """Lines describing the tracked pose and raw tracker positions."""
    return [
        f"X: {chassis.get_x_position():f}",
        f"Y: {chassis.get_y_position():f}",
        f"Heading: {chassis.get_absolute_heading():f}",
        f"ForwardTracker: {chassis.get_forward_tracker_position():f}",
        f"SidewaysTracker: {chassis.get_sideways_tracker_position():f}",
    ]


def _print_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000.0)


def odom_test(
    chassis: Drive,
    display: Callable[[list[str]], None] | None = None,
    sleep: Callable[[float], None] | None = None,
    iterations: int | None = None,
) -> None:
    """Reset the pose to the origin and repeatedly show the odometry readout.

    The robot is not driven; push it around to check the readings. Runs
    forever unless ``iterations`` is given.
    """
    display = display if display is not None else _print_lines
    sleep = sleep if sleep is not None else _sleep_ms
    chassis.set_coordinates(0, 0, 0)
    ticks = itertools.count() if iterations is None else range(iterations)
    for _ in ticks:
        display(odom_readout(chassis))
        sleep(_READOUT_PERIOD_MS)


def tank_odom_test(chassis: Drive) -> None:
    """Drive straight to a point and curve back to the origin."""
    odom_constants(chassis)
    chassis.set_coordinates(0, 0, 0)
    chassis.turn_to_point(24, 24)
    chassis.drive_to_point(24, 24)
    chassis.drive_to_point(0, 0)
    chassis.turn_to_angle(0)


def holonomic_odom_test(chassis: Drive) -> None:
    """Drive a square while making a full turn; should end where it started."""
    odom_constants(chassis)
    chassis.set_coordinates(0, 0, 0)
    chassis.holonomic_drive_to_pose(0, 18, 90)
    chassis.holonomic_drive_to_pose(18, 0, 180)
    chassis.holonomic_drive_to_pose(0, 18, 270)
    chassis.holonomic_drive_to_pose(0, 0, 0)