"""Differential chassis with PID turning, driving and swinging."""

from __future__ import annotations

import enum
import math
import time
from typing import Callable

from .hardware import BrakeMode, Gyro, MotorGroup, Tracker
from .odom import Odom
from .pid import PID
from .util import clamp, reduce_0_to_360, reduce_negative_180_to_180

__all__ = ["DriveSetup", "Chassis"]

_LOOP_MS = 10


class DriveSetup(enum.Enum):
    """Drivetrain layout and the odometry sensors it carries."""

    ZERO_TRACKER_NO_ODOM = enum.auto()
    ZERO_TRACKER_ODOM = enum.auto()
    TANK_ONE_FORWARD_ENCODER = enum.auto()
    TANK_ONE_FORWARD_ROTATION = enum.auto()
    TANK_ONE_SIDEWAYS_ENCODER = enum.auto()
    TANK_ONE_SIDEWAYS_ROTATION = enum.auto()
    TANK_TWO_ENCODER = enum.auto()
    TANK_TWO_ROTATION = enum.auto()
    HOLONOMIC_TWO_ENCODER = enum.auto()
    HOLONOMIC_TWO_ROTATION = enum.auto()


_FORWARD_ONLY = frozenset(
    {
        DriveSetup.TANK_ONE_FORWARD_ENCODER,
        DriveSetup.TANK_ONE_FORWARD_ROTATION,
        DriveSetup.ZERO_TRACKER_ODOM,
    }
)
_WITH_SIDEWAYS = frozenset(
    {
        DriveSetup.TANK_ONE_SIDEWAYS_ENCODER,
        DriveSetup.TANK_ONE_SIDEWAYS_ROTATION,
        DriveSetup.TANK_TWO_ENCODER,
        DriveSetup.TANK_TWO_ROTATION,
        DriveSetup.HOLONOMIC_TWO_ENCODER,
        DriveSetup.HOLONOMIC_TWO_ROTATION,
    }
)


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000.0)


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


class Chassis:
    """Tank or holonomic chassis with PID motion primitives.

    ``sleep`` is called with a delay in milliseconds between control ticks.
    Motion constants start at zero; set them with the ``set_*`` methods.
    """

    def __init__(
        self,
        drive_setup: DriveSetup,
        drive_left: MotorGroup,
        drive_right: MotorGroup,
        gyro: Gyro,
        wheel_diameter: float,
        wheel_ratio: float = 1.0,
        gyro_scale: float = 360.0,
        drive_lf: MotorGroup | None = None,
        drive_rf: MotorGroup | None = None,
        drive_lb: MotorGroup | None = None,
        drive_rb: MotorGroup | None = None,
        forward_tracker: Tracker | None = None,
        forward_tracker_diameter: float = 0.0,
        forward_tracker_center_distance: float = 0.0,
        sideways_tracker: Tracker | None = None,
        sideways_tracker_diameter: float = 0.0,
        sideways_tracker_center_distance: float = 0.0,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.drive_setup = DriveSetup(drive_setup)
        self.drive_left = drive_left
        self.drive_right = drive_right
        self.gyro = gyro
        self.wheel_diameter = wheel_diameter
        self.wheel_ratio = wheel_ratio
        self.gyro_scale = gyro_scale
        self.drive_in_to_deg_ratio = wheel_ratio / 360.0 * math.pi * wheel_diameter

        self.drive_lf = drive_lf
        self.drive_rf = drive_rf
        self.drive_lb = drive_lb
        self.drive_rb = drive_rb

        self.forward_tracker = forward_tracker
        self.forward_tracker_diameter = forward_tracker_diameter
        self.forward_tracker_center_distance = forward_tracker_center_distance
        self.forward_tracker_in_to_deg_ratio = math.pi * forward_tracker_diameter / 360.0
        self.sideways_tracker = sideways_tracker
        self.sideways_tracker_diameter = sideways_tracker_diameter
        self.sideways_tracker_center_distance = sideways_tracker_center_distance
        self.sideways_tracker_in_to_deg_ratio = math.pi * sideways_tracker_diameter / 360.0

        self.sleep = sleep if sleep is not None else _sleep_ms

        self.turn_max_voltage = 0.0
        self.turn_kp = 0.0
        self.turn_ki = 0.0
        self.turn_kd = 0.0
        self.turn_starti = 0.0
        self.turn_settle_error = 0.0
        self.turn_settle_time = 0.0
        self.turn_timeout = 0.0

        self.drive_min_voltage = 0.0
        self.drive_max_voltage = 0.0
        self.drive_kp = 0.0
        self.drive_ki = 0.0
        self.drive_kd = 0.0
        self.drive_starti = 0.0
        self.drive_settle_error = 0.0
        self.drive_settle_time = 0.0
        self.drive_timeout = 0.0

        self.heading_max_voltage = 0.0
        self.heading_kp = 0.0
        self.heading_ki = 0.0
        self.heading_kd = 0.0
        self.heading_starti = 0.0

        self.swing_max_voltage = 0.0
        self.swing_kp = 0.0
        self.swing_ki = 0.0
        self.swing_kd = 0.0
        self.swing_starti = 0.0
        self.swing_settle_error = 0.0
        self.swing_settle_time = 0.0
        self.swing_timeout = 0.0

        self.boomerang_lead = 0.0
        self.boomerang_setback = 0.0

        self.odom = Odom()
        if self.drive_setup in _FORWARD_ONLY:
            self.odom.set_physical_distances(forward_tracker_center_distance, 0.0)
        if self.drive_setup in _WITH_SIDEWAYS:
            self.odom.set_physical_distances(
                forward_tracker_center_distance, sideways_tracker_center_distance
            )

    # Basic commands and readings

    def drive_with_voltage(self, left_voltage: float, right_voltage: float) -> None:
        """Spin each side of the drive at the given voltage (out of 12)."""
        self.drive_left.spin(left_voltage)
        self.drive_right.spin(right_voltage)

    def get_absolute_heading(self) -> float:
        """Gyro heading corrected by the gyro scale, in ``[0, 360)``."""
        return reduce_0_to_360(self.gyro.rotation() * 360.0 / self.gyro_scale)

    def get_left_position_in(self) -> float:
        """Left drive travel in inches."""
        return self.drive_left.position() * self.drive_in_to_deg_ratio

    def get_right_position_in(self) -> float:
        """Right drive travel in inches."""
        return self.drive_right.position() * self.drive_in_to_deg_ratio

    def drive_stop(self, mode: BrakeMode) -> None:
        """Stop both sides with the given brake mode."""
        self.drive_left.stop(mode)
        self.drive_right.stop(mode)

    def set_heading(self, orientation_deg: float) -> None:
        """Tell the gyro which way the robot is facing, in degrees."""
        self.gyro.set_rotation(orientation_deg * self.gyro_scale / 360.0)

    # Default constants

    def set_turn_constants(self, max_voltage, kp, ki, kd, starti) -> None:
        """Defaults for turn_to_angle() and turn_to_point()."""
        self.turn_max_voltage = max_voltage
        self.turn_kp = kp
        self.turn_ki = ki
        self.turn_kd = kd
        self.turn_starti = starti

    def set_drive_constants(self, max_voltage, kp, ki, kd, starti) -> None:
        """Defaults for the drive loop of driving movements."""
        self.drive_max_voltage = max_voltage
        self.drive_kp = kp
        self.drive_ki = ki
        self.drive_kd = kd
        self.drive_starti = starti

    def set_heading_constants(self, max_voltage, kp, ki, kd, starti) -> None:
        """Defaults for heading correction during driving movements."""
        self.heading_max_voltage = max_voltage
        self.heading_kp = kp
        self.heading_ki = ki
        self.heading_kd = kd
        self.heading_starti = starti

    def set_swing_constants(self, max_voltage, kp, ki, kd, starti) -> None:
        """Defaults for left_swing_to_angle() and right_swing_to_angle()."""
        self.swing_max_voltage = max_voltage
        self.swing_kp = kp
        self.swing_ki = ki
        self.swing_kd = kd
        self.swing_starti = starti

    def set_turn_exit_conditions(self, settle_error, settle_time, timeout) -> None:
        """Turn settling: error in degrees, times in milliseconds."""
        self.turn_settle_error = settle_error
        self.turn_settle_time = settle_time
        self.turn_timeout = timeout

    def set_drive_exit_conditions(self, settle_error, settle_time, timeout) -> None:
        """Drive settling: error in inches, times in milliseconds."""
        self.drive_settle_error = settle_error
        self.drive_settle_time = settle_time
        self.drive_timeout = timeout

    def set_swing_exit_conditions(self, settle_error, settle_time, timeout) -> None:
        """Swing settling: error in degrees, times in milliseconds."""
        self.swing_settle_error = settle_error
        self.swing_settle_time = settle_time
        self.swing_timeout = timeout

    # Motions

    def _heading_error(self, angle: float) -> float:
        return reduce_negative_180_to_180(angle - self.get_absolute_heading())

    def turn_to_angle(
        self,
        angle: float,
        max_voltage: float | None = None,
        settle_error: float | None = None,
        settle_time: float | None = None,
        timeout: float | None = None,
        kp: float | None = None,
        ki: float | None = None,
        kd: float | None = None,
        starti: float | None = None,
    ) -> None:
        """Turn in place to a field-centric angle, taking the shorter way round."""
        max_voltage = _pick(max_voltage, self.turn_max_voltage)
        pid = PID(
            self._heading_error(angle),
            _pick(kp, self.turn_kp),
            _pick(ki, self.turn_ki),
            _pick(kd, self.turn_kd),
            _pick(starti, self.turn_starti),
            _pick(settle_error, self.turn_settle_error),
            _pick(settle_time, self.turn_settle_time),
            _pick(timeout, self.turn_timeout),
        )
        while not pid.is_settled():
            output = clamp(pid.compute(self._heading_error(angle)), -max_voltage, max_voltage)
            self.drive_with_voltage(output, -output)
            self.sleep(_LOOP_MS)

    def drive_distance(
        self,
        distance: float,
        heading: float | None = None,
        drive_max_voltage: float | None = None,
        heading_max_voltage: float | None = None,
        drive_settle_error: float | None = None,
        drive_settle_time: float | None = None,
        drive_timeout: float | None = None,
        drive_kp: float | None = None,
        drive_ki: float | None = None,
        drive_kd: float | None = None,
        drive_starti: float | None = None,
        heading_kp: float | None = None,
        heading_ki: float | None = None,
        heading_kd: float | None = None,
        heading_starti: float | None = None,
    ) -> None:
        """Drive a distance in inches while holding a heading (default: current)."""
        if heading is None:
            heading = self.get_absolute_heading()
        drive_max_voltage = _pick(drive_max_voltage, self.drive_max_voltage)
        heading_max_voltage = _pick(heading_max_voltage, self.heading_max_voltage)
        drive_pid = PID(
            distance,
            _pick(drive_kp, self.drive_kp),
            _pick(drive_ki, self.drive_ki),
            _pick(drive_kd, self.drive_kd),
            _pick(drive_starti, self.drive_starti),
            _pick(drive_settle_error, self.drive_settle_error),
            _pick(drive_settle_time, self.drive_settle_time),
            _pick(drive_timeout, self.drive_timeout),
        )
        heading_pid = PID(
            self._heading_error(heading),
            _pick(heading_kp, self.heading_kp),
            _pick(heading_ki, self.heading_ki),
            _pick(heading_kd, self.heading_kd),
            _pick(heading_starti, self.heading_starti),
        )
        start = self._average_position_in()
        while not drive_pid.is_settled():
            drive_error = distance + start - self._average_position_in()
            heading_error = self._heading_error(heading)
            drive_output = clamp(
                drive_pid.compute(drive_error), -drive_max_voltage, drive_max_voltage
            )
            heading_output = clamp(
                heading_pid.compute(heading_error), -heading_max_voltage, heading_max_voltage
            )
            self.drive_with_voltage(
                drive_output + heading_output, drive_output - heading_output
            )
            self.sleep(_LOOP_MS)

    def _average_position_in(self) -> float:
        return (self.get_left_position_in() + self.get_right_position_in()) / 2.0

    def _swing_pid(self, angle, settle_error, settle_time, timeout, kp, ki, kd, starti) -> PID:
        return PID(
            self._heading_error(angle),
            _pick(kp, self.swing_kp),
            _pick(ki, self.swing_ki),
            _pick(kd, self.swing_kd),
            _pick(starti, self.swing_starti),
            _pick(settle_error, self.swing_settle_error),
            _pick(settle_time, self.swing_settle_time),
            _pick(timeout, self.swing_timeout),
        )

    def left_swing_to_angle(
        self,
        angle: float,
        max_voltage: float | None = None,
        settle_error: float | None = None,
        settle_time: float | None = None,
        timeout: float | None = None,
        kp: float | None = None,
        ki: float | None = None,
        kd: float | None = None,
        starti: float | None = None,
    ) -> None:
        """Turn with the left side while holding the right side still.

        The output is limited by the turn maximum voltage.
        """
        pid = self._swing_pid(angle, settle_error, settle_time, timeout, kp, ki, kd, starti)
        while not pid.is_settled():
            output = clamp(
                pid.compute(self._heading_error(angle)),
                -self.turn_max_voltage,
                self.turn_max_voltage,
            )
            self.drive_left.spin(output)
            self.drive_right.stop(BrakeMode.HOLD)
            self.sleep(_LOOP_MS)

    def right_swing_to_angle(
        self,
        angle: float,
        max_voltage: float | None = None,
        settle_error: float | None = None,
        settle_time: float | None = None,
        timeout: float | None = None,
        kp: float | None = None,
        ki: float | None = None,
        kd: float | None = None,
        starti: float | None = None,
    ) -> None:
        """Turn with the right side while holding the left side still.

        The output is limited by the turn maximum voltage.
        """
        pid = self._swing_pid(angle, settle_error, settle_time, timeout, kp, ki, kd, starti)
        while not pid.is_settled():
            output = clamp(
                pid.compute(self._heading_error(angle)),
                -self.turn_max_voltage,
                self.turn_max_voltage,
            )
            self.drive_right.spin(-output)
            self.drive_left.stop(BrakeMode.HOLD)
            self.sleep(_LOOP_MS)