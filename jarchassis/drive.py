"""Full drive: boomerang and holonomic pose control plus joystick driving."""

from __future__ import annotations

import math

from .hardware import Controller, MotorGroup
from .pid import PID
from .tracking import TrackingChassis
from .util import (
    clamp,
    clamp_min_voltage,
    deadband,
    is_line_settled,
    left_voltage_scaling,
    reduce_negative_90_to_90,
    reduce_negative_180_to_180,
    right_voltage_scaling,
    to_deg,
    to_rad,
    to_volt,
)

__all__ = ["Drive"]

_LOOP_MS = 10
_JOYSTICK_DEADBAND = 5


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


class Drive(TrackingChassis):
    """Tank or holonomic drive with pose-seeking motions and driver control."""

    def _holonomic_motors(self) -> tuple[MotorGroup, MotorGroup, MotorGroup, MotorGroup]:
        motors = (self.drive_lf, self.drive_rf, self.drive_lb, self.drive_rb)
        if any(motor is None for motor in motors):
            raise ValueError("holonomic control needs all four corner motors")
        return motors  # type: ignore[return-value]

    def drive_to_pose(
        self,
        x: float,
        y: float,
        angle: float,
        lead: float | None = None,
        setback: float | None = None,
        drive_min_voltage: float | None = None,
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
        """Drive to a field pose with a boomerang controller.

        The robot chases a carrot point set back from the target along the
        desired angle by ``lead`` times the remaining distance plus
        ``setback``. Near the target, or once it crosses the line through the
        target along the pose's sideways axis, it aims at the final angle.
        """
        lead = _pick(lead, self.boomerang_lead)
        setback = _pick(setback, self.boomerang_setback)
        drive_min_voltage = _pick(drive_min_voltage, self.drive_min_voltage)
        drive_max_voltage = _pick(drive_max_voltage, self.drive_max_voltage)
        heading_max_voltage = _pick(heading_max_voltage, self.heading_max_voltage)
        drive_settle_error = _pick(drive_settle_error, self.drive_settle_error)

        target_distance = self._distance_to(x, y)
        drive_pid = PID(
            target_distance,
            _pick(drive_kp, self.drive_kp),
            _pick(drive_ki, self.drive_ki),
            _pick(drive_kd, self.drive_kd),
            _pick(drive_starti, self.drive_starti),
            drive_settle_error,
            _pick(drive_settle_time, self.drive_settle_time),
            _pick(drive_timeout, self.drive_timeout),
        )
        heading_pid = PID(
            self._angle_to(x, y) - self.get_absolute_heading(),
            _pick(heading_kp, self.heading_kp),
            _pick(heading_ki, self.heading_ki),
            _pick(heading_kd, self.heading_kd),
            _pick(heading_starti, self.heading_starti),
        )

        def line_side(line_angle: float) -> bool:
            return is_line_settled(
                x, y, line_angle, self.get_x_position(), self.get_y_position()
            )

        prev_line_settled = line_side(angle)
        crossed_center_line = False
        initial_center_line_side = line_side(angle + 90)

        while not drive_pid.is_settled():
            line_settled = line_side(angle)
            if line_settled and not prev_line_settled:
                break
            prev_line_settled = line_settled

            if line_side(angle + 90) != initial_center_line_side:
                crossed_center_line = True

            target_distance = self._distance_to(x, y)
            carrot_offset = lead * target_distance + setback
            carrot_x = x - math.sin(to_rad(angle)) * carrot_offset
            carrot_y = y - math.cos(to_rad(angle)) * carrot_offset

            drive_error = self._distance_to(carrot_x, carrot_y)
            heading_error = reduce_negative_180_to_180(
                self._angle_to(carrot_x, carrot_y) - self.get_absolute_heading()
            )

            if drive_error < drive_settle_error or crossed_center_line or drive_error < setback:
                heading_error = reduce_negative_180_to_180(angle - self.get_absolute_heading())
                drive_error = target_distance

            drive_output = drive_pid.compute(drive_error)

            heading_scale_factor = math.cos(to_rad(heading_error))
            drive_output *= heading_scale_factor
            heading_error = reduce_negative_90_to_90(heading_error)
            heading_output = heading_pid.compute(heading_error)

            limit = abs(heading_scale_factor) * drive_max_voltage
            drive_output = clamp(drive_output, -limit, limit)
            heading_output = clamp(heading_output, -heading_max_voltage, heading_max_voltage)
            drive_output = clamp_min_voltage(drive_output, drive_min_voltage)

            self.drive_with_voltage(
                left_voltage_scaling(drive_output, heading_output),
                right_voltage_scaling(drive_output, heading_output),
            )
            self.sleep(_LOOP_MS)

    def holonomic_drive_to_pose(
        self,
        x: float,
        y: float,
        angle: float | None = None,
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
        """Drive and turn at once to a pose on a holonomic drive.

        Heading uses the heading constants but settles with the turn exit
        conditions; the motion ends once both loops have settled.
        """
        lf, rf, lb, rb = self._holonomic_motors()
        if angle is None:
            angle = self.get_absolute_heading()
        drive_max_voltage = _pick(drive_max_voltage, self.drive_max_voltage)
        heading_max_voltage = _pick(heading_max_voltage, self.heading_max_voltage)

        drive_pid = PID(
            self._distance_to(x, y),
            _pick(drive_kp, self.drive_kp),
            _pick(drive_ki, self.drive_ki),
            _pick(drive_kd, self.drive_kd),
            _pick(drive_starti, self.drive_starti),
            _pick(drive_settle_error, self.drive_settle_error),
            _pick(drive_settle_time, self.drive_settle_time),
            _pick(drive_timeout, self.drive_timeout),
        )
        turn_pid = PID(
            angle - self.get_absolute_heading(),
            _pick(heading_kp, self.heading_kp),
            _pick(heading_ki, self.heading_ki),
            _pick(heading_kd, self.heading_kd),
            _pick(heading_starti, self.heading_starti),
            self.turn_settle_error,
            self.turn_settle_time,
            self.turn_timeout,
        )

        while not (drive_pid.is_settled() and turn_pid.is_settled()):
            drive_error = self._distance_to(x, y)
            turn_error = reduce_negative_180_to_180(angle - self.get_absolute_heading())

            drive_output = clamp(
                drive_pid.compute(drive_error), -drive_max_voltage, drive_max_voltage
            )
            turn_output = clamp(
                turn_pid.compute(turn_error), -heading_max_voltage, heading_max_voltage
            )

            direction = math.atan2(y - self.get_y_position(), x - self.get_x_position())
            heading_rad = to_rad(self.get_absolute_heading())
            diagonal_a = drive_output * math.cos(heading_rad + direction - math.pi / 4)
            diagonal_b = drive_output * math.cos(-heading_rad - direction + 3 * math.pi / 4)

            lf.spin(diagonal_a + turn_output)
            lb.spin(diagonal_b + turn_output)
            rb.spin(diagonal_a - turn_output)
            rf.spin(diagonal_b - turn_output)
            self.sleep(_LOOP_MS)

    def control_arcade(self, controller: Controller) -> None:
        """Left stick throttle, right stick turning."""
        throttle = deadband(controller.axis3, _JOYSTICK_DEADBAND)
        turn = deadband(controller.axis1, _JOYSTICK_DEADBAND)
        self.drive_left.spin(to_volt(throttle + turn))
        self.drive_right.spin(to_volt(throttle - turn))

    def control_tank(self, controller: Controller) -> None:
        """Left stick drives the left side, right stick the right side."""
        left = deadband(controller.axis3, _JOYSTICK_DEADBAND)
        right = deadband(controller.axis2, _JOYSTICK_DEADBAND)
        self.drive_left.spin(to_volt(left))
        self.drive_right.spin(to_volt(right))

    def control_holonomic(self, controller: Controller) -> None:
        """Left stick throttle and strafe, right stick turning."""
        lf, rf, lb, rb = self._holonomic_motors()
        throttle = deadband(controller.axis3, _JOYSTICK_DEADBAND)
        turn = deadband(controller.axis1, _JOYSTICK_DEADBAND)
        strafe = deadband(controller.axis4, _JOYSTICK_DEADBAND)
        lf.spin(to_volt(throttle + turn + strafe))
        rf.spin(to_volt(throttle - turn - strafe))
        lb.spin(to_volt(throttle + turn - strafe))
        rb.spin(to_volt(throttle - turn + strafe))