"""Position tracking and odometry-based motions for a chassis."""

from __future__ import annotations

import math
import threading

from .chassis import Chassis, DriveSetup
from .pid import PID
from .util import (
    clamp,
    clamp_min_voltage,
    is_line_settled,
    left_voltage_scaling,
    reduce_negative_90_to_90,
    reduce_negative_180_to_180,
    right_voltage_scaling,
    to_deg,
    to_rad,
)

__all__ = ["TrackingChassis"]

_LOOP_MS = 10
_TRACK_PERIOD_S = 0.005

_FORWARD_FROM_DRIVE = frozenset(
    {
        DriveSetup.ZERO_TRACKER_ODOM,
        DriveSetup.TANK_ONE_SIDEWAYS_ENCODER,
        DriveSetup.TANK_ONE_SIDEWAYS_ROTATION,
    }
)
_NO_SIDEWAYS = frozenset(
    {
        DriveSetup.TANK_ONE_FORWARD_ENCODER,
        DriveSetup.TANK_ONE_FORWARD_ROTATION,
        DriveSetup.ZERO_TRACKER_ODOM,
    }
)


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


class TrackingChassis(Chassis):
    """Chassis that keeps a field position and can drive and turn to points.

    Odometry is updated by a background thread started by
    :meth:`set_coordinates`, or by calling :meth:`update_odometry` directly.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tracking_stop = threading.Event()
        self._tracking_thread: threading.Thread | None = None

    # Sensors

    def get_forward_tracker_position(self) -> float:
        """Forward tracker travel in inches, taken from the sensor the setup uses."""
        if self.drive_setup in _FORWARD_FROM_DRIVE:
            return self.get_right_position_in()
        if self.forward_tracker is None:
            raise ValueError(f"drive setup {self.drive_setup.name} needs a forward tracker")
        return self.forward_tracker.position() * self.forward_tracker_in_to_deg_ratio

    def get_sideways_tracker_position(self) -> float:
        """Sideways tracker travel in inches; 0 for setups without one."""
        if self.drive_setup in _NO_SIDEWAYS:
            return 0.0
        if self.sideways_tracker is None:
            raise ValueError(f"drive setup {self.drive_setup.name} needs a sideways tracker")
        return self.sideways_tracker.position() * self.sideways_tracker_in_to_deg_ratio

    # Tracking

    def set_coordinates(self, x: float, y: float, orientation_deg: float) -> None:
        """Reset the field pose and start background position tracking."""
        self.stop_tracking()
        self.odom.set_position(
            x,
            y,
            orientation_deg,
            self.get_forward_tracker_position(),
            self.get_sideways_tracker_position(),
        )
        self.set_heading(orientation_deg)
        self._tracking_stop = threading.Event()
        self._tracking_thread = threading.Thread(
            target=self.position_track, name="position-track", daemon=True
        )
        self._tracking_thread.start()

    def update_odometry(self) -> None:
        """Feed the current sensor readings into the odometry once."""
        self.odom.update_position(
            self.get_forward_tracker_position(),
            self.get_sideways_tracker_position(),
            self.get_absolute_heading(),
        )

    def position_track(self) -> None:
        """Update the odometry every 5 ms until tracking is stopped."""
        stop = self._tracking_stop
        while not stop.is_set():
            self.update_odometry()
            stop.wait(_TRACK_PERIOD_S)

    def stop_tracking(self) -> None:
        """Stop the background tracking thread, if one is running."""
        self._tracking_stop.set()
        thread = self._tracking_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._tracking_thread = None

    @property
    def tracking(self) -> bool:
        """Whether background tracking is running."""
        thread = self._tracking_thread
        return thread is not None and thread.is_alive()

    def get_x_position(self) -> float:
        """Field x position in inches."""
        return self.odom.x

    def get_y_position(self) -> float:
        """Field y position in inches."""
        return self.odom.y

    def _angle_to(self, x: float, y: float) -> float:
        return to_deg(math.atan2(x - self.get_x_position(), y - self.get_y_position()))

    def _distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.get_x_position(), y - self.get_y_position())

    # Motions

    def drive_to_point(
        self,
        x: float,
        y: float,
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
        """Drive to a field point, backwards when that is shorter.

        The drive output is scaled by the cosine of the heading error, and the
        movement ends early once the robot crosses the line through the
        target perpendicular to the starting approach.
        """
        drive_min_voltage = _pick(drive_min_voltage, self.drive_min_voltage)
        drive_max_voltage = _pick(drive_max_voltage, self.drive_max_voltage)
        heading_max_voltage = _pick(heading_max_voltage, self.heading_max_voltage)
        drive_settle_error = _pick(drive_settle_error, self.drive_settle_error)

        drive_pid = PID(
            self._distance_to(x, y),
            _pick(drive_kp, self.drive_kp),
            _pick(drive_ki, self.drive_ki),
            _pick(drive_kd, self.drive_kd),
            _pick(drive_starti, self.drive_starti),
            drive_settle_error,
            _pick(drive_settle_time, self.drive_settle_time),
            _pick(drive_timeout, self.drive_timeout),
        )
        start_angle_deg = self._angle_to(x, y)
        heading_pid = PID(
            start_angle_deg - self.get_absolute_heading(),
            _pick(heading_kp, self.heading_kp),
            _pick(heading_ki, self.heading_ki),
            _pick(heading_kd, self.heading_kd),
            _pick(heading_starti, self.heading_starti),
        )
        prev_line_settled = is_line_settled(
            x, y, start_angle_deg, self.get_x_position(), self.get_y_position()
        )
        while not drive_pid.is_settled():
            line_settled = is_line_settled(
                x, y, start_angle_deg, self.get_x_position(), self.get_y_position()
            )
            if line_settled and not prev_line_settled:
                break
            prev_line_settled = line_settled

            drive_error = self._distance_to(x, y)
            heading_error = reduce_negative_180_to_180(
                self._angle_to(x, y) - self.get_absolute_heading()
            )
            drive_output = drive_pid.compute(drive_error)

            heading_scale_factor = math.cos(to_rad(heading_error))
            drive_output *= heading_scale_factor
            heading_error = reduce_negative_90_to_90(heading_error)
            heading_output = heading_pid.compute(heading_error)

            if drive_error < drive_settle_error:
                heading_output = 0.0

            limit = abs(heading_scale_factor) * drive_max_voltage
            drive_output = clamp(drive_output, -limit, limit)
            heading_output = clamp(heading_output, -heading_max_voltage, heading_max_voltage)
            drive_output = clamp_min_voltage(drive_output, drive_min_voltage)

            self.drive_with_voltage(
                left_voltage_scaling(drive_output, heading_output),
                right_voltage_scaling(drive_output, heading_output),
            )
            self.sleep(_LOOP_MS)

    def turn_to_point(
        self,
        x: float,
        y: float,
        extra_angle_deg: float = 0.0,
        max_voltage: float | None = None,
        settle_error: float | None = None,
        settle_time: float | None = None,
        timeout: float | None = None,
        kp: float | None = None,
        ki: float | None = None,
        kd: float | None = None,
        starti: float | None = None,
    ) -> None:
        """Turn in place to face a field point, plus ``extra_angle_deg``."""
        max_voltage = _pick(max_voltage, self.turn_max_voltage)
        pid = PID(
            reduce_negative_180_to_180(self._angle_to(x, y) - self.get_absolute_heading()),
            _pick(kp, self.turn_kp),
            _pick(ki, self.turn_ki),
            _pick(kd, self.turn_kd),
            _pick(starti, self.turn_starti),
            _pick(settle_error, self.turn_settle_error),
            _pick(settle_time, self.turn_settle_time),
            _pick(timeout, self.turn_timeout),
        )
        while not pid.is_settled():
            error = reduce_negative_180_to_180(
                self._angle_to(x, y) - self.get_absolute_heading() + extra_angle_deg
            )
            output = clamp(pid.compute(error), -max_voltage, max_voltage)
            self.drive_with_voltage(output, -output)
            self.sleep(_LOOP_MS)