"""Arc-based odometry from tracking wheels and a heading source."""

from __future__ import annotations

import math

from .util import to_rad

__all__ = ["Odom"]


class Odom:
    """Tracks field position from one or two tracking wheels and a gyro heading.

    Orientation is in degrees, clockwise-positive, with 0 facing +Y. The
    forward tracker's center distance is horizontal (positive to the right);
    the sideways tracker's is vertical (positive behind the center).
    """

    def __init__(self) -> None:
        self.forward_center_distance = 0.0
        self.sideways_center_distance = 0.0
        self.forward_position = 0.0
        self.sideways_position = 0.0
        self.x = 0.0
        self.y = 0.0
        self.orientation_deg = 0.0

    def set_physical_distances(
        self, forward_center_distance: float, sideways_center_distance: float
    ) -> None:
        """Set the offsets of the tracking wheels from the robot's center, in inches."""
        self.forward_center_distance = forward_center_distance
        self.sideways_center_distance = sideways_center_distance

    def set_position(
        self,
        x: float,
        y: float,
        orientation_deg: float,
        forward_position: float,
        sideways_position: float,
    ) -> None:
        """Reset the pose and the tracker readings it is measured against."""
        self.forward_position = forward_position
        self.sideways_position = sideways_position
        self.x = x
        self.y = y
        self.orientation_deg = orientation_deg

    def update_position(
        self, forward_position: float, sideways_position: float, orientation_deg: float
    ) -> None:
        """Integrate new tracker readings and heading into the pose."""
        forward_delta = forward_position - self.forward_position
        sideways_delta = sideways_position - self.sideways_position
        self.forward_position = forward_position
        self.sideways_position = sideways_position

        orientation_rad = to_rad(orientation_deg)
        prev_orientation_rad = to_rad(self.orientation_deg)
        delta_rad = orientation_rad - prev_orientation_rad
        self.orientation_deg = orientation_deg

        if delta_rad == 0:
            local_x = sideways_delta
            local_y = forward_delta
        else:
            chord = 2 * math.sin(delta_rad / 2)
            local_x = chord * (sideways_delta / delta_rad + self.sideways_center_distance)
            local_y = chord * (forward_delta / delta_rad + self.forward_center_distance)

        if local_x == 0 and local_y == 0:
            local_angle = 0.0
            local_length = 0.0
        else:
            local_angle = math.atan2(local_y, local_x)
            local_length = math.hypot(local_x, local_y)

        global_angle = local_angle - prev_orientation_rad - delta_rad / 2
        self.x += local_length * math.cos(global_angle)
        self.y += local_length * math.sin(global_angle)