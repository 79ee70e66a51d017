"""Device models used by the chassis: motor groups, gyro, trackers and controller.

These classes keep their state in memory. Real devices can be bound by
subclassing them and overriding the reading and command methods.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["BrakeMode", "MotorGroup", "Gyro", "Tracker", "Controller"]


class BrakeMode(enum.Enum):
    """How a motor behaves once it is told to stop."""

    COAST = "coast"
    BRAKE = "brake"
    HOLD = "hold"


@dataclass
class MotorGroup:
    """A set of motors driven together by one voltage command.

    ``voltage`` is the last commanded voltage (out of 12). ``degrees`` is the
    group's encoder position. A reversed group applies the opposite voltage.
    """

    reversed: bool = False
    degrees: float = 0.0
    voltage: float = 0.0
    brake_mode: BrakeMode | None = None

    def spin(self, voltage: float) -> None:
        """Drive the group forward at ``voltage`` volts (negative spins backwards)."""
        self.voltage = voltage
        self.brake_mode = None

    def stop(self, mode: BrakeMode) -> None:
        """Stop the group using the given brake mode."""
        self.voltage = 0.0
        self.brake_mode = BrakeMode(mode)

    def position(self) -> float:
        """Encoder position in degrees."""
        return self.degrees

    @property
    def applied_voltage(self) -> float:
        """Voltage actually seen by the motors after reversal."""
        return -self.voltage if self.reversed else self.voltage

    @property
    def is_stopped(self) -> bool:
        """Whether the last command was a stop."""
        return self.brake_mode is not None


@dataclass
class Gyro:
    """Inertial sensor reporting unbounded rotation in degrees."""

    rotation_deg: float = 0.0

    def rotation(self) -> float:
        """Accumulated rotation in degrees, clockwise-positive."""
        return self.rotation_deg

    def set_rotation(self, degrees: float) -> None:
        """Overwrite the accumulated rotation."""
        self.rotation_deg = degrees


@dataclass
class Tracker:
    """A tracking wheel sensor (rotation sensor or optical encoder)."""

    degrees: float = 0.0

    def position(self) -> float:
        """Wheel position in degrees."""
        return self.degrees


@dataclass
class Controller:
    """Joystick axis readings in percent, from -100 to 100.

    ``axis1`` is right stick horizontal, ``axis2`` right stick vertical,
    ``axis3`` left stick vertical and ``axis4`` left stick horizontal.
    """

    axis1: float = 0.0
    axis2: float = 0.0
    axis3: float = 0.0
    axis4: float = 0.0