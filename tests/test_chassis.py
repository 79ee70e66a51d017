import math

import pytest

from jarchassis.chassis import Chassis, DriveSetup
from jarchassis.hardware import BrakeMode, Gyro, MotorGroup


class Sim:
    """Crude plant: voltages move the encoders and the gyro each tick."""

    def __init__(self):
        self.left = MotorGroup()
        self.right = MotorGroup()
        self.gyro = Gyro()
        self.ticks = []

    def step(self, ms):
        self.ticks.append(ms)
        lv, rv = self.left.voltage, self.right.voltage
        self.left.degrees += lv * 0.5
        self.right.degrees += rv * 0.5
        self.gyro.rotation_deg += (lv - rv) * 0.1


def make_chassis(setup=DriveSetup.ZERO_TRACKER_NO_ODOM, gyro_scale=360.0, **kwargs):
    sim = Sim()
    chassis = Chassis(
        setup,
        sim.left,
        sim.right,
        sim.gyro,
        360.0 / math.pi,
        1.0,
        gyro_scale,
        sleep=sim.step,
        **kwargs,
    )
    chassis.set_turn_constants(12, 0.4, 0, 0, 0)
    chassis.set_drive_constants(10, 1.5, 0, 0, 0)
    chassis.set_heading_constants(6, 0.4, 0, 0, 0)
    chassis.set_swing_constants(12, 0.4, 0, 0, 0)
    chassis.set_turn_exit_conditions(1, 50, 5000)
    chassis.set_drive_exit_conditions(1.5, 50, 5000)
    chassis.set_swing_exit_conditions(1, 50, 5000)
    return chassis, sim


def test_position_in_uses_wheel_geometry():
    chassis, sim = make_chassis()
    sim.left.degrees = 24.0
    sim.right.degrees = -12.0
    assert chassis.get_left_position_in() == pytest.approx(24.0)
    assert chassis.get_right_position_in() == pytest.approx(-12.0)


def test_absolute_heading_wraps():
    chassis, sim = make_chassis()
    sim.gyro.rotation_deg = 370.0
    assert chassis.get_absolute_heading() == pytest.approx(10.0)
    sim.gyro.rotation_deg = -90.0
    assert chassis.get_absolute_heading() == pytest.approx(270.0)


def test_set_heading_round_trip_with_gyro_scale():
    chassis, sim = make_chassis(gyro_scale=720.0)
    chassis.set_heading(90.0)
    assert sim.gyro.rotation() == pytest.approx(180.0)
    assert chassis.get_absolute_heading() == pytest.approx(90.0)


def test_drive_with_voltage_and_stop():
    chassis, sim = make_chassis()
    chassis.drive_with_voltage(5.0, -4.0)
    assert (sim.left.voltage, sim.right.voltage) == (5.0, -4.0)
    chassis.drive_stop(BrakeMode.BRAKE)
    assert sim.left.brake_mode is BrakeMode.BRAKE
    assert sim.right.brake_mode is BrakeMode.BRAKE
    assert sim.left.voltage == 0.0


def test_turn_to_angle_reaches_target():
    chassis, sim = make_chassis()
    chassis.turn_to_angle(90)
    assert abs(chassis.get_absolute_heading() - 90) < 1
    assert set(sim.ticks) == {10}


def test_turn_takes_shorter_direction():
    chassis, sim = make_chassis()
    chassis.turn_to_angle(270, timeout=10)
    # 270 is reached fastest by turning counter-clockwise: left backwards.
    assert sim.left.voltage < 0
    assert sim.right.voltage > 0


def test_turn_output_is_clamped_to_max_voltage():
    chassis, sim = make_chassis()
    chassis.turn_to_angle(120, 3.0, timeout=10)
    assert sim.left.voltage == 3.0
    assert sim.right.voltage == -3.0


def test_drive_distance_reaches_target():
    chassis, sim = make_chassis()
    chassis.drive_distance(24)
    average = (chassis.get_left_position_in() + chassis.get_right_position_in()) / 2
    assert abs(average - 24) < 1.5
    assert abs(chassis.get_absolute_heading()) < 1e-6


def test_drive_distance_is_relative_to_start():
    chassis, sim = make_chassis()
    sim.left.degrees = 100.0
    sim.right.degrees = 100.0
    chassis.drive_distance(-12)
    average = (chassis.get_left_position_in() + chassis.get_right_position_in()) / 2
    assert abs(average - 88) < 1.5


def test_drive_distance_respects_max_voltage():
    chassis, sim = make_chassis()
    chassis.drive_distance(48, 0, 4.0, 6.0, 1.5, 50, 10)
    assert sim.left.voltage == 4.0
    assert sim.right.voltage == 4.0


def test_left_swing_holds_right_side():
    chassis, sim = make_chassis()
    chassis.left_swing_to_angle(90)
    assert abs(chassis.get_absolute_heading() - 90) < 1
    assert sim.right.brake_mode is BrakeMode.HOLD
    assert sim.right.degrees == 0.0


def test_right_swing_holds_left_side():
    chassis, sim = make_chassis()
    chassis.set_heading(90)
    chassis.right_swing_to_angle(0)
    heading = chassis.get_absolute_heading()
    assert min(heading, 360 - heading) < 1
    assert sim.left.brake_mode is BrakeMode.HOLD
    assert sim.left.degrees == 0.0


def test_swing_output_limited_by_turn_max_voltage():
    chassis, sim = make_chassis()
    chassis.set_turn_constants(2.0, 0.4, 0, 0, 0)
    chassis.right_swing_to_angle(90, 12.0, timeout=10)
    assert sim.right.voltage == -2.0


@pytest.mark.parametrize(
    "setup, expected",
    [
        (DriveSetup.TANK_ONE_FORWARD_ENCODER, (-2.0, 0.0)),
        (DriveSetup.ZERO_TRACKER_ODOM, (-2.0, 0.0)),
        (DriveSetup.TANK_TWO_ROTATION, (-2.0, 5.5)),
        (DriveSetup.HOLONOMIC_TWO_ENCODER, (-2.0, 5.5)),
        (DriveSetup.ZERO_TRACKER_NO_ODOM, (0.0, 0.0)),
    ],
)
def test_odom_distances_follow_setup(setup, expected):
    chassis, _ = make_chassis(
        setup,
        forward_tracker_center_distance=-2.0,
        sideways_tracker_center_distance=5.5,
    )
    distances = (chassis.odom.forward_center_distance, chassis.odom.sideways_center_distance)
    assert distances == expected


def test_invalid_setup_rejected():
    sim = Sim()
    with pytest.raises(ValueError):
        Chassis("FOUR_WHEEL", sim.left, sim.right, sim.gyro, 2.75)