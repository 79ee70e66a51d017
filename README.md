# jarchassis

Motion control for a robot drivetrain: PID loops with settling logic,
arc-based odometry, and a set of movements (turn to an angle, drive a
distance, swing turns, turn to a point, drive to a point, boomerang
drive to a pose, holonomic drive to a pose) plus joystick driver
control and a set of autonomous test routines.

The chassis works against small device objects for the motors, gyro,
tracking wheels and controller, and a `sleep` callable (taking
milliseconds) that paces the control loops. The device classes in
`jarchassis.hardware` keep their state in memory; to drive real
hardware, subclass them and override their reading and command
methods.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `jarchassis.util` – angle reduction (`reduce_0_to_360`,
  `reduce_negative_180_to_180`, `reduce_negative_90_to_90`), unit
  conversion (`to_rad`, `to_deg`, `to_volt`), `clamp`, `deadband`,
  `is_reversed`, `to_port`, `is_line_settled`,
  `left_voltage_scaling` / `right_voltage_scaling` (keep both sides
  within 12 V) and `clamp_min_voltage`.
- `jarchassis.pid` – `PID`. The integral only accumulates while the
  error is below `starti` and resets when the error changes sign.
  `is_settled()` is true once the error has stayed below `settle_error`
  for longer than `settle_time` ms, or the loop has run longer than
  `timeout` ms; a timeout of 0 never expires. Each `compute()` call
  counts as 10 ms.
- `jarchassis.odom` – `Odom`, which integrates tracker readings and
  heading into a field position (`x`, `y`, `orientation_deg`).
- `jarchassis.hardware` – `BrakeMode` (`COAST`, `BRAKE`, `HOLD`),
  `MotorGroup` (`spin`, `stop`, `position`), `Gyro` (`rotation`,
  `set_rotation`), `Tracker` (`position`) and `Controller` (joystick
  axes `axis1` to `axis4` in percent).
- `jarchassis.chassis` – `DriveSetup`, the ten drivetrain/sensor
  layouts, and `Chassis`: `drive_with_voltage`, `drive_stop`,
  `get_absolute_heading`, `set_heading`, left/right travel in inches,
  the `set_*_constants` and `set_*_exit_conditions` methods,
  `turn_to_angle`, `drive_distance`, `left_swing_to_angle` and
  `right_swing_to_angle`. Swing outputs are limited by the turn maximum
  voltage.
- `jarchassis.tracking` – `TrackingChassis`, adding tracker readings
  per drive setup, `set_coordinates` (resets the pose and starts a
  background thread that updates odometry every 5 ms),
  `update_odometry`, `stop_tracking`, the `tracking` property,
  `get_x_position` / `get_y_position`, `drive_to_point` and
  `turn_to_point`.
- `jarchassis.drive` – `Drive`, adding `drive_to_pose` (boomerang
  controller using `boomerang_lead` and `boomerang_setback` by
  default), `holonomic_drive_to_pose`, and the driver modes
  `control_arcade`, `control_tank` and `control_holonomic`, each taking
  a `Controller`. Holonomic methods raise `ValueError` unless all four
  corner motors were given.
- `jarchassis.autons` – `default_constants`, `odom_constants` and the
  routines `drive_test`, `turn_test`, `swing_test`, `full_test`,
  `odom_test` (shows `odom_readout` lines through a `display` callable,
  printing by default), `tank_odom_test` and `holonomic_odom_test`.
- `jarchassis.competition` – `AutonSelector` (`update` on each pass of
  a selection loop, `label`, `status_lines`), `run_autonomous`, which
  runs routine 0–7 for a selection, and `usercontrol`, which runs
  arcade control every 20 ms.

Movement methods take their tuning values as optional arguments; any
you leave out fall back to the constants set on the chassis, which
start at zero.

Angles are in degrees, clockwise positive, with 0 facing +Y. Distances
are in inches and voltages are out of 12.

## Example

```python
from jarchassis.autons import default_constants, drive_test
from jarchassis.chassis import DriveSetup
from jarchassis.competition import AutonSelector, run_autonomous
from jarchassis.drive import Drive
from jarchassis.hardware import Gyro, MotorGroup, Tracker

chassis = Drive(
    DriveSetup.TANK_TWO_ROTATION,
    MotorGroup(), MotorGroup(), Gyro(),
    2.75, 0.75, 360,
    forward_tracker=Tracker(),
    forward_tracker_diameter=2.75,
    forward_tracker_center_distance=-2,
    sideways_tracker=Tracker(),
    sideways_tracker_diameter=-2.75,
    sideways_tracker_center_distance=5.5,
    sleep=lambda ms: None,
)
default_constants(chassis)
drive_test(chassis)

selector = AutonSelector()
selector.update(pressing=True)   # selection 1
run_autonomous(chassis, selector)
```

With in-memory devices nothing moves, so each movement runs until its
timeout.

## What it does not do

- It has no command-line program and no entry point.
- It does not talk to motors, sensors or a controller itself; bind
  them by subclassing the classes in `jarchassis.hardware`.
- It does not draw to a screen or read touches: `AutonSelector` and
  `odom_test` produce text lines and take the press state, and you
  supply the display.
- It does not schedule a match: calling `run_autonomous` and
  `usercontrol` at the right times is up to the caller.