"""Competition flow: autonomous selection, dispatch and driver control."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Callable

from . import autons
from .drive import Drive
from .hardware import Controller

__all__ = ["AutonSelector", "run_autonomous", "usercontrol"]

TEMPLATE_TITLE = "JAR Template v1.2.0"
AUTON_COUNT = 8
_USERCONTROL_PERIOD_MS = 20

_ROUTINES: dict[int, Callable[[Drive], None]] = {
    0: autons.drive_test,
    1: autons.drive_test,
    2: autons.turn_test,
    3: autons.swing_test,
    4: autons.full_test,
    5: autons.odom_test,
    6: autons.tank_odom_test,
    7: autons.holonomic_odom_test,
}


@dataclass
class AutonSelector:
    """Pre-autonomous selection of which routine to run.

    Each screen press advances the selection by one; once it has passed the
    last routine it wraps back to the first on the next update without a press.
    """

    selection: int = 0
    started: bool = False

    def update(self, pressing: bool) -> int:
        """Register one pass of the selection loop and return the selection."""
        if pressing:
            self.selection += 1
        elif self.selection == AUTON_COUNT:
            self.selection = 0
        return self.selection

    def label(self) -> str | None:
        """Display name of the selected routine, or None when out of range."""
        if 0 <= self.selection < AUTON_COUNT:
            return f"Auton {self.selection + 1}"
        return None

    def status_lines(self, battery_capacity: int, heading: float) -> list[str]:
        """Lines shown on the screen before autonomous starts."""
        lines = [
            TEMPLATE_TITLE,
            "Battery Percentage:",
            f"{int(battery_capacity):d}",
            "Chassis Heading Reading:",
            f"{heading:f}",
            "Selected Auton:",
        ]
        label = self.label()
        if label is not None:
            lines.append(label)
        return lines


def run_autonomous(chassis: Drive, selection: int | AutonSelector) -> None:
    """Run the selected autonomous routine; unknown selections do nothing."""
    if isinstance(selection, AutonSelector):
        selection.started = True
        selection = selection.selection
    routine = _ROUTINES.get(selection)
    if routine is not None:
        routine(chassis)


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000.0)


def usercontrol(
    chassis: Drive,
    controller: Controller,
    sleep: Callable[[float], None] | None = None,
    iterations: int | None = None,
) -> None:
    """Drive the chassis in arcade mode from the controller every 20 ms.

    Runs forever unless ``iterations`` is given.
    """
    sleep = sleep if sleep is not None else _sleep_ms
    ticks = itertools.count() if iterations is None else range(iterations)
    for _ in ticks:
        chassis.control_arcade(controller)
        sleep(_USERCONTROL_PERIOD_MS)