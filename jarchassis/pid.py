"""PID controller with integral windup limiting and settling detection."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["PID"]

_TICK_MS = 10.0


@dataclass
class PID:
    """PID controller that also decides when a movement has settled.

    The integral only accumulates while ``|error| < starti`` and is reset when
    the error changes sign. A movement is settled once the error has stayed
    below ``settle_error`` for longer than ``settle_time`` ms, or once it has
    run longer than ``timeout`` ms (a timeout of 0 never expires). Each call to
    :meth:`compute` counts as one 10 ms tick.
    """

    error: float
    kp: float
    ki: float
    kd: float
    starti: float
    settle_error: float = 0.0
    settle_time: float = 0.0
    timeout: float = 0.0
    update_period: float = 10.0
    accumulated_error: float = field(default=0.0, init=False)
    previous_error: float = field(default=0.0, init=False)
    output: float = field(default=0.0, init=False)
    time_spent_settled: float = field(default=0.0, init=False)
    time_spent_running: float = field(default=0.0, init=False)

    def compute(self, error: float) -> float:
        """Feed a new error and return the controller output."""
        if abs(error) < self.starti:
            self.accumulated_error += error
        if (error > 0 and self.previous_error < 0) or (error < 0 and self.previous_error > 0):
            self.accumulated_error = 0.0

        self.output = (
            self.kp * error
            + self.ki * self.accumulated_error
            + self.kd * (error - self.previous_error)
        )
        self.previous_error = error

        if abs(error) < self.settle_error:
            self.time_spent_settled += _TICK_MS
        else:
            self.time_spent_settled = 0.0
        self.time_spent_running += _TICK_MS
        return self.output

    def is_settled(self) -> bool:
        """Whether the movement has settled or timed out."""
        if self.timeout != 0 and self.time_spent_running > self.timeout:
            return True
        return self.time_spent_settled > self.settle_time