"""PID motion control, odometry, autonomous routines and driver control for a robot chassis."""

__version__ = "1.2.0"