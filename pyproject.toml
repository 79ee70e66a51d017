[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "jarchassis"
version = "1.2.0"
description = "PID motion control, odometry and autonomous routines for a differential or holonomic robot chassis"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "pid", "odometry", "chassis", "motion-control", "boomerang"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["jarchassis*"]

[tool.pytest.ini_options]
addopts = "-ra"
