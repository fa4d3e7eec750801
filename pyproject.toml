[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmkit"
version = "0.1.0"
description = "Robot control utilities: filters, trajectories, LQR, referee heat and power limits, and a video-transmission link decoder"
requires-python = ">=3.10"
keywords = [
    "robotics",
    "control",
    "kalman-filter",
    "lqr",
    "trajectory",
    "one-euro-filter",
    "serial",
    "crc",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Typing :: Typed",
]
dependencies = [
    "numpy",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rmkit-vt = "rmkit.video_transmission:main"

[tool.hatch.build.targets.wheel]
packages = ["rmkit"]

[tool.hatch.build.targets.sdist]
include = ["rmkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
