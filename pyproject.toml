[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinpoint"
version = "0.1.0"
description = "PCM audio conversion, WAV stream saving, audio pipeline wiring and a WT9011DCL IMU packet driver"
requires-python = ">=3.10"
keywords = ["audio", "pcm", "wav", "resampling", "imu", "wt9011dcl", "serial"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]
dependencies = [
    "numpy",
    "scipy",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pinpoint"]

[tool.pytest.ini_options]
addopts = "-ra"
