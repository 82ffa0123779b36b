[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "airnode"
version = "0.1.0"
description = "Sensor decoding and display logic for a portable air-quality monitoring node"
requires-python = ">=3.10"
dependencies = []
keywords = ["air quality", "pms7003", "mq7", "nmea", "gps", "neo6m", "sensor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["airnode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
