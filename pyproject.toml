[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbkstatics"
version = "0.1.0"
description = "Geometry, survey-file readers and a sparse equation solver for seismic first-break static corrections"
requires-python = ">=3.10"
dependencies = []
keywords = ["seismic", "first break", "static correction", "P190", "geophysics", "sparse equations"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fbkstatics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
