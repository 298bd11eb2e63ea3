[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mosfetbot"
version = "0.1.0"
description = "Building blocks for a turn-based shuttle strategy agent: configuration, observation parsing, energy accounting, relic constraint solving and job planning."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "agent", "strategy", "constraint-solving", "planning"]
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
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mosfetbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
