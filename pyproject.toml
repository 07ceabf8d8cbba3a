[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "espnixie"
version = "0.1.0"
description = "Logic for a nixie-tube clock: digit encoding, LED backlight, hourly history, task scheduling and nearby weather sensors"
requires-python = ">=3.10"
dependencies = []
keywords = ["nixie", "clock", "led", "scheduler", "weather", "home-automation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["espnixie"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
