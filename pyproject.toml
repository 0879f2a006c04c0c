[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dsfapi"
version = "2.0.0"
description = "Typed commands, codes, init messages and machine model helpers for the DuetControlServer JSON protocol"
requires-python = ">=3.10"
keywords = ["duet", "reprapfirmware", "3d-printing", "gcode", "dsf", "json"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dsfapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
