[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atomgrid"
version = "0.1.0"
description = "A chain-reaction atom board game for up to six players, with a timed single-player challenge mode"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "board game", "chain reaction", "atoms", "puzzle"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
atomgrid = "atomgrid.game:main"

[tool.hatch.build.targets.wheel]
packages = ["atomgrid"]

[tool.pytest.ini_options]
addopts = "-ra"
