[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meez3d"
version = "0.1.0"
description = "Engine-independent core of a small raycasting game: geometry, input handling, render batching, asset files and a tile-map level"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "raycasting", "tilemap", "input", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meez3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
