[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asteroidfield"
version = "0.1.0"
description = "A top-down asteroid shooter in a bounded world with mass-based bouncing and splitting asteroids."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "asteroids", "arcade", "shooter", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
asteroidfield = "asteroidfield.app:main"
asteroidfield-bench = "asteroidfield.app:benchmark"

[tool.hatch.build.targets.wheel]
packages = ["asteroidfield"]

[tool.hatch.build.targets.sdist]
include = [
    "asteroidfield",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
