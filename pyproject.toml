[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jagkit"
version = "0.1.0"
description = "Blitter registers, object lists, bitmap fonts, 3D data structures, demo state and a small C-style runtime, modelled in Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "blitter",
    "object-list",
    "bitmap-font",
    "fixed-point",
    "3d",
    "embedded",
    "sprintf",
    "allocator",
]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jagkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
