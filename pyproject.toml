[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weissearch"
version = "0.1.0"
description = "Search components for a UCI chess engine: transposition table, history heuristics, time management, root move bookkeeping, UCI protocol helpers and an evaluation tuner"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "chess",
    "uci",
    "engine",
    "alpha-beta",
    "transposition-table",
    "history-heuristic",
    "time-management",
    "tuning",
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["weissearch"]

[tool.hatch.build.targets.sdist]
include = ["weissearch", "tests"]

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
warn_redundant_casts = true
