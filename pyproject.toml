[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "betnow"
version = "0.1.0"
description = "An in-memory order book engine for two-team match betting markets, with same-team and cross-team matching"
requires-python = ">=3.10"
dependencies = []
keywords = ["order book", "matching engine", "betting", "exchange", "odds"]
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
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
betnow-orderbook = "betnow.orderbook_service:main"
betnow-web = "betnow.web:main"

[tool.hatch.build.targets.wheel]
packages = ["betnow"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
