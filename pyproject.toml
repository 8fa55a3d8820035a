[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "massiflog"
version = "0.1.0"
description = "Massif blob layout, path, tag and trie entry helpers for MMR based verifiable logs, with a time ordered snowflake id generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["merkle", "mmr", "merkle-mountain-range", "transparency-log", "snowflake-id", "verifiable-log"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["massiflog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
