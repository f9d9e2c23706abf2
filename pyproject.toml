[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "golutra"
version = "0.1.0"
description = "Headless multi-agent orchestration engine with an interactive command line"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = [
    "agents",
    "orchestration",
    "multi-agent",
    "dag",
    "scheduler",
    "repl",
    "shared-memory",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
golutra = "golutra.app:main"

[tool.hatch.build.targets.wheel]
packages = ["golutra"]

[tool.hatch.build.targets.sdist]
include = [
    "golutra",
    "tests",
]

[tool.pytest.ini_options]
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
