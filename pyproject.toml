[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskframe"
version = "0.1.0"
description = "Framed codecs over async byte streams and a single-threaded asyncio runtime."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "asyncio",
    "codec",
    "framing",
    "runtime",
    "event-loop",
    "lines",
]
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["taskframe"]

[tool.hatch.build.targets.sdist]
include = ["taskframe", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
