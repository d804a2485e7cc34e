[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lifetrack"
version = "1.0.0"
description = "Domain model and PostgreSQL repository for personal nutrition, workout and life-progress tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["nutrition", "workout", "habits", "tracking", "postgresql", "diary"]
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
    "Topic :: Database :: Front-Ends",
    "Topic :: Office/Business :: News/Diary",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lifetrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
