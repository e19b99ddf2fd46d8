[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "teambridge"
version = "0.1.0"
description = "Building blocks for a Microsoft Teams chat bot: activity types, access gating, prompt building, Adaptive Cards, attachment naming and a service URL store"
requires-python = ">=3.10"
keywords = ["teams", "bot-framework", "chatbot", "adaptive-cards", "activities"]
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
    "Topic :: Communications :: Chat",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["teambridge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
