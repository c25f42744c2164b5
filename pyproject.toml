[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lagerkit"
version = "0.1.0"
description = "Functional building blocks for interactive programs: dependency bags, lenses, event loops and a small to-do model"
requires-python = ">=3.10"
dependencies = []
keywords = ["lens", "lenses", "dependency-injection", "event-loop", "functional", "immutable"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lagerkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
