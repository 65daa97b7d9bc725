[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "guildhall"
version = "0.1.0"
description = "Game-server core for an online role-playing game: accounts, characters, inventories and mail"
requires-python = ">=3.10"
dependencies = []
keywords = ["game-server", "rpg", "inventory", "mail", "sqlite"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["guildhall"]

[tool.hatch.build.targets.sdist]
include = ["guildhall", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
