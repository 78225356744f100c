[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "devdash"
version = "0.1.0"
description = "Terminal dashboard for development status: git, CI/CD, tasks and code quality"
requires-python = ">=3.10"
keywords = ["dashboard", "terminal", "git", "ci", "github", "tui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
]
dependencies = [
    "aiohttp",
    "rich",
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
devdash = "devdash.main:main"

[tool.hatch.build.targets.wheel]
packages = ["devdash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
