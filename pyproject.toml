[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smjoin"
version = "0.1.0"
description = "Page-oriented external merge sort and sort-merge join of CSV tables with I/O accounting"
requires-python = ">=3.10"
dependencies = []
keywords = ["sort-merge join", "external sort", "csv", "database", "join", "paging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smj = "smjoin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["smjoin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
