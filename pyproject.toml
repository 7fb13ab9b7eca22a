[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dblib"
version = "0.1.0"
description = "TDS wire-protocol packets and token packages, plus helpers for interactive SQL terminals"
requires-python = ">=3.10"
dependencies = []
keywords = ["tds", "sybase", "ase", "database", "protocol", "sql", "repl"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dblib"]

[tool.pytest.ini_options]
addopts = "-ra"
