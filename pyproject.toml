[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ionbin"
version = "0.1.0"
description = "Low-level building blocks for the binary Ion data format: decimals, varint encodings, buffered containers and a binary stream parser."
requires-python = ">=3.10"
dependencies = []
keywords = ["ion", "binary", "serialization", "decimal", "varint", "parser"]
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
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ionbin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
