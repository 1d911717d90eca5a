[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsengine"
version = "0.1.0"
description = "A small JavaScript engine core: a stack-based bytecode VM and a semantic analyzer"
requires-python = ">=3.10"
dependencies = []
keywords = ["javascript", "interpreter", "bytecode", "virtual-machine", "semantic-analysis", "type-checking"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
