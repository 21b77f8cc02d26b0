[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lalrgen"
version = "0.1.0"
description = "Build LALR(1) automata and parsing tables from a plain-text grammar description"
requires-python = ">=3.10"
dependencies = []
keywords = ["lalr", "parser", "parser-generator", "grammar", "first-set", "follow-set", "parsing-table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lalrgen = "lalrgen.automaton:main"

[tool.hatch.build.targets.wheel]
packages = ["lalrgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
