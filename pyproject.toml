[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seqmatch"
version = "0.1.0"
description = "Exact and inexact pattern matching, PWM scoring and letter/oligonucleotide frequency counting for biological sequences"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "bioinformatics",
    "dna",
    "sequence",
    "pattern matching",
    "boyer-moore",
    "shift-or",
    "edit distance",
    "position weight matrix",
    "oligonucleotide",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["seqmatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
