[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memkit"
version = "0.1.0"
description = "Maximal exact matches, suffix-array sample files and FASTQ splitting for read alignment"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bioinformatics",
    "maximal exact matches",
    "matching statistics",
    "r-index",
    "BWT",
    "FASTQ",
    "suffix array",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["memkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
