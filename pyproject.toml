[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blocklu"
version = "0.1.0"
description = "Building blocks for block sparse LU: compressed storage, symbolic fill-in, pair sorting and kernel timing"
requires-python = ">=3.10"
dependencies = []
keywords = ["sparse", "lu", "factorization", "symbolic", "fill-in", "csc", "csr"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["blocklu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
