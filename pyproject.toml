[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdpcore"
version = "0.1.0"
description = "Dense linear algebra kernels, chordal sparsity analysis and iterate bookkeeping for semidefinite programming"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["semidefinite programming", "sdp", "blas", "linear algebra", "chordal", "optimization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
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
test = ["pytest", "numpy"]

[tool.hatch.build.targets.wheel]
packages = ["sdpcore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
