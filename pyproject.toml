[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "bistrosim"
version = "0.1.0"
description = "Discrete-event simulation of a restaurant with tables, a buffet, waiters, cashiers and fire alarms"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "discrete-event", "queueing", "restaurant"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bistrosim = "bistrosim.simulation:main"

[tool.setuptools.packages.find]
include = ["bistrosim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
