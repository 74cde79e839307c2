[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "acequia"
version = "0.1.0"
description = "A teaching simulation of water sharing between regions through acequia canals"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "water", "acequia", "canals", "education", "teaching"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Hydrology",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
acequia = "acequia.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["acequia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
