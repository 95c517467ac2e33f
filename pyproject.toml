[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vistools"
version = "0.1.0"
description = "Image, scalar grid, OBJ mesh and line/triangle geometry helpers for visualization work"
requires-python = ">=3.10"
dependencies = []
keywords = ["visualization", "image", "grid", "signed distance", "obj", "wireframe", "geometry", "mersenne twister"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vistools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
