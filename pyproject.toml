[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "strideview"
version = "0.1.0"
description = "Multidimensional views over flat buffers with pluggable index layouts"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["layout", "strides", "multidimensional", "array", "view", "tiling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
strideview-span = "strideview.span:main"
strideview-tiled = "strideview.tiled:main"
strideview-aligned-bench = "strideview.aligned_bench:main"
strideview-restrict-bench = "strideview.restrict:main"

[tool.hatch.build.targets.wheel]
packages = ["strideview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
