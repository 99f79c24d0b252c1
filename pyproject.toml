[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "transpod"
version = "0.1.0"
description = "Edge contours, distance transforms, dataset layout and detection bookkeeping for transparent object recognition"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "edge contours",
    "distance transform",
    "transparent objects",
    "object recognition",
    "computer vision",
    "pick and place",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
transpod-qualities = "transpod.qualities:main"

[tool.hatch.build.targets.wheel]
packages = ["transpod"]

[tool.hatch.build.targets.sdist]
include = [
    "transpod",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
