[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tigerkernel"
version = "0.1.0"
description = "A small teaching kernel model: page allocator, round-robin scheduler, trap handling, shell parsing and an in-memory filesystem, and a window manager with compositor and input routing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "scheduler",
    "page-allocator",
    "shell-parser",
    "window-manager",
    "compositor",
    "framebuffer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tigerkernel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
