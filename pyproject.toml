[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "headlessfbo"
version = "0.1.0"
description = "Draw primitive shapes straight into an in-memory pixel buffer without a GPU."
requires-python = ">=3.10"
dependencies = []
keywords = ["raster", "pixels", "framebuffer", "headless", "drawing", "shapes", "rasterizer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["headlessfbo"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
