[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelui"
version = "0.1.0"
description = "Drawing on 16-bit RGB565 and ARGB4444 pixel buffers: clipping, primitives, masks, RLE bitmaps and image loading"
requires-python = ">=3.10"
keywords = ["bitmap", "rgb565", "argb4444", "framebuffer", "drawing", "rle", "mask"]
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
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixelui"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
