[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fontraster"
version = "0.9.3"
description = "A small pure-Python glyph outline flattener, rasterizer and font metrics library."
requires-python = ">=3.10"
dependencies = []
keywords = ["font", "glyph", "rasterizer", "truetype", "opentype", "kerning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["fontraster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
