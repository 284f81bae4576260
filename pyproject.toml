[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webbits"
version = "0.1.0"
description = "Bit-level input and output streams with unary, gamma, delta, zeta and nibble codes"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitstream", "gamma code", "delta code", "zeta code", "nibble code", "compression"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["webbits"]

[tool.pytest.ini_options]
addopts = "-ra"
