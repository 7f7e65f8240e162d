[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treebuf"
version = "0.1.0"
description = "Building blocks of the Tree-Buf binary format: varints, type ids, branch decoding, compressors and size statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["tree-buf", "serialization", "binary", "compression", "varint", "gorilla", "run-length"]
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
    "Topic :: File Formats",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["treebuf"]

[tool.pytest.ini_options]
addopts = "-ra"
