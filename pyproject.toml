[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bitbench"
version = "0.1.0"
description = "Small data-processing workloads: ID3 information gain, synthetic datasets, PGM test images and classic compressors (Huffman, BWT, MTF, RLE)."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "entropy",
    "information-gain",
    "id3",
    "huffman",
    "burrows-wheeler",
    "move-to-front",
    "run-length-encoding",
    "pgm",
    "benchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bitbench-entropy = "bitbench.entropy:main"
bitbench-datagen = "bitbench.datagen:main"
bitbench-huffman = "bitbench.huffman:main"
bitbench-chunked = "bitbench.chunked:main"
bitbench-bwt = "bitbench.bwt:main"
bitbench-rle = "bitbench.rle:main"
bitbench-pgm = "bitbench.pgm:main"

[tool.hatch.build.targets.wheel]
packages = ["bitbench"]

[tool.hatch.build.targets.sdist]
include = ["bitbench", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
