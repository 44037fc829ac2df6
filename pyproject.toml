[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dascommon"
version = "0.1.0"
description = "Common building blocks for CKB account services: transaction building, cell helpers, tx-pool tracking and address utilities"
requires-python = ">=3.10"
keywords = ["ckb", "blockchain", "transaction", "base58", "tron", "cells", "witness"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pyyaml",
    "cachetools",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dascommon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
