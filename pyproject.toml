[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "secjoin"
version = "0.1.0"
description = "Plaintext building blocks around two-party secure joins: join keys, column projection, plaintext joins, share reconstruction, bitonic sorting and fixed-point and logistic regression helpers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "secure-computation",
    "secret-sharing",
    "join",
    "join-key",
    "bitonic-sort",
    "fixed-point",
    "logistic-regression",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
secjoin-bitonic = "secjoin.bitonic:main"
secjoin-logistic = "secjoin.logistic:main"

[tool.hatch.build.targets.wheel]
packages = ["secjoin"]

[tool.hatch.build.targets.sdist]
include = [
    "secjoin",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
