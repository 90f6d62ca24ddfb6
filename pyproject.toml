[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitvendor"
version = "0.1.0"
description = "Vendor files and directories from remote git repositories with pinned commits, sync caches and hooks"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["git", "vendor", "vendoring", "dependencies", "lockfile"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gitvendor"]

[tool.hatch.build.targets.sdist]
include = ["gitvendor", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
