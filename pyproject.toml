[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "handiso"
version = "0.1.0"
description = "Map poker hands to indices shared by all suit-isomorphic hands, and back to canonical hands"
requires-python = ">=3.10"
dependencies = []
keywords = ["poker", "hand", "isomorphism", "indexing", "cards", "abstraction"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
handiso-check = "handiso.check:main"

[tool.hatch.build.targets.wheel]
packages = ["handiso"]

[tool.pytest.ini_options]
addopts = "-ra"
