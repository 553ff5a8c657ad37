[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bsfkit"
version = "0.1.0"
description = "Build helpers: in-toto attestation bundles, Dockerfile rendering, NAR hashing, gomod2nix lock files and package version ordering"
requires-python = ">=3.11"
keywords = ["nix", "attestation", "in-toto", "dockerfile", "oci", "gomod2nix", "nar", "semver", "build"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "jinja2",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bsf = "bsfkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bsfkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
