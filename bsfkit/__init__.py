"""Build helpers: attestations, Dockerfiles, NAR hashing, gomod2nix lock files and version ordering."""

__version__ = "0.1.0"
__all__ = ["__version__"]