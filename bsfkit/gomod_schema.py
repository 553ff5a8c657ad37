"""The gomod2nix.toml lock format for Go module dependencies."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import tomli_w

SCHEMA_VERSION = 3


@dataclass
class GoPackage:
    """A Go module pinned by version and NAR hash."""

    go_package_path: str
    version: str
    hash: str
    replaced_path: str = ""


def marshal(
    packages: Iterable[GoPackage],
    go_package_path: str = "",
    sub_packages: Iterable[str] | None = None,
) -> bytes:
    """Encode packages as a gomod2nix.toml document."""
    mod: dict[str, dict[str, str]] = {}
    for pkg in packages:
        entry = {"version": pkg.version, "hash": pkg.hash}
        if pkg.replaced_path:
            entry["replaced"] = pkg.replaced_path
        mod[pkg.go_package_path] = entry

    document: dict[str, object] = {"schema": SCHEMA_VERSION}
    subs = list(sub_packages or [])
    if subs:
        document["subPackages"] = subs
    if go_package_path:
        document["goPackagePath"] = go_package_path
    document["mod"] = dict(sorted(mod.items()))
    return tomli_w.dumps(document).encode("utf-8")


def read_cache(path: str | Path) -> dict[str, GoPackage]:
    """Read a gomod2nix.toml file; return {} if it is missing, invalid or outdated."""
    if not path:
        return {}
    try:
        with open(path, "rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError):
        return {}

    if document.get("schema") != SCHEMA_VERSION:
        return {}
    mod = document.get("mod", {})
    if not isinstance(mod, dict):
        return {}

    cache: dict[str, GoPackage] = {}
    for name, entry in mod.items():
        if not isinstance(entry, dict):
            return {}
        version = entry.get("version", "")
        digest = entry.get("hash", "")
        replaced = entry.get("replaced", "")
        if not all(isinstance(v, str) for v in (version, digest, replaced)):
            return {}
        cache[name] = GoPackage(
            go_package_path=name, version=version, hash=digest, replaced_path=replaced
        )
    return cache