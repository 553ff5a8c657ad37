"""Package version records and their display ordering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

from bsfkit import semver


@dataclass
class Package:
    """One version of a package as returned by the search service."""

    name: str
    version: str
    spdx_id: str = ""
    free: bool = False
    homepage: str = ""
    epoch_seconds: int = 0


def sort_packages_with_timestamp(packages: Iterable[Package]) -> list[Package]:
    """Sort packages newest first by timestamp."""
    return sorted(packages, key=lambda pkg: pkg.epoch_seconds, reverse=True)


def _version_order(left: Package, right: Package) -> int:
    return semver.compare("v" + right.version, "v" + left.version)


def sort_packages_with_version(packages: Iterable[Package]) -> list[Package]:
    """Sort packages highest semantic version first."""
    return sorted(packages, key=cmp_to_key(_version_order))


def sort_packages(packages: Iterable[Package]) -> list[Package]:
    """Semver packages by version, followed by the rest by timestamp."""
    semver_pkgs = []
    other_pkgs = []
    for pkg in packages:
        (semver_pkgs if semver.is_valid("v" + pkg.version) else other_pkgs).append(pkg)
    return sort_packages_with_version(semver_pkgs) + sort_packages_with_timestamp(
        other_pkgs
    )