"""Semantic version validation and comparison for "v"-prefixed versions."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NUMBER = r"(?:0|[1-9][0-9]*)"
_IDENT = r"[0-9A-Za-z-]+"
_VERSION_RE = re.compile(
    rf"v(?P<major>{_NUMBER})"
    rf"(?:\.(?P<minor>{_NUMBER})"
    rf"(?:\.(?P<patch>{_NUMBER})"
    rf"(?:-(?P<pre>{_IDENT}(?:\.{_IDENT})*))?"
    rf"(?:\+(?P<build>{_IDENT}(?:\.{_IDENT})*))?"
    r")?)?",
    re.ASCII,
)


@dataclass(frozen=True)
class _Version:
    major: str
    minor: str
    patch: str
    prerelease: tuple[str, ...]


def _is_numeric(ident: str) -> bool:
    return ident.isascii() and ident.isdigit()


def _parse(version: str) -> _Version | None:
    match = _VERSION_RE.fullmatch(version)
    if match is None:
        return None
    pre = match.group("pre")
    prerelease: tuple[str, ...] = tuple(pre.split(".")) if pre else ()
    for ident in prerelease:
        if _is_numeric(ident) and len(ident) > 1 and ident.startswith("0"):
            return None
    return _Version(
        major=match.group("major"),
        minor=match.group("minor") or "0",
        patch=match.group("patch") or "0",
        prerelease=prerelease,
    )


def _compare_numbers(left: str, right: str) -> int:
    left_key = (len(left), left)
    right_key = (len(right), right)
    if left_key == right_key:
        return 0
    return -1 if left_key < right_key else 1


def _compare_prerelease(left: tuple[str, ...], right: tuple[str, ...]) -> int:
    if left == right:
        return 0
    if not left:
        return 1
    if not right:
        return -1
    for dx, dy in zip(left, right):
        if dx == dy:
            continue
        x_num, y_num = _is_numeric(dx), _is_numeric(dy)
        if x_num != y_num:
            return -1 if x_num else 1
        if x_num:
            return _compare_numbers(dx, dy)
        return -1 if dx < dy else 1
    return -1 if len(left) < len(right) else 1


def is_valid(version: str) -> bool:
    """Report whether ``version`` is a valid "v"-prefixed semantic version."""
    return _parse(version) is not None


def compare(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing two versions; invalid ones sort lowest."""
    parsed_left = _parse(left)
    parsed_right = _parse(right)
    if parsed_left is None and parsed_right is None:
        return 0
    if parsed_left is None:
        return -1
    if parsed_right is None:
        return 1
    for a, b in (
        (parsed_left.major, parsed_right.major),
        (parsed_left.minor, parsed_right.minor),
        (parsed_left.patch, parsed_right.patch),
    ):
        result = _compare_numbers(a, b)
        if result:
            return result
    return _compare_prerelease(parsed_left.prerelease, parsed_right.prerelease)


def check_version_greater(current: str, required: str) -> bool:
    """Report whether ``current`` is at least ``required``."""
    return compare(current, required) >= 0