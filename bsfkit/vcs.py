"""Helpers for keeping generated files tracked or ignored by git."""

from __future__ import annotations

from pathlib import Path


def get_leaf_dir(root: str, path: str) -> str:
    """Return ``path`` relative to the work tree ``root`` (which ends in '/')."""
    if root == path + "/":
        return ""
    return path.removeprefix(root)


def ignore(path: str, directory: str | Path = ".") -> None:
    """Append ``path`` to the .gitignore in ``directory`` unless already there."""
    gitignore = Path(directory) / ".gitignore"
    if not gitignore.exists():
        gitignore.touch()
    content = gitignore.read_bytes()
    if path.encode("utf-8") in content:
        return
    gitignore.write_bytes(content + ("\n" + path).encode("utf-8"))