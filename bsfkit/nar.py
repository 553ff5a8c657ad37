"""Nix archive (NAR) serialisation of a file tree, and its SRI hash."""

from __future__ import annotations

import base64
import hashlib
import os
import stat
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

PathFilter = Callable[[str], bool]

_MAGIC = b"nix-archive-1"
_CHUNK = 1 << 16


class _Writer(Protocol):
    def write(self, data: bytes, /) -> object: ...


def _padding(length: int) -> bytes:
    return b"\0" * (-length % 8)


def _length(length: int) -> bytes:
    return length.to_bytes(8, "little")


class _NarEncoder:
    def __init__(self, writer: _Writer) -> None:
        self._writer = writer

    def string(self, data: bytes | str) -> None:
        raw = data.encode("utf-8") if isinstance(data, str) else data
        self._writer.write(_length(len(raw)) + raw + _padding(len(raw)))

    def tokens(self, *items: bytes | str) -> None:
        for item in items:
            self.string(item)

    def contents(self, path: Path, size: int) -> None:
        self._writer.write(_length(size))
        written = 0
        with open(path, "rb") as handle:
            while chunk := handle.read(_CHUNK):
                self._writer.write(chunk)
                written += len(chunk)
        if written != size:
            raise OSError(f"file {path} changed while being archived")
        self._writer.write(_padding(size))


def _dump_node(encoder: _NarEncoder, path: Path, path_filter: PathFilter | None) -> None:
    info = os.lstat(path)
    mode = info.st_mode
    if stat.S_ISLNK(mode):
        encoder.tokens("(", "type", "symlink", "target", os.readlink(os.fsencode(path)))
    elif stat.S_ISREG(mode):
        encoder.tokens("(", "type", "regular")
        if mode & stat.S_IXUSR:
            encoder.tokens("executable", "")
        encoder.string("contents")
        encoder.contents(path, info.st_size)
    elif stat.S_ISDIR(mode):
        encoder.tokens("(", "type", "directory")
        with os.scandir(path) as entries:
            children = sorted(entries, key=lambda entry: os.fsencode(entry.name))
        for child in children:
            child_path = path / child.name
            if path_filter is not None and not path_filter(str(child_path)):
                continue
            encoder.tokens("entry", "(", "name", os.fsencode(child.name), "node")
            _dump_node(encoder, child_path, path_filter)
            encoder.string(")")
    else:
        raise ValueError(f"invalid mode for file {path}")
    encoder.string(")")


def dump_path(
    writer: _Writer, path: str | Path, path_filter: PathFilter | None = None
) -> None:
    """Write the NAR serialisation of ``path`` to ``writer``.

    ``path_filter`` receives the full path of each entry below ``path`` and
    excludes it when it returns false.
    """
    encoder = _NarEncoder(writer)
    encoder.string(_MAGIC)
    _dump_node(encoder, Path(path), path_filter)


class _HashWriter:
    def __init__(self) -> None:
        self.digest = hashlib.sha256()

    def write(self, data: bytes) -> int:
        self.digest.update(data)
        return len(data)


def nar_hash(path: str | Path, path_filter: PathFilter | None = None) -> str:
    """Return the SHA-256 NAR hash of ``path`` as an SRI string."""
    writer = _HashWriter()
    dump_path(writer, path, path_filter)
    return "sha256-" + base64.b64encode(writer.digest.digest()).decode("ascii")