"""Generating Cargo.nix for Rust projects."""

from __future__ import annotations

import subprocess
from pathlib import Path

CARGO2NIX_COMMAND = ["nix", "run", "github:cargo2nix/cargo2nix"]


def gen_cargo_nix(directory: str | Path = "bsf/") -> None:
    """Run cargo2nix in ``directory`` to produce Cargo.nix."""
    result = subprocess.run(CARGO2NIX_COMMAND, cwd=directory, check=False)
    if result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, CARGO2NIX_COMMAND)