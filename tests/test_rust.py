import subprocess
from unittest.mock import patch

import pytest

from bsfkit.rust import CARGO2NIX_COMMAND, gen_cargo_nix


def _completed(returncode):
    return subprocess.CompletedProcess(args=CARGO2NIX_COMMAND, returncode=returncode)


def test_runs_cargo2nix_in_directory(tmp_path):
    with patch("bsfkit.rust.subprocess.run", return_value=_completed(0)) as run:
        gen_cargo_nix(tmp_path)
    assert run.call_args.args[0] == ["nix", "run", "github:cargo2nix/cargo2nix"]
    assert run.call_args.kwargs["cwd"] == tmp_path


def test_default_directory_failure():
    with patch("bsfkit.rust.subprocess.run", return_value=_completed(3)) as run:
        with pytest.raises(subprocess.CalledProcessError) as info:
            gen_cargo_nix()
    assert info.value.returncode == 3
    assert run.call_args.kwargs["cwd"] == "bsf/"


def test_failure_raises():
    with patch("bsfkit.rust.subprocess.run", return_value=_completed(2)):
        with pytest.raises(subprocess.CalledProcessError) as info:
            gen_cargo_nix("somewhere")
    assert info.value.returncode == 2
    assert info.value.cmd == CARGO2NIX_COMMAND