"""Target platform resolution for OCI image builds."""

from __future__ import annotations

import platform as _platform
import sys

SUPPORTED_PLATFORMS = ("linux/amd64", "linux/arm64")

_OS_NAMES = {"win32": "windows", "cygwin": "windows", "darwin": "darwin"}
_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}
_NIX_SYSTEMS = {"linux/amd64": "x86_64-linux", "linux/arm64": "aarch64-linux"}


class UnsupportedPlatformError(ValueError):
    """Raised when an image cannot be built for the requested platform."""


def _host_platform() -> tuple[str, str]:
    os_name = sys.platform
    if os_name.startswith("linux"):
        os_name = "linux"
    elif os_name.startswith("freebsd"):
        os_name = "freebsd"
    os_name = _OS_NAMES.get(os_name, os_name)
    machine = _platform.machine().lower()
    return os_name, _ARCH_NAMES.get(machine, machine)


def find_platform(platform: str) -> tuple[str, str]:
    """Split 'os/arch'; fall back to the host platform if it is not in that form."""
    if not platform:
        return _host_platform()
    parts = platform.split("/")
    if len(parts) != 2:
        return _host_platform()
    return parts[0], parts[1]


def check_platform(platform: str) -> str:
    """Return the platform to build for, defaulting to the host; reject unsupported ones."""
    resolved = platform or "/".join(find_platform(platform))
    if not any(supported in resolved for supported in SUPPORTED_PLATFORMS):
        raise UnsupportedPlatformError(
            f"Platform {platform} is not supported. "
            f"Supported platforms are {', '.join(SUPPORTED_PLATFORMS)}"
        )
    return resolved


def gen_oci_attr_name(env: str, platform: str) -> str:
    """Return the flake attribute that builds the OCI image for ``env``."""
    system = _NIX_SYSTEMS.get(platform, "")
    return f"bsf/.#ociImages.{system}.ociImage_{env}-as-dir"