"""Dockerfile generation for an OCI artifact built with Nix."""

from __future__ import annotations

import random
import string
import subprocess
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import jinja2

_NIX_SYSTEMS = {
    "linux/amd64": "x86_64-linux",
    "linux/arm64": "aarch64-linux",
}

_HTML_REPLACEMENTS = {
    "\0": "\ufffd",
    '"': "&#34;",
    "&": "&amp;",
    "'": "&#39;",
    "+": "&#43;",
    "<": "&lt;",
    ">": "&gt;",
}

DOCKERFILE_TEMPLATE = r"""# Nix builder
FROM nixos/nix:latest AS builder

# Copy our source and setup our working dir.
COPY . /tmp/build
WORKDIR /tmp/build/bsf

# Build runtime package dependencies
RUN nix \
    --extra-experimental-features "nix-command flakes" \
    --option filter-syscalls false \
    build

# Build additional packages we need for runtime
RUN nix \
    --extra-experimental-features "nix-command flakes" \
    --option filter-syscalls false \
    build .#runtimeEnvs.{{ platform }}.runtime -o runtimeEnv

{% if dev_deps %}
# Build development packages if devDeps is set to true in bsf.hcl
RUN nix \
    --extra-experimental-features "nix-command flakes" \
    --option filter-syscalls false \
    build .#devEnvs.{{ platform }}.development -o devEnv
{% endif %}

# Copy the Nix store closure into a directory. The Nix store closure is the
# entire set of Nix store values that we need for our build and custom environment.
RUN mkdir /tmp/nix-store-closure
RUN cp -R $(nix-store -qR result/) /tmp/nix-store-closure
RUN cp -R $(nix-store -qR runtimeEnv/) /tmp/nix-store-closure
{% if dev_deps %}
RUN cp -R $(nix-store -qR devEnv/) /tmp/nix-store-closure
{% endif %}

# # Final image is based on scratch. We copy a bunch of Nix dependencies
# # but they're fully self-contained so we don't need Nix anymore.
{% if dev_deps %}
FROM busybox
{% else %}
FROM scratch
{% endif %}

WORKDIR /bin
{% if config != "" %}
COPY {{ config }} /result/app
{% endif %}
# Copy /nix/store
COPY --from=builder /tmp/nix-store-closure /nix/store
# Add symlink to result
COPY --from=builder /tmp/build/bsf/result/bin /bin
COPY --from=builder /tmp/build/bsf/runtimeEnv /bin
{% if dev_deps %}
COPY --from=builder /tmp/build/bsf/devEnv /bin
{% endif %}
ENV SSL_CERT_FILE="/bin/etc/ssl/certs/ca-bundle.crt"
ENV PATH="/bin:${PATH}"
{% if env_vars %}ENV {% for key, value in env_vars %}{{ key }}={{ value|quote }} {% endfor %}{% endif %}
{% if cmd %}CMD [{% for element in cmd %} {% if not loop.first %}, {% endif %} "{{ element|quote }}" {% endfor %}]{% endif %}
{% if entrypoint %} ENTRYPOINT [{% for element in entrypoint %}{% if not loop.first %}, {% endif %} "{{ element|quote }}" {% endfor %}]{% endif %}
"""


def quote(text: str) -> str:
    """Escape newlines so a value stays on one Dockerfile line."""
    return text.replace("\n", "\\n")


def _html_escape(value: object) -> str:
    return "".join(_HTML_REPLACEMENTS.get(ch, ch) for ch in str(value))


_ENVIRONMENT = jinja2.Environment(
    autoescape=False,
    keep_trailing_newline=True,
    finalize=_html_escape,
    undefined=jinja2.StrictUndefined,
)
_ENVIRONMENT.filters["quote"] = quote
_TEMPLATE = _ENVIRONMENT.from_string(DOCKERFILE_TEMPLATE)


def convert_envs_to_map(envs: Iterable[str]) -> dict[str, str]:
    """Turn KEY=VALUE strings into a mapping; entries without '=' are dropped."""
    env_map: dict[str, str] = {}
    for env in envs:
        key, sep, value = env.partition("=")
        if sep:
            env_map[key] = value
    return env_map


@dataclass
class DockerfileConfig:
    """Values substituted into the Dockerfile template."""

    platform: str = ""
    cmd: list[str] = field(default_factory=list)
    entrypoint: list[str] = field(default_factory=list)
    env_vars: dict[str, str] = field(default_factory=dict)
    dev_deps: bool = False
    config: str = ""

    @classmethod
    def from_export(
        cls,
        cmd: Iterable[str],
        entrypoint: Iterable[str],
        env_vars: Iterable[str],
        dev_deps: bool,
        platform: str,
    ) -> "DockerfileConfig":
        """Build the template values from an OCI export block and a platform."""
        return cls(
            platform=_NIX_SYSTEMS.get(platform, platform),
            cmd=list(cmd),
            entrypoint=list(entrypoint),
            env_vars=convert_envs_to_map(env_vars),
            dev_deps=dev_deps,
        )


def render_dockerfile(config: DockerfileConfig) -> str:
    """Render the Dockerfile text for the given configuration."""
    env_items: list[tuple[str, str]] = sorted(config.env_vars.items())
    return _TEMPLATE.render(
        platform=config.platform,
        cmd=config.cmd,
        entrypoint=config.entrypoint,
        env_vars=env_items,
        dev_deps=config.dev_deps,
        config=config.config,
    )


def generate_dockerfile(
    out: TextIO,
    cmd: Iterable[str],
    entrypoint: Iterable[str],
    env_vars: Iterable[str],
    dev_deps: bool,
    platform: str,
) -> None:
    """Write a Dockerfile for an OCI export block to ``out``."""
    config = DockerfileConfig.from_export(cmd, entrypoint, env_vars, dev_deps, platform)
    out.write(render_dockerfile(config))


def generate_random_filename() -> str:
    """Return ten random lower-case letters."""
    rng = random.Random()
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(10))


def create_temp_dir() -> Path:
    """Return the 'bsf' directory under the system temp dir, creating it."""
    bsf_dir = Path(tempfile.gettempdir()) / "bsf"
    if not bsf_dir.exists():
        bsf_dir.mkdir(mode=0o755)
    return bsf_dir


def get_snapshotter() -> str:
    """Return docker's storage driver status as reported by ``docker info``."""
    try:
        result = subprocess.run(
            ["docker", "info", "-f", " '{{ .DriverStatus }}' "],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"error fetching  DriverStatus: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(
            f"error fetching  DriverStatus: exit status {result.returncode}"
        )
    return result.stdout