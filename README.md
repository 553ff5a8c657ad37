# bsfkit

Helpers for the build side of an application: validating and reading
in-toto attestation bundles, rendering Dockerfiles for Nix-built
environments, computing NAR hashes and reading/writing `gomod2nix.toml`
lock files, and ordering package versions by semantic version or release
time.

## Install

```
pip install bsfkit
```

For the test suite:

```
pip install "bsfkit[test]"
pytest
```

## Command line

Installing the package gives you the `bsf` command. Run without a
subcommand it prints its help.

List the predicate types and subjects in a JSONL file of in-toto
statements. The file is first checked to be JSON Lines, then every line is
checked to be an in-toto v1 statement with a known predicate type and at
least one named subject:

```
bsf att ls attestations.jsonl
```

Print the statements of one predicate type as indented JSON, optionally
limited to one subject name, printing only the predicate (`-p`), or writing
to a file (`-o`; with several matching statements the file ends up holding
the last one):

```
bsf att cat attestations.jsonl --predicate-type provenance
bsf att cat attestations.jsonl -t spdx --subject myapp --predicate
bsf att cat attestations.jsonl -t provenance -o provenance.json
```

Accepted predicate types are `provenance`, `vulnerability`, `vsa`,
`test-result`, `spdx`, `scai`, `runtime-trace`, `release`, `link` and `cdx`.

Environment variables:

- `BSF_DEBUG_DIR` — change into this directory before running.
- `BSF_DEBUG_MODE=true` — also offer `bsf configure`, which creates
  `~/.bsf.json` with defaults if it is missing and otherwise checks that it
  parses.
- `BSF_DEBUG=true` — let unexpected errors propagate with a traceback
  instead of printing a one-line message and exiting with status 1.

## Library

```python
from bsfkit.attestation import validate_in_toto_statement, get_relevant_statements
from bsfkit.packages import Package, sort_packages
from bsfkit.dockerfile import DockerfileConfig, render_dockerfile
from bsfkit.semver import check_version_greater

with open("attestations.jsonl", "rb") as fh:
    ps_map = validate_in_toto_statement(fh.read())
provenance = get_relevant_statements(ps_map, "provenance", "")

check_version_greater("v2.19.0", "v2.18.1")   # True

config = DockerfileConfig.from_export(
    cmd=["/bin/app"], entrypoint=[], env_vars=["PORT=8080"],
    dev_deps=False, platform="linux/amd64",
)
print(render_dockerfile(config))
```

Modules:

- `bsfkit.attestation` — `Statement`, `Subject`, `validate_in_toto_statement`,
  `get_predicate_type`, `get_relevant_statements`; invalid input raises
  `InvalidStatementError`.
- `bsfkit.packages` — `Package` and `sort_packages` (semver versions highest
  first, then the rest newest first by timestamp), plus
  `sort_packages_with_version` and `sort_packages_with_timestamp`.
- `bsfkit.semver` — `is_valid`, `compare` and `check_version_greater` for
  `v`-prefixed versions.
- `bsfkit.dockerfile` — `DockerfileConfig`, `render_dockerfile`,
  `generate_dockerfile`, `convert_envs_to_map`, `quote`, and
  `get_snapshotter` (runs `docker info`).
- `bsfkit.docker_context` — `get_current_context` and
  `read_context_endpoints` from `~/.docker`.
- `bsfkit.platforms` — `find_platform`, `check_platform` (only
  `linux/amd64` and `linux/arm64`; others raise `UnsupportedPlatformError`)
  and `gen_oci_attr_name`.
- `bsfkit.nar` — `dump_path` writes a NAR serialisation, `nar_hash` returns
  its `sha256-` SRI hash; both take an optional path filter.
- `bsfkit.gomod_schema` — `GoPackage`, `marshal` and `read_cache` for
  `gomod2nix.toml` (schema 3).
- `bsfkit.executor` — `ParallelExecutor`, running callables on a bounded
  number of threads and re-raising the first error from `wait()`.
- `bsfkit.vcs` — `ignore` appends a path to `.gitignore`; `get_leaf_dir`.
- `bsfkit.rust` — `gen_cargo_nix` runs `nix run github:cargo2nix/cargo2nix`.
- `bsfkit.config` — `Config` and `pre_check_conf`, which creates
  `~/.bsf.json` with defaults when missing and reads it otherwise.
- `bsfkit.styles` — `Style` and the predefined terminal styles.

## What it does not do

The command line covers attestation bundles only. There are no commands to
initialise a project, search for packages, open a development shell, build
or push OCI images, or write a Dockerfile; the package has no client for a
package search service. It also does not resolve a Go module's dependencies
itself: `nar_hash` and `marshal` work on directories and `GoPackage` records
you supply, but nothing here downloads modules or assembles the package list
for `gomod2nix.toml`.