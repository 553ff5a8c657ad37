"""Reading the current docker context and context endpoints."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _load(data: bytes) -> Any:
    try:
        return json.loads(data)
    except ValueError:
        return None


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _lookup(document: Any, *keys: str) -> str:
    for key in keys:
        if not isinstance(document, dict):
            return ""
        document = document.get(key)
    return _as_string(document)


def _home(home: str | Path | None) -> Path:
    return Path(home) if home is not None else Path.home()


def get_current_context(home: str | Path | None = None) -> str:
    """Return the ``currentContext`` from ~/.docker/config.json, or ''."""
    path = _home(home) / ".docker" / "config.json"
    return _lookup(_load(path.read_bytes()), "currentContext")


def read_context_endpoints(home: str | Path | None = None) -> dict[str, str]:
    """Map docker context names to their docker host endpoints."""
    meta_dir = _home(home) / ".docker" / "contexts" / "meta"
    endpoints: dict[str, str] = {}
    for entry in sorted(meta_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue
        document = _load((entry / "meta.json").read_bytes())
        name = _lookup(document, "Name")
        endpoints[name] = _lookup(document, "Endpoints", "docker", "Host")
    return endpoints