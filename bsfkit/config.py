"""Global command configuration stored in ~/.bsf.json."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API = "api.buildsafe.dev:443"
CONFIG_FILE_NAME = ".bsf.json"


@dataclass
class Config:
    """Address of the package search API and whether it uses TLS."""

    buildsafe_api: str = ""
    buildsafe_api_tls: bool = False

    def to_json(self) -> str:
        """Serialise to indented JSON."""
        return json.dumps(
            {
                "buildsafe_api": self.buildsafe_api,
                "buildsafe_api_tls": self.buildsafe_api_tls,
            },
            indent=2,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Config":
        """Parse JSON text; unknown keys are ignored, missing ones default."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        config = cls()
        api = data.get("buildsafe_api")
        if api is not None:
            if not isinstance(api, str):
                raise ValueError("buildsafe_api must be a string")
            config.buildsafe_api = api
        tls = data.get("buildsafe_api_tls")
        if tls is not None:
            if not isinstance(tls, bool):
                raise ValueError("buildsafe_api_tls must be a boolean")
            config.buildsafe_api_tls = tls
        return config


def pre_check_conf(home: str | Path | None = None) -> Config:
    """Load ~/.bsf.json, creating it with defaults if it does not exist."""
    home_dir = Path(home) if home is not None else Path.home()
    path = home_dir / CONFIG_FILE_NAME
    if not path.exists():
        config = Config(buildsafe_api=DEFAULT_API, buildsafe_api_tls=True)
        path.write_text(config.to_json(), encoding="utf-8")
        return config
    return Config.from_json(path.read_text(encoding="utf-8"))