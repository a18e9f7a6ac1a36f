from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


def load_config(path: str | Path) -> Dict[str, Any]:
    """
    Load YAML config and validate the keys the API client needs.

    Required:
      - api.base_url
    Optional:
      - api.timeout_seconds (positive number, default 30)
      - api.version
      - api.source_access_token / api.target_access_token
      - clone.batch_size (1..1000)
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {config_path}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping: {config_path}")

    api_section = data.get("api")
    if not isinstance(api_section, dict):
        raise ConfigError("Missing required section: api")
    base_url = api_section.get("base_url")
    if not base_url or not isinstance(base_url, str):
        raise ConfigError("Missing required key: api.base_url")

    timeout = api_section.setdefault("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("api.timeout_seconds must be a positive number")

    clone_section = data.get("clone") or {}
    data["clone"] = clone_section
    if not isinstance(clone_section, dict):
        raise ConfigError("clone must be a mapping")
    batch_size = clone_section.get("batch_size")
    if batch_size is not None and (
        isinstance(batch_size, bool) or not isinstance(batch_size, int) or not 1 <= batch_size <= 1000
    ):
        raise ConfigError("clone.batch_size must be an integer between 1 and 1000")

    return data
