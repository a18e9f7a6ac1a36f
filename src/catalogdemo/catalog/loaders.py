from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from .models import CatalogObject, ListCatalogResponse


def load_json(path: Path) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"JSON file not found: {p}")
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON at {p}: {e}") from e


def load_catalog_snapshot(path: Path) -> List[CatalogObject]:
    """
    Load catalog objects saved from a list call.

    Accepts either the list response shape ({"objects": [...]}) or a bare list.
    """
    data = load_json(path)
    if isinstance(data, list):
        data = {"objects": data}
    if not isinstance(data, dict):
        raise ValueError(f"Catalog snapshot must be an object or a list: {path}")
    try:
        return ListCatalogResponse.model_validate(data).objects
    except Exception as e:
        raise ValueError(f"Invalid catalog snapshot at {path}: {e}") from e
