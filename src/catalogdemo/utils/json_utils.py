from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from ..catalog.models import CatalogModel


def to_jsonable(obj: Any) -> Any:
    """Recursively turn catalog models into plain JSON-compatible data."""
    if isinstance(obj, CatalogModel):
        return obj.to_payload()
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


def write_json(path: Path, obj: Any) -> None:
    """
    Pretty-print JSON to a UTF-8 file, replacing it atomically via a temp
    file in the same directory.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, delete=False) as tmp:
        json.dump(to_jsonable(obj), tmp, ensure_ascii=False, indent=2)
        tmp.write("\n")
        tmp_path = Path(tmp.name)

    os.replace(tmp_path, path)
