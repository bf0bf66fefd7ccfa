from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def parse_json_object(raw: str, *, source: str) -> dict[str, Any]:
    """
    Parse a JSON text that must hold an object.

    Raises ValueError (naming `source`) for empty text, invalid JSON, or a non-object payload.
    """
    if not raw.strip():
        raise ValueError(f"{source} is empty")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{source} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{source} must contain a JSON object, got {type(data).__name__}")
    return data


def read_json_object(path: Path) -> dict[str, Any]:
    """
    Read a JSON object from disk.

    Raises FileNotFoundError for missing files and ValueError for unreadable content.
    """
    if not path.is_file():
        raise FileNotFoundError(f"{path} does not exist")
    return parse_json_object(path.read_text(encoding="utf-8"), source=str(path))
