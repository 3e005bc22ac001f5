"""Read definition files from disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .errors import DataLoadError, DataValidationError


def load_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}", path) from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file {path}: {exc}", path) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path} (line {exc.lineno}): {exc.msg}", path) from exc


def load_definition_table(path: Path) -> Dict[str, Any]:
    """Load a file whose top level maps definition ids to their payloads."""
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise DataValidationError(f"Expected an object of definitions keyed by id in {path}")
    for key in raw:
        if not key.strip():
            raise DataValidationError(f"Blank definition id in {path}")
    return raw
