"""
JSON document I/O shared by the config store and the host integrations.

The host settings file (~/.claude/settings.json) is owned by Claude Code.
We read and rewrite it as a whole document, touching only our keys, and we
refuse to rewrite a file we could not parse.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gamify.core.exceptions import ExternalDocumentError

logger = logging.getLogger(__name__)


def read_json_document(path: Path) -> dict[str, Any]:
    """
    Read a host-owned JSON object.

    Args:
        path: Document path

    Returns:
        Parsed object, or an empty dict if the file does not exist

    Raises:
        ExternalDocumentError: If the file exists but is unreadable, is not
            valid JSON, or is not a JSON object
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ExternalDocumentError(path, f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ExternalDocumentError(path, f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ExternalDocumentError(path, f"Expected a JSON object in {path}")
    return data


def write_json_document(path: Path, data: dict[str, Any]) -> None:
    """
    Replace a JSON document with `data`.

    Raises:
        ExternalDocumentError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ExternalDocumentError(path, f"Failed to write {path}: {e}") from e
    logger.debug("Wrote %s", path)
