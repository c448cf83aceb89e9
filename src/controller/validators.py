"""Validation functions for editor input."""

from __future__ import annotations

import json
from typing import Any

from controller.errors import BackupTargetError, DocumentValidationError

# Placeholder value of the backup target selector
NO_TARGET = "-"


def validate_key_name(value: str | None) -> str:
    """Validate a layout key name.

    Args:
        value: Key name as entered

    Returns:
        The stripped key name

    Raises:
        DocumentValidationError: The key name is missing or blank
    """
    stripped = (value or "").strip()
    if not stripped:
        raise DocumentValidationError("Key name is required!")
    return stripped


def validate_backup_target(value: str | None) -> str:
    """Validate the selected backup bucket.

    Raises:
        BackupTargetError: Nothing (or the placeholder) was selected
    """
    stripped = (value or "").strip()
    if not stripped or stripped == NO_TARGET:
        raise BackupTargetError("You must select a bucket.")
    return stripped


def parse_entry_json(text: str) -> dict[str, Any] | None:
    """Parse the JSON text of an entry dialog.

    Args:
        text: Text from the editor widget

    Returns:
        The parsed object, or None if the text is not a JSON object
    """
    try:
        value = json.loads(text or "{}")
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None
