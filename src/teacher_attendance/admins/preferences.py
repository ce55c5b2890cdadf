from __future__ import annotations

from typing import Any, Mapping

from ..core.constants import DEFAULT_ADMIN_PREFERENCES
from ..core.exceptions import ValidationError

_BOOL_KEYS = {"autoRefresh", "darkMode", "notifications"}


def with_defaults(stored: Mapping[str, Any]) -> dict:
    prefs = dict(DEFAULT_ADMIN_PREFERENCES)
    prefs.update({k: v for k, v in stored.items() if k in DEFAULT_ADMIN_PREFERENCES})
    return prefs


def merge_preferences(current: Mapping[str, Any], changes: Mapping[str, Any]) -> dict:
    """Apply a partial update; reject unknown keys and wrong types."""

    merged = with_defaults(current)
    for key, value in changes.items():
        if key not in DEFAULT_ADMIN_PREFERENCES:
            raise ValidationError(f"Unknown preference: {key}")

        if key in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ValidationError(f"{key} must be true or false")
        elif isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{key} must be an integer")
        elif key == "refreshInterval" and value < 1:
            raise ValidationError("refreshInterval must be at least 1 second")
        elif key == "sessionTimeout" and value != -1 and value < 1:
            raise ValidationError("sessionTimeout must be a positive number of minutes or -1")

        merged[key] = value
    return merged
