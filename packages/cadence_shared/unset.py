"""Sentinel distinguishing an omitted update field from an explicit ``None``."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

UNSET: Any = object()


def assigned_values(update: Any) -> dict[str, Any]:
    """Return the fields of a dataclass update input that are not ``UNSET``."""
    values: dict[str, Any] = {}
    for item in fields(update):
        value = getattr(update, item.name)
        if value is not UNSET:
            values[item.name] = value
    return values
