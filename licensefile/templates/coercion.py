"""Canonical text coercion for license field values."""

from __future__ import annotations

from collections.abc import Mapping


def coerce_value(value: object) -> str:
    """Return the canonical text form of one field value."""

    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def coerce_fields(fields: Mapping[str, object]) -> dict[str, str]:
    """Coerce every value of ``fields`` keeping key order."""

    return {name: coerce_value(value) for name, value in fields.items()}
