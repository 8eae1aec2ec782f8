"""Canonical signing payload shared by generation and parsing."""

from __future__ import annotations

import json
from collections.abc import Mapping

from licensefile.templates.coercion import coerce_fields

DEFAULT_RAW_FIELD = "string"
DEFAULT_SERIAL_FIELD = "serial"


def canonical_payload(
    data: str | Mapping[str, object],
    *,
    raw_field: str = DEFAULT_RAW_FIELD,
    serial_field: str = DEFAULT_SERIAL_FIELD,
) -> bytes:
    """Return the exact bytes that are signed and later verified.

    A plain string, or a mapping holding only ``raw_field``, is signed as its
    UTF-8 bytes. Any other mapping is coerced and serialized as compact JSON
    in key order, without ``serial_field``.
    """

    if isinstance(data, str):
        return data.encode("utf-8")

    coerced = coerce_fields({name: value for name, value in data.items() if name != serial_field})
    if list(coerced) == [raw_field]:
        return coerced[raw_field].encode("utf-8")

    return json.dumps(coerced, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def is_raw_payload(fields: Mapping[str, object], *, raw_field: str = DEFAULT_RAW_FIELD) -> bool:
    """Return True when ``fields`` is signed in raw string mode."""

    return list(fields) == [raw_field]
