"""Template tokenizer splitting text into literal runs and placeholders.

Supported placeholder forms are ``{{name}}``, ``{{&name}}`` and
``{{{name}}}``; all of them substitute the value verbatim. Other
``{{...}}`` fragments stay literal and are reported as unsupported.
"""

from __future__ import annotations

import re

from licensefile.templates.models import (
    LiteralSegment,
    Segment,
    TemplateScan,
    TokenSegment,
    UnsupportedPlaceholder,
)
from licensefile.utils.errors import TemplateError

_PLACEHOLDER_RE = re.compile(
    r"\{\{\{\s*(?P<triple>[A-Za-z0-9_]+)\s*\}\}\}"
    r"|\{\{\s*&?\s*(?P<name>[A-Za-z0-9_]+)\s*\}\}"
)
_BRACED_RE = re.compile(r"\{\{[^{}]*\}\}")
_DELIMITER_RE = re.compile(r"\{\{|\}\}")


def scan_template(template: str, strict: bool = False) -> TemplateScan:
    """Split a template into segments and collect placeholder metadata.

    Args:
        template: Template text.
        strict: When True, raise TemplateError if any unsupported item exists.

    Returns:
        TemplateScan with ordered segments, distinct field names in order of
        first appearance, every token occurrence and unsupported fragments.
    """

    result = TemplateScan()
    seen_fields: set[str] = set()
    cursor = 0

    for match in _PLACEHOLDER_RE.finditer(template):
        if match.start() > cursor:
            _append_literal(result, template[cursor : match.start()], cursor)

        name = match.group("triple") or match.group("name")
        token = TokenSegment(name=name, raw=match.group(0), start=match.start(), end=match.end())
        result.segments.append(token)
        result.occurrences.append(token)
        if name not in seen_fields:
            result.fields.append(name)
            seen_fields.add(name)
        cursor = match.end()

    if cursor < len(template):
        _append_literal(result, template[cursor:], cursor)

    result.unsupported.sort(key=lambda item: item.start)

    if strict and result.unsupported:
        raise TemplateError("Unsupported placeholders found in template", scan=result)

    return result


def _append_literal(result: TemplateScan, text: str, offset: int) -> None:
    result.segments.append(LiteralSegment(text=text))

    if "{{" not in text and "}}" not in text:
        return

    masked = text
    for match in _BRACED_RE.finditer(text):
        result.unsupported.append(
            UnsupportedPlaceholder(
                kind="invalid_format",
                text=match.group(0),
                start=offset + match.start(),
                end=offset + match.end(),
            )
        )
        masked = masked[: match.start()] + " " * len(match.group(0)) + masked[match.end() :]

    for match in _DELIMITER_RE.finditer(masked):
        kind = "unclosed_open" if match.group(0) == "{{" else "stray_close"
        result.unsupported.append(
            UnsupportedPlaceholder(
                kind=kind,
                text=match.group(0),
                start=offset + match.start(),
                end=offset + match.end(),
            )
        )

