"""Single-pass token substitution for text templates."""

from __future__ import annotations

from collections.abc import Mapping

from licensefile.templates.models import LiteralSegment
from licensefile.templates.tokenizer import scan_template


def render_template(template: str, fields: Mapping[str, str]) -> str:
    """Replace every known placeholder with its field value.

    Substituted values are not scanned again. Placeholders without a
    matching field are emitted unchanged.
    """

    chunks: list[str] = []
    for segment in scan_template(template).segments:
        if isinstance(segment, LiteralSegment):
            chunks.append(segment.text)
        elif segment.name in fields:
            chunks.append(fields[segment.name])
        else:
            chunks.append(segment.raw)
    return "".join(chunks)

