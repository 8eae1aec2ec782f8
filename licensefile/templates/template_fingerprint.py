"""Template fingerprint insensitive to placeholder spelling."""

from __future__ import annotations

import hashlib
import json

from licensefile.templates.models import LiteralSegment
from licensefile.templates.tokenizer import scan_template


def compute_template_fingerprint(template: str) -> str:
    """Compute a canonical SHA256 fingerprint for a template.

    ``{{name}}``, ``{{&name}}`` and ``{{ name }}`` produce the same
    fingerprint because only literal text and token names are hashed.
    """

    scan = scan_template(template)
    payload = {
        "segments": [
            {"literal": segment.text}
            if isinstance(segment, LiteralSegment)
            else {"token": segment.name}
            for segment in scan.segments
        ],
        "unsupported": sorted({item.text for item in scan.unsupported}),
    }

    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()

