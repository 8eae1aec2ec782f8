"""CLI I/O helpers for atomic output writing."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any


def write_text_atomic(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write ``text`` byte-exactly via a temporary file + replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write(path, text.encode(encoding))


def write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write a JSON report atomically."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write(path, dump_json(payload).encode("utf-8"))


def read_text_exact(path: Path, encoding: str = "utf-8") -> str:
    """Read a text file without newline translation."""

    return path.read_bytes().decode(encoding)


def load_data_file(path: Path) -> dict[str, Any]:
    """Load license field data from a JSON object file."""

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid data JSON: {path}") from exc
    if not isinstance(raw, dict):
        raise ValueError("Data JSON must be an object")
    return raw


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _atomic_write(path: Path, content: bytes) -> None:
    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        tmp.write(content)

    try:
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
