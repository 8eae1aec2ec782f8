"""Configuration loading from YAML."""

from __future__ import annotations

import codecs
import os
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from licensefile.config.models import LicenseConfig

CONFIG_ENV_VAR = "LICENSEFILE_CONFIG"


def default_config_path() -> Path:
    raw = os.getenv(CONFIG_ENV_VAR, "").strip()
    if raw:
        return Path(raw)
    return Path(__file__).with_name("defaults.yaml")


def load_config(path: Path | None = None) -> LicenseConfig:
    """Load and validate license configuration from YAML."""

    config_path = path or default_config_path()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in config file: {config_path}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    normalized = _resolve_template_path(raw, config_path)

    try:
        config = LicenseConfig.model_validate(normalized)
    except ValidationError as exc:
        raise ValueError(f"Invalid config schema: {config_path}") from exc

    try:
        codecs.lookup(config.encoding)
    except LookupError as exc:
        raise ValueError(f"Unknown encoding '{config.encoding}' in {config_path}") from exc

    return config


def _resolve_template_path(raw: dict[object, object], config_path: Path) -> dict[object, object]:
    normalized = dict(raw)
    template_path = normalized.pop("default_template_path", None)
    if template_path is None:
        return normalized

    if "default_template" in normalized:
        raise ValueError(
            f"Use either default_template or default_template_path in {config_path}, not both"
        )
    if not isinstance(template_path, str):
        raise ValueError(f"default_template_path must be a string: {config_path}")

    resolved = (config_path.parent / template_path).resolve()
    encoding = normalized.get("encoding", "utf-8")
    try:
        normalized["default_template"] = resolved.read_bytes().decode(str(encoding))
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        raise ValueError(f"Cannot read default template: {resolved}") from exc
    return normalized
