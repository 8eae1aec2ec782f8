"""Process-wide license configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

_FIELD_NAME_PATTERN = r"^[A-Za-z0-9_]+$"


class LicenseConfig(BaseModel):
    """Immutable settings shared by generator and parser."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_template: str
    serial_field: str = Field(default="serial", pattern=_FIELD_NAME_PATTERN)
    raw_field: str = Field(default="string", pattern=_FIELD_NAME_PATTERN)
    encoding: str = "utf-8"
