"""Request and result models for license generation and parsing."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr


class GenerateRequest(BaseModel):
    """Options accepted by ``LicenseGenerator.generate``."""

    model_config = ConfigDict(extra="forbid")

    data: str | dict[str, Any] | None = None
    private_key: str | bytes | None = None
    private_key_path: Path | None = None
    private_key_password: str | None = None
    template: str | None = None


class ParseRequest(BaseModel):
    """Options accepted by ``LicenseParser.parse``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    document: str | None = None
    document_path: Path | None = None
    public_key: str | bytes | None = None
    public_key_path: Path | None = None
    template: str | None = None
    extractor: Any = None


class ExtractedLicense(BaseModel):
    """Serial and data recovered from a document before verification."""

    model_config = ConfigDict(extra="ignore")

    serial: StrictStr
    data: StrictStr | dict[str, Any]


class ParsedLicense(BaseModel):
    """Parse outcome. ``valid`` is False when the signature does not verify."""

    model_config = ConfigDict(extra="forbid")

    valid: bool
    serial: str
    data: str | dict[str, Any]
