"""Custom exceptions for license generation and parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from licensefile.templates.models import TemplateScan


class LicenseFileError(Exception):
    """Base class for all license file errors."""


class LicenseInputError(LicenseFileError):
    """Raised when a required option is missing or has the wrong type."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ExtractionContractError(LicenseInputError):
    """Raised when a custom extractor returns a malformed result."""


class KeyLoadError(LicenseFileError):
    """Raised when key material cannot be read or parsed."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class TemplateError(LicenseFileError):
    """Raised when a template cannot be used for rendering or extraction."""

    def __init__(self, message: str, *, scan: TemplateScan | None = None) -> None:
        super().__init__(message)
        self.scan = scan


class DocumentCorruptedError(LicenseFileError):
    """Raised when a document does not match its template grammar."""


class TokenCountMismatchError(DocumentCorruptedError):
    """Raised when captured values disagree with the grammar token count."""

    def __init__(self, *, expected: int, actual: int) -> None:
        super().__init__(f"Token count mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
