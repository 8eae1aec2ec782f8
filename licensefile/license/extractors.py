"""Extraction strategies recovering serial and data from a document."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from licensefile.license.models import ExtractedLicense
from licensefile.signing.payload import is_raw_payload
from licensefile.templates.grammar import compile_grammar
from licensefile.utils.errors import (
    DocumentCorruptedError,
    TemplateError,
    TokenCountMismatchError,
)

ExtractionResult = ExtractedLicense | Mapping[str, Any]


@runtime_checkable
class Extractor(Protocol):
    """Protocol for document extraction strategies."""

    def extract(self, document: str) -> ExtractionResult:
        """Return ``{serial, data}`` recovered from ``document``."""


class TemplateExtractor:
    """Recover fields by matching a document against a compiled template."""

    name = "template"

    def __init__(self, template: str, *, serial_field: str, raw_field: str) -> None:
        self._grammar = compile_grammar(template)
        if serial_field not in self._grammar.token_names:
            raise TemplateError(f"Template has no {serial_field} placeholder")
        self._serial_field = serial_field
        self._raw_field = raw_field

    @property
    def token_names(self) -> tuple[str, ...]:
        return self._grammar.token_names

    def extract(self, document: str) -> ExtractedLicense:
        values = self._grammar.match(document)
        if values is None:
            raise DocumentCorruptedError("License document is corrupted: template does not match")
        if len(values) != len(self._grammar.token_names):
            raise TokenCountMismatchError(
                expected=len(self._grammar.token_names), actual=len(values)
            )

        fields = dict(zip(self._grammar.token_names, values))
        serial = fields.pop(self._serial_field)
        if is_raw_payload(fields, raw_field=self._raw_field):
            return ExtractedLicense(serial=serial, data=fields[self._raw_field])
        return ExtractedLicense(serial=serial, data=fields)


class FunctionExtractor:
    """Adapt a plain callable to the extractor protocol."""

    name = "function"

    def __init__(self, func: Callable[[str], ExtractionResult]) -> None:
        self._func = func

    def extract(self, document: str) -> ExtractionResult:
        return self._func(document)
