"""License parsing: extract, rebuild payload, verify."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from licensefile.config.loader import load_config
from licensefile.config.models import LicenseConfig
from licensefile.license.extractors import (
    ExtractionResult,
    Extractor,
    FunctionExtractor,
    TemplateExtractor,
)
from licensefile.license.models import ExtractedLicense, ParsedLicense, ParseRequest
from licensefile.signing.keys import check_key_options, load_public_key, read_key_content
from licensefile.signing.payload import canonical_payload
from licensefile.signing.signer import Verifier
from licensefile.utils.errors import (
    DocumentCorruptedError,
    ExtractionContractError,
    LicenseFileError,
    LicenseInputError,
)
from licensefile.utils.log_events import log_event

logger = logging.getLogger("licensefile.license")


class LicenseParser:
    """Recover and verify license documents."""

    def __init__(self, config: LicenseConfig) -> None:
        self._config = config

    def parse(self, **options: Any) -> ParsedLicense:
        """Extract fields from a document and verify its serial.

        Keyword Args:
            document: Document text.
            document_path: Path to a document file.
            public_key: Inline PEM public key.
            public_key_path: Path to a PEM public key.
            template: Template used at generation time; the configured
                default otherwise. Ignored when ``extractor`` is given.
            extractor: An ``Extractor`` or a callable ``document -> {serial, data}``.

        A signature that does not verify is reported as ``valid=False``.

        Raises:
            LicenseInputError: when key or document options are missing.
            ExtractionContractError: when a custom extractor fails or returns a
                malformed result.
            DocumentCorruptedError: when the document does not match the template.
            TemplateError: when the template cannot be compiled for extraction.
            KeyLoadError: when the key cannot be read or parsed.
        """

        request = _validate_request(options)

        check_key_options(request.public_key, request.public_key_path, field="public_key")
        if request.document is not None and request.document_path is not None:
            raise LicenseInputError(
                "Specify either document or document_path, not both", field="document"
            )
        if request.document is None and request.document_path is None:
            raise LicenseInputError("No document is specified", field="document")

        key_content, source = read_key_content(
            request.public_key, request.public_key_path, field="public_key"
        )
        public_key = load_public_key(key_content, source=source)
        document = self._read_document(request)

        extractor = self._resolve_extractor(request)
        strategy = getattr(extractor, "name", type(extractor).__name__)

        log_event(logger, logging.INFO, "parse_start", strategy=strategy)

        try:
            raw_result = extractor.extract(document)
        except DocumentCorruptedError as exc:
            log_event(
                logger,
                logging.WARNING,
                "parse_corrupted",
                strategy=strategy,
                error_type=type(exc).__name__,
            )
            raise
        except LicenseFileError:
            raise
        except Exception as exc:
            raise ExtractionContractError(
                f"Extractor failed: {type(exc).__name__}: {exc}", field="extractor"
            ) from exc

        extracted = _validate_extracted(raw_result)
        payload = canonical_payload(
            extracted.data,
            raw_field=self._config.raw_field,
            serial_field=self._config.serial_field,
        )
        valid = Verifier(public_key).verify(payload, extracted.serial)

        log_event(
            logger,
            logging.INFO,
            "parse_done",
            strategy=strategy,
            valid=valid,
            field_count=1 if isinstance(extracted.data, str) else len(extracted.data),
        )
        return ParsedLicense(valid=valid, serial=extracted.serial, data=extracted.data)

    def _resolve_extractor(self, request: ParseRequest) -> Extractor:
        if request.extractor is None:
            template = (
                request.template
                if request.template is not None
                else self._config.default_template
            )
            return TemplateExtractor(
                template,
                serial_field=self._config.serial_field,
                raw_field=self._config.raw_field,
            )
        if isinstance(request.extractor, Extractor):
            return request.extractor
        if callable(request.extractor):
            return FunctionExtractor(request.extractor)
        raise LicenseInputError(
            "extractor must implement extract(document) or be callable", field="extractor"
        )

    def _read_document(self, request: ParseRequest) -> str:
        if request.document is not None:
            return request.document

        path = Path(request.document_path)  # type: ignore[arg-type]
        try:
            return path.read_bytes().decode(self._config.encoding)
        except OSError as exc:
            raise LicenseInputError(f"Cannot read document: {path}", field="document") from exc
        except UnicodeDecodeError as exc:
            raise DocumentCorruptedError(f"Document is not valid {self._config.encoding}") from exc


def parse(config: LicenseConfig | None = None, **options: Any) -> ParsedLicense:
    """Parse a license document with ``config`` or the loaded default configuration."""

    return LicenseParser(config or load_config()).parse(**options)


def _validate_request(options: dict[str, Any]) -> ParseRequest:
    try:
        return ParseRequest.model_validate(options)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        raise LicenseInputError(
            f"Invalid parse options: {field}: {error['msg']}", field=field
        ) from exc


def _validate_extracted(result: ExtractionResult) -> ExtractedLicense:
    if isinstance(result, ExtractedLicense):
        return result
    if not isinstance(result, Mapping):
        raise ExtractionContractError(
            f"Extractor must return serial and data, got {type(result).__name__}",
            field="extractor",
        )
    try:
        return ExtractedLicense.model_validate(dict(result))
    except ValidationError as exc:
        raise ExtractionContractError(
            "Extractor result must contain a string serial and string or mapping data",
            field="extractor",
        ) from exc
