"""License generation: coerce, sign, render."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from licensefile.config.loader import load_config
from licensefile.config.models import LicenseConfig
from licensefile.license.models import GenerateRequest
from licensefile.signing.keys import check_key_options, load_private_key, read_key_content
from licensefile.signing.payload import canonical_payload
from licensefile.signing.signer import Signer
from licensefile.templates.coercion import coerce_fields
from licensefile.templates.renderer import render_template
from licensefile.templates.tokenizer import scan_template
from licensefile.utils.errors import LicenseInputError, TemplateError
from licensefile.utils.log_events import log_event

logger = logging.getLogger("licensefile.license")


class LicenseGenerator:
    """Produce signed license documents from field data."""

    def __init__(self, config: LicenseConfig) -> None:
        self._config = config

    def generate(self, **options: Any) -> str:
        """Render a signed license document.

        Keyword Args:
            data: String to sign, or a mapping of field name to value.
            private_key: Inline PEM private key.
            private_key_path: Path to a PEM private key.
            private_key_password: Optional password for an encrypted key.
            template: Template text; the configured default otherwise.

        Raises:
            LicenseInputError: when data or key options are missing or mistyped.
            TemplateError: when the template has no serial placeholder.
            KeyLoadError: when the key cannot be read or parsed.
        """

        request = _validate_request(options)
        serial_field = self._config.serial_field

        if not request.data:
            raise LicenseInputError("Invalid data to be signed", field="data")
        check_key_options(request.private_key, request.private_key_path, field="private_key")

        if isinstance(request.data, str):
            fields: dict[str, Any] = {self._config.raw_field: request.data}
        else:
            fields = dict(request.data)
        if serial_field in fields:
            raise LicenseInputError(f"'{serial_field}' is reserved and computed", field="data")

        template = (
            request.template if request.template is not None else self._config.default_template
        )
        scan = scan_template(template)
        if serial_field not in scan.fields:
            raise TemplateError(f"Template has no {serial_field} placeholder", scan=scan)
        if scan.unsupported:
            log_event(
                logger,
                logging.WARNING,
                "unsupported_placeholders",
                count=len(scan.unsupported),
                kinds=sorted({item.kind for item in scan.unsupported}),
            )

        log_event(
            logger,
            logging.INFO,
            "generate_start",
            field_count=len(fields),
            default_template=request.template is None,
        )

        coerced = coerce_fields(fields)
        signed_fields = {name: coerced[name] for name in scan.fields if name in coerced}

        extra = [name for name in coerced if name not in signed_fields]
        if extra:
            log_event(logger, logging.WARNING, "fields_not_in_template", fields=extra)
        missing = [name for name in scan.fields if name != serial_field and name not in coerced]
        if missing:
            log_event(logger, logging.WARNING, "missing_fields", fields=missing)

        key_content, source = read_key_content(
            request.private_key, request.private_key_path, field="private_key"
        )
        private_key = load_private_key(
            key_content, password=request.private_key_password, source=source
        )

        payload = canonical_payload(
            signed_fields, raw_field=self._config.raw_field, serial_field=serial_field
        )
        serial = Signer(private_key).sign(payload)
        document = render_template(template, {**signed_fields, serial_field: serial})

        log_event(
            logger,
            logging.INFO,
            "generate_done",
            field_count=len(signed_fields),
            document_length=len(document),
        )
        return document


def generate(config: LicenseConfig | None = None, **options: Any) -> str:
    """Generate a license document with ``config`` or the loaded default configuration."""

    return LicenseGenerator(config or load_config()).generate(**options)


def _validate_request(options: dict[str, Any]) -> GenerateRequest:
    try:
        return GenerateRequest.model_validate(options)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        raise LicenseInputError(
            f"Invalid generate options: {field}: {error['msg']}", field=field
        ) from exc
