"""Typer CLI entrypoint for license-file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import typer

from apps.cli.io import (
    dump_json,
    load_data_file,
    read_text_exact,
    write_json_atomic,
    write_text_atomic,
)
from licensefile.config.loader import load_config
from licensefile.license.generator import LicenseGenerator
from licensefile.license.parser import LicenseParser
from licensefile.templates.template_fingerprint import compute_template_fingerprint
from licensefile.templates.tokenizer import scan_template
from licensefile.utils.errors import (
    DocumentCorruptedError,
    KeyLoadError,
    LicenseInputError,
    TemplateError,
)

app = typer.Typer(help="License file CLI", rich_markup_mode=None)

EXIT_ERROR = 1
EXIT_INVALID_SIGNATURE = 2
EXIT_CORRUPTED = 3


@app.callback()
def cli_callback(
    verbose: Annotated[bool, typer.Option("--verbose", help="Emit JSON log events.")] = False,
) -> None:
    """Generate and verify signed license files."""

    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")


@app.command("generate")
def generate_command(
    private_key: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    data: Annotated[str | None, typer.Option(help="String to sign.")] = None,
    data_file: Annotated[
        Path | None,
        typer.Option(exists=True, dir_okay=False, file_okay=True, help="JSON object of fields."),
    ] = None,
    template: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
    config: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
    out: Annotated[Path | None, typer.Option(help="Write the document here.")] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite the output when it already exists.")
    ] = False,
) -> None:
    """Sign data and render a license document."""

    if (data is None) == (data_file is None):
        typer.echo("ERROR: exactly one of --data or --data-file is required.")
        raise typer.Exit(code=EXIT_ERROR)
    if out is not None and out.exists() and not force:
        typer.echo(f"ERROR: output already exists: {out} (use --force).")
        raise typer.Exit(code=EXIT_ERROR)

    try:
        license_config = load_config(config)
        options: dict[str, Any] = {
            "data": load_data_file(data_file) if data_file is not None else data,
            "private_key_path": private_key,
        }
        if template is not None:
            options["template"] = read_text_exact(template, license_config.encoding)
        document = LicenseGenerator(license_config).generate(**options)
    except (LicenseInputError, KeyLoadError, TemplateError, ValueError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc

    if out is None:
        typer.echo(document, nl=False)
        return

    try:
        write_text_atomic(out, document, license_config.encoding)
    except OSError as exc:
        typer.echo(f"ERROR: write output failed: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc
    typer.echo(f"INFO: wrote license to {out}")


@app.command("parse")
def parse_command(
    public_key: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    document: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    template: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
    config: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
    json_out: Annotated[Path | None, typer.Option(help="Also write the result JSON.")] = None,
) -> None:
    """Extract fields from a license document and verify its signature."""

    try:
        license_config = load_config(config)
        options: dict[str, Any] = {"document_path": document, "public_key_path": public_key}
        if template is not None:
            options["template"] = read_text_exact(template, license_config.encoding)
        result = LicenseParser(license_config).parse(**options)
    except DocumentCorruptedError as exc:
        typer.echo(f"ERROR: document corrupted: {exc}")
        raise typer.Exit(code=EXIT_CORRUPTED) from exc
    except (LicenseInputError, KeyLoadError, TemplateError, ValueError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc

    payload = result.model_dump(mode="json")
    typer.echo(dump_json(payload))
    if json_out is not None:
        try:
            write_json_atomic(json_out, payload)
        except OSError as exc:
            typer.echo(f"ERROR: write result failed: {exc}")
            raise typer.Exit(code=EXIT_ERROR) from exc

    if not result.valid:
        typer.echo("ERROR: signature is not valid")
        raise typer.Exit(code=EXIT_INVALID_SIGNATURE)


@app.command("inspect-template")
def inspect_template_command(
    template: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on unsupported placeholders.")
    ] = False,
    config: Annotated[
        Path | None, typer.Option(exists=True, dir_okay=False, file_okay=True)
    ] = None,
) -> None:
    """Show template fields, unsupported placeholders and fingerprint."""

    try:
        license_config = load_config(config)
        text = read_text_exact(template, license_config.encoding)
    except (ValueError, OSError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc

    scan = scan_template(text)
    payload = {
        "fields": scan.fields,
        "has_serial": license_config.serial_field in scan.fields,
        "duplicates": scan.duplicate_fields(),
        "unsupported": [
            {"kind": item.kind, "text": item.text, "start": item.start, "end": item.end}
            for item in scan.unsupported
        ],
        "fingerprint": compute_template_fingerprint(text),
    }
    typer.echo(dump_json(payload))

    if strict and scan.unsupported:
        typer.echo(f"ERROR: unsupported placeholders (count={len(scan.unsupported)})")
        raise typer.Exit(code=EXIT_CORRUPTED)


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
