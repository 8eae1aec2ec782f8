"""Key material loading for signing and verification."""

from __future__ import annotations

from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from licensefile.utils.errors import KeyLoadError, LicenseInputError

PrivateKey = RSAPrivateKey | Ed25519PrivateKey
PublicKey = RSAPublicKey | Ed25519PublicKey


def check_key_options(content: str | bytes | None, path: Path | str | None, *, field: str) -> None:
    """Ensure exactly one of inline key content or a key path is supplied."""

    if content is not None and path is not None:
        raise LicenseInputError(f"Specify either {field} or {field}_path, not both", field=field)
    if content is None and path is None:
        raise LicenseInputError(f"No {field} is specified", field=field)
    if content is not None and not content.strip():
        raise LicenseInputError(f"{field} is empty", field=field)


def read_key_content(
    content: str | bytes | None,
    path: Path | str | None,
    *,
    field: str,
) -> tuple[bytes, str]:
    """Return raw key bytes plus a description of where they came from.

    The description is safe for error messages and logs; it never contains
    key material.
    """

    check_key_options(content, path, field=field)

    if content is not None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return content, f"inline {field}"

    key_path = Path(path)  # type: ignore[arg-type]
    try:
        return key_path.read_bytes(), str(key_path)
    except OSError as exc:
        raise KeyLoadError(f"Cannot read key file: {key_path}", source=str(key_path)) from exc


def load_private_key(
    content: bytes,
    *,
    password: str | bytes | None = None,
    source: str = "",
) -> PrivateKey:
    """Parse a PEM private key."""

    if isinstance(password, str):
        password = password.encode("utf-8")

    try:
        key = serialization.load_pem_private_key(content, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyLoadError(f"Invalid private key: {source}", source=source) from exc

    if not isinstance(key, (RSAPrivateKey, Ed25519PrivateKey)):
        raise KeyLoadError(f"Unsupported key type: {type(key).__name__}", source=source)
    return key


def load_public_key(content: bytes, *, source: str = "") -> PublicKey:
    """Parse a PEM public key, or derive it from a PEM private key."""

    try:
        if b"PRIVATE KEY" in content:
            key = serialization.load_pem_private_key(content, password=None).public_key()
        else:
            key = serialization.load_pem_public_key(content)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyLoadError(f"Invalid public key: {source}", source=source) from exc

    if not isinstance(key, (RSAPublicKey, Ed25519PublicKey)):
        raise KeyLoadError(f"Unsupported key type: {type(key).__name__}", source=source)
    return key
