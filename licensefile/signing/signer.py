"""Signature primitives over canonical payload bytes.

RSA keys sign with PKCS#1 v1.5 and SHA-256; Ed25519 keys sign the payload
directly. Serials are standard base64 text.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from licensefile.signing.keys import PrivateKey, PublicKey


class Signer:
    """Compute serials with a private key."""

    def __init__(self, private_key: PrivateKey) -> None:
        self._private_key = private_key

    def sign(self, payload: bytes) -> str:
        if isinstance(self._private_key, RSAPrivateKey):
            signature = self._private_key.sign(payload, padding.PKCS1v15(), hashes.SHA256())
        else:
            signature = self._private_key.sign(payload)
        return base64.b64encode(signature).decode("ascii")


class Verifier:
    """Check serials with a public key."""

    def __init__(self, public_key: PublicKey) -> None:
        self._public_key = public_key

    def verify(self, payload: bytes, serial: str) -> bool:
        """Return True only when ``serial`` is a valid signature of ``payload``."""

        try:
            signature = base64.b64decode(serial.encode("ascii"), validate=True)
        except (binascii.Error, ValueError):
            return False
        if not signature:
            return False

        try:
            if isinstance(self._public_key, RSAPublicKey):
                self._public_key.verify(signature, payload, padding.PKCS1v15(), hashes.SHA256())
            else:
                self._public_key.verify(signature, payload)
        except (InvalidSignature, ValueError):
            return False
        return True
