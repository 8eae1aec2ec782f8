from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from licensefile.config.loader import CONFIG_ENV_VAR, load_config
from licensefile.config.models import LicenseConfig


@dataclass(frozen=True)
class KeyPair:
    private_pem: bytes
    public_pem: bytes


def _pem_pair(private_key) -> KeyPair:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return KeyPair(private_pem=private_pem, public_pem=public_pem)


@pytest.fixture(scope="session")
def rsa_keys() -> KeyPair:
    return _pem_pair(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def other_rsa_keys() -> KeyPair:
    return _pem_pair(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def ed25519_keys() -> KeyPair:
    return _pem_pair(ed25519.Ed25519PrivateKey.generate())


@pytest.fixture()
def key_files(tmp_path: Path, rsa_keys: KeyPair) -> tuple[Path, Path]:
    private_path = tmp_path / "key.pem"
    public_path = tmp_path / "key.pub"
    private_path.write_bytes(rsa_keys.private_pem)
    public_path.write_bytes(rsa_keys.public_pem)
    return private_path, public_path


@pytest.fixture(autouse=True)
def _default_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture()
def config() -> LicenseConfig:
    return load_config()


@pytest.fixture()
def custom_template() -> str:
    return "\n".join(
        [
            "====BEGIN LICENSE====",
            "{{&licenseVersion}}",
            "{{&email}}",
            "{{&serial}}",
            "=====END LICENSE=====",
        ]
    )
