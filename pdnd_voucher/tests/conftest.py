"""
Pytest configuration for pdnd_voucher. PDND_* variables from the shell are dropped so
settings only come from what each test passes in.
"""
import os

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import generate_private_key

from pdnd_voucher.config import VoucherSettings

for _name in [n for n in os.environ if n.startswith("PDND_")]:
    del os.environ[_name]


@pytest.fixture(scope="session")
def rsa_key():
    return generate_private_key(65537, 2048)


@pytest.fixture
def write_key(tmp_path):
    """Write text to a temp file and return its path as str."""

    def _write(content: str, name: str = "key.pem") -> str:
        p = tmp_path / name
        p.write_text(content)
        return str(p)

    return _write


@pytest.fixture
def pkcs8_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def voucher_settings(pkcs8_pem, write_key) -> VoucherSettings:
    """Settings pointing at a temp PKCS#8 key file for rsa_key."""
    return VoucherSettings(
        server_url="https://auth.example/token.oauth2",
        key_id="kid-test",
        client_id="client-test",
        audience="auth.example/client-assertion",
        key_path=write_key(pkcs8_pem),
        issuer="client-test",
        subject="client-test",
        purpose_id="purpose-test",
        duration_minutes=10,
    )
