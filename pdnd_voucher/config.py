"""
Voucher client configuration. Values from environment (PDND_*); no secrets in this file.
load_settings() binds and validates them into a VoucherSettings object.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping

from pdnd_voucher.errors import ConfigurationError
from pdnd_voucher.sensitive import SecretBuffer

# RSA only; the signing key is always an RSA private key
SUPPORTED_ALGORITHMS = {"RS256", "RS384", "RS512"}

DEFAULT_ALGORITHM = "RS256"
DEFAULT_TYPE = "JWT"

# Client assertion lifetime in minutes (PDND accepts long-lived assertions; 30 days)
DEFAULT_DURATION_MINUTES = 43200

# Timeout (seconds) for the token endpoint call
DEFAULT_HTTP_TIMEOUT = 10.0

CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
GRANT_TYPE = "client_credentials"

_REQUIRED = {
    "server_url": "PDND_SERVER_URL",
    "key_id": "PDND_KEY_ID",
    "client_id": "PDND_CLIENT_ID",
    "audience": "PDND_AUDIENCE",
    "key_path": "PDND_KEY_PATH",
}


@dataclass(frozen=True)
class VoucherSettings:
    server_url: str
    key_id: str
    client_id: str
    audience: str
    key_path: str
    issuer: str
    subject: str
    algorithm: str = DEFAULT_ALGORITHM
    typ: str = DEFAULT_TYPE
    purpose_id: str | None = None
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    key_password: SecretBuffer | None = field(default=None, repr=False, compare=False)


def _get(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(name, "").strip()
    return value or None


def _positive_number(env: Mapping[str, str], name: str, default, cast):
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> VoucherSettings:
    """
    Build VoucherSettings from environment variables (os.environ by default).
    Issuer and subject default to the client id. Raises ConfigurationError on
    missing required variables, unsupported algorithm, or bad numbers.
    """
    env = os.environ if environ is None else environ

    values = {attr: _get(env, var) for attr, var in _REQUIRED.items()}
    missing = [var for attr, var in _REQUIRED.items() if values[attr] is None]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    algorithm = (_get(env, "PDND_ALGORITHM") or DEFAULT_ALGORITHM).upper()
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ConfigurationError(
            f"PDND_ALGORITHM must be one of {', '.join(sorted(SUPPORTED_ALGORITHMS))}, got {algorithm!r}"
        )

    # Password is not stripped: surrounding spaces may be part of it
    raw_password = env.get("PDND_KEY_PASSWORD")
    key_password = SecretBuffer(raw_password) if raw_password else None

    return VoucherSettings(
        server_url=values["server_url"],
        key_id=values["key_id"],
        client_id=values["client_id"],
        audience=values["audience"],
        key_path=values["key_path"],
        issuer=_get(env, "PDND_ISSUER") or values["client_id"],
        subject=_get(env, "PDND_SUBJECT") or values["client_id"],
        algorithm=algorithm,
        typ=_get(env, "PDND_TYPE") or DEFAULT_TYPE,
        purpose_id=_get(env, "PDND_PURPOSE_ID"),
        duration_minutes=_positive_number(env, "PDND_DURATION_MINUTES", DEFAULT_DURATION_MINUTES, int),
        http_timeout=_positive_number(env, "PDND_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
        key_password=key_password,
    )
