"""
Client assertion JWT (RFC 7523 client authentication) signed with the client's RSA key.
Claims: iss, sub, aud, purposeId (optional), jti, iat, exp. Header: kid, alg, typ.
"""
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from pdnd_voucher.config import VoucherSettings


def build_assertion_claims(
    settings: VoucherSettings,
    now: datetime | None = None,
    jti: str | None = None,
) -> dict:
    """Claims for one assertion; exp is iat + settings.duration_minutes."""
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.duration_minutes)
    claims = {
        "iss": settings.issuer,
        "sub": settings.subject,
        "aud": settings.audience,
        "jti": jti or str(uuid.uuid4()),
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    if settings.purpose_id:
        claims["purposeId"] = settings.purpose_id
    return claims


def sign_client_assertion(
    claims: dict,
    private_key,
    *,
    key_id: str,
    algorithm: str = "RS256",
    typ: str = "JWT",
) -> str:
    token = jwt.encode(
        claims,
        private_key,
        algorithm=algorithm,
        headers={"kid": key_id, "typ": typ},
    )
    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return token
