"""
OAuth2 service for PDND vouchers: generate the client assertion and exchange it at the
token endpoint (grant_type=client_credentials, jwt-bearer client assertion).
"""
import logging
from dataclasses import dataclass

import httpx

from pdnd_voucher.assertion import build_assertion_claims, sign_client_assertion
from pdnd_voucher.config import CLIENT_ASSERTION_TYPE, GRANT_TYPE, VoucherSettings
from pdnd_voucher.errors import TokenRequestError
from pdnd_voucher.keys import load_rsa_private_key

logger = logging.getLogger(__name__)


@dataclass
class TokenResponse:
    access_token: str
    token_type: str
    expires_in: int

    @classmethod
    def from_json(cls, data: dict) -> "TokenResponse":
        access_token = data.get("access_token")
        if not access_token:
            raise TokenRequestError("Token response has no access_token", status_code=200)
        try:
            expires_in = int(data.get("expires_in") or 0)
        except (TypeError, ValueError):
            raise TokenRequestError("Token response has an invalid expires_in", status_code=200) from None
        return cls(
            access_token=access_token,
            token_type=data.get("token_type") or "Bearer",
            expires_in=expires_in,
        )

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
        }


def _error_details(r: httpx.Response) -> tuple[str | None, str]:
    """(error, description) from an OAuth2 error body; falls back to the raw text."""
    err = {}
    if r.headers.get("content-type", "").startswith("application/json"):
        try:
            err = r.json()
        except ValueError:
            err = {}
    if not isinstance(err, dict):
        err = {}
    error = err.get("error")
    description = err.get("error_description") or error or (r.text or "").strip()[:200] or "Token request failed"
    return error, description


class OAuth2Service:
    def __init__(self, settings: VoucherSettings):
        self.settings = settings

    def generate_client_assertion(self) -> str:
        """Load the signing key, sign a fresh assertion, and drop the key."""
        s = self.settings
        private_key = load_rsa_private_key(s.key_path, s.key_password)
        claims = build_assertion_claims(s)
        assertion = sign_client_assertion(claims, private_key, key_id=s.key_id, algorithm=s.algorithm, typ=s.typ)
        logger.info("Client assertion generated for client_id=%s kid=%s jti=%s", s.client_id, s.key_id, claims["jti"])
        return assertion

    def request_access_token(self, client_assertion: str) -> TokenResponse:
        """POST the assertion to the token endpoint. Raises TokenRequestError on failure."""
        if not client_assertion or not client_assertion.strip():
            raise ValueError("client_assertion is required")
        s = self.settings
        try:
            r = httpx.post(
                s.server_url,
                data={
                    "client_id": s.client_id,
                    "client_assertion": client_assertion,
                    "client_assertion_type": CLIENT_ASSERTION_TYPE,
                    "grant_type": GRANT_TYPE,
                },
                headers={"Accept": "application/json"},
                timeout=s.http_timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("Token request to %s failed: %s", s.server_url, e)
            raise TokenRequestError(f"Token request failed: {e}") from e

        if r.status_code != 200:
            error, description = _error_details(r)
            logger.warning(
                "Token endpoint returned %s for client_id=%s: %s", r.status_code, s.client_id, error or description
            )
            raise TokenRequestError(description, status_code=r.status_code, error=error)

        try:
            data = r.json()
        except ValueError as e:
            raise TokenRequestError("Token response is not valid JSON", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise TokenRequestError("Token response is not a JSON object", status_code=r.status_code)
        token = TokenResponse.from_json(data)
        logger.info("Voucher issued for client_id=%s (expires_in=%s)", s.client_id, token.expires_in)
        return token
