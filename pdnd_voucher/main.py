"""
Voucher service: HTTP front for the PDND client assertion + token exchange.
POST /assertion, POST /token, GET /voucher (cached), GET /jwk. Port 8100.
"""
import logging

from fastapi import Depends, FastAPI, HTTPException

from pdnd_voucher.config import CLIENT_ASSERTION_TYPE, VoucherSettings, load_settings
from pdnd_voucher.errors import ConfigurationError, KeyLoadError, TokenRequestError
from pdnd_voucher.generator import ClientAssertionGenerator
from pdnd_voucher.keys import load_rsa_private_key, public_key_to_jwk
from pdnd_voucher.oauth2 import OAuth2Service, TokenResponse
from pdnd_voucher.token_store import get_or_fetch_voucher, store_voucher

logger = logging.getLogger(__name__)

app = FastAPI(title="PDND Voucher", version="0.1.0")

# Settings are bound once from env on first request
_settings: VoucherSettings | None = None


def _server_error(description: str) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail={"error": "server_error", "error_description": description},
    )


def get_settings() -> VoucherSettings:
    global _settings
    if _settings is None:
        try:
            _settings = load_settings()
        except ConfigurationError as e:
            logger.error("Invalid configuration: %s", e)
            raise _server_error(str(e))
    return _settings


def get_generator(settings: VoucherSettings = Depends(get_settings)) -> ClientAssertionGenerator:
    return ClientAssertionGenerator(OAuth2Service(settings))


def _client_assertion(generator: ClientAssertionGenerator) -> str:
    try:
        return generator.get_client_assertion()
    except KeyLoadError as e:
        logger.error("Signing key could not be loaded (%s): %s", type(e).__name__, e)
        raise _server_error(str(e))


def _fetch_token(generator: ClientAssertionGenerator) -> TokenResponse:
    client_assertion = _client_assertion(generator)
    try:
        token = generator.get_token(client_assertion)
    except TokenRequestError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "error": "token_request_failed",
                "error_description": str(e),
                "upstream_status": e.status_code,
            },
        )
    return token


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "pdnd_voucher"}


@app.post("/assertion")
def assertion(generator: ClientAssertionGenerator = Depends(get_generator)):
    """Signed client assertion, for callers that run the token exchange themselves."""
    return {
        "client_assertion": _client_assertion(generator),
        "client_assertion_type": CLIENT_ASSERTION_TYPE,
    }


@app.post("/token")
def token(generator: ClientAssertionGenerator = Depends(get_generator)):
    """Always obtains a new voucher (and replaces the cached one)."""
    issued = _fetch_token(generator)
    stored = store_voucher(issued.access_token, issued.token_type, issued.expires_in)
    return {
        "access_token": stored.access_token,
        "token_type": stored.token_type,
        "expires_in": stored.expires_in,
    }


@app.get("/voucher")
def voucher(generator: ClientAssertionGenerator = Depends(get_generator)):
    """Cached voucher while it is not expired or about to expire; otherwise a new one."""
    stored, cached = get_or_fetch_voucher(lambda: _fetch_token(generator), buffer_seconds=60)
    return {
        "access_token": stored.access_token,
        "token_type": stored.token_type,
        "expires_in": stored.remaining_seconds(),
        "cached": cached,
    }


@app.get("/jwk")
def jwk(settings: VoucherSettings = Depends(get_settings)):
    """Public half of the configured signing key, as a JWK set."""
    try:
        private_key = load_rsa_private_key(settings.key_path, settings.key_password)
    except KeyLoadError as e:
        logger.error("Signing key could not be loaded (%s): %s", type(e).__name__, e)
        raise _server_error(str(e))
    return {"keys": [public_key_to_jwk(private_key.public_key(), settings.key_id, settings.algorithm)]}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "pdnd_voucher.main:app",
        host="127.0.0.1",
        port=8100,
        reload=True,
    )
