"""
Public entry point for callers: client assertion and voucher token, delegated to OAuth2Service.
"""
from pdnd_voucher.oauth2 import OAuth2Service, TokenResponse


class ClientAssertionGenerator:
    def __init__(self, oauth2_service: OAuth2Service):
        self._oauth2 = oauth2_service

    def get_client_assertion(self) -> str:
        return self._oauth2.generate_client_assertion()

    def get_token(self, client_assertion: str) -> TokenResponse:
        return self._oauth2.request_access_token(client_assertion)
