"""
In-memory cache of the last voucher (access token) obtained from the token endpoint.
Single stored voucher per process; only the access token is kept, never key material.
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class StoredVoucher:
    access_token: str
    token_type: str
    expires_in: int
    issued_at: float

    def _remaining(self) -> float:
        return self.expires_in - (time.time() - self.issued_at)

    def remaining_seconds(self) -> int:
        return max(0, int(self._remaining()))

    def expired_or_soon(self, buffer_seconds: int = 60) -> bool:
        """True once at most buffer_seconds of lifetime are left."""
        # A lifetime shorter than the buffer would be stale from the start; only expiry counts then
        margin = buffer_seconds if self.expires_in > buffer_seconds else 0
        return self._remaining() <= margin


_voucher: StoredVoucher | None = None
_lock = threading.Lock()


def _new_voucher(access_token: str, token_type: str, expires_in: int) -> StoredVoucher:
    return StoredVoucher(
        access_token=access_token,
        token_type=token_type,
        expires_in=expires_in,
        issued_at=time.time(),
    )


def store_voucher(access_token: str, token_type: str, expires_in: int) -> StoredVoucher:
    global _voucher
    voucher = _new_voucher(access_token, token_type, expires_in)
    with _lock:
        _voucher = voucher
    return voucher


def get_voucher() -> StoredVoucher | None:
    return _voucher


def get_or_fetch_voucher(fetch: Callable, buffer_seconds: int = 60) -> tuple[StoredVoucher, bool]:
    """
    Return (voucher, cached). A fresh cached voucher is returned as is; otherwise fetch()
    is called and its result (anything with access_token, token_type, expires_in) is stored.
    Check and fetch run under the store lock, so concurrent callers share one fetch.
    Exceptions from fetch() propagate and leave the cache unchanged.
    """
    global _voucher
    with _lock:
        if _voucher is not None and not _voucher.expired_or_soon(buffer_seconds):
            return _voucher, True
        token = fetch()
        _voucher = _new_voucher(token.access_token, token.token_type, token.expires_in)
        return _voucher, False


def clear_voucher() -> None:
    global _voucher
    with _lock:
        _voucher = None
