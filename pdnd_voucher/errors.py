"""
Error types for voucher issuance. Key-loading errors also subclass the closest builtin
(ValueError, FileNotFoundError, PermissionError) so generic handlers still catch them.
Messages never include key bytes or passwords.
"""


class VoucherError(Exception):
    """Base class for all errors raised by pdnd_voucher."""


class ConfigurationError(VoucherError):
    """Settings missing or invalid."""


class KeyLoadError(VoucherError):
    """Base class for failures while loading the RSA signing key."""


class InvalidKeyPathError(KeyLoadError, ValueError):
    pass


class KeyFileNotFoundError(KeyLoadError, FileNotFoundError):
    pass


class UnsupportedKeyFormatError(KeyLoadError, ValueError):
    """PFX/P12 file, unrecognized PEM content, or a key that is not RSA."""


class KeyAccessError(KeyLoadError, PermissionError):
    """Key file exists but could not be read (permissions, I/O fault)."""


class PasswordRequiredError(KeyLoadError, ValueError):
    pass


class MalformedPemError(KeyLoadError, ValueError):
    """BEGIN/END markers missing or base64 payload invalid: the file itself needs fixing."""


class KeyImportError(KeyLoadError, ValueError):
    """DER structure invalid or decryption failed: wrong password or corrupt key data."""


class TokenRequestError(VoucherError):
    """Token endpoint unreachable or returned an error."""

    def __init__(self, message: str, status_code: int | None = None, error: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
