"""
Error taxonomy for secrets and tokens.

Every validation failure carries a stable fault kind so callers can tell a
malformed token from a token produced under another key.
"""

from enum import Enum


class SecretFault(Enum):
    """Why a secret was rejected."""
    ENCODING = "encoding"
    LENGTH = "length"


class TokenFault(Enum):
    """Why a token was rejected."""
    ENCODING = "encoding"
    LENGTH = "length"
    VERSION = "version"
    SIGNATURE = "signature"
    EXPIRED = "expired"
    FUTURE = "future"


_SECRET_MESSAGES = {
    SecretFault.ENCODING: "Invalid secret key encoding.",
    SecretFault.LENGTH: "Invalid secret key length.",
}

_TOKEN_MESSAGES = {
    TokenFault.ENCODING: "Fernet token has invalid encoding.",
    TokenFault.LENGTH: "Fernet token has invalid length.",
    TokenFault.VERSION: "Fernet token has invalid version.",
    TokenFault.SIGNATURE: "Fernet token has invalid signature.",
    TokenFault.EXPIRED: "Fernet token has expired.",
    TokenFault.FUTURE: "Fernet token is from the future.",
}


class FernetError(Exception):
    """Base class for all fernetkit validation errors."""


class InvalidSecret(FernetError, ValueError):
    """The secret is not base64url or does not decode to 32 bytes."""

    def __init__(self, fault: SecretFault):
        self.fault = fault
        super().__init__(_SECRET_MESSAGES[fault])


class InvalidToken(FernetError, ValueError):
    """The token is malformed, forged, or outside its validity window."""

    def __init__(self, fault: TokenFault):
        self.fault = fault
        super().__init__(_TOKEN_MESSAGES[fault])


class FailedDecryption(FernetError):
    """The ciphertext could not be decrypted or carried invalid padding."""

    def __init__(self, message: str = "Failed to decrypt the ciphertext."):
        super().__init__(message)
