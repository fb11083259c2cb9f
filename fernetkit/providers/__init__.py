"""
Crypto providers for the token codec.
Each provider supplies AES-128-CBC, HMAC-SHA256 and secure random bytes.
"""

from fernetkit.providers.base import (
    Algorithm,
    CryptoProvider,
    KeyHandle,
    KeyUsage,
    KeyUsageError,
)
from fernetkit.providers.native import CryptographyProvider

_default = CryptographyProvider()


def default_provider() -> CryptoProvider:
    """The shared provider used when no explicit one is passed."""
    return _default


__all__ = [
    "Algorithm",
    "CryptoProvider",
    "CryptographyProvider",
    "KeyHandle",
    "KeyUsage",
    "KeyUsageError",
    "default_provider",
]
