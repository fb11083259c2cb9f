"""
Key Manager
Parse a 256-bit Fernet secret into its signing and encryption halves.

  secret (32 bytes, base64url) = signing-key(16) || encryption-key(16)

The signing half is bound to HMAC-SHA256 for sign+verify; the encryption
half is bound to AES-128-CBC for encrypt+decrypt. Both bindings happen once,
through the crypto provider, and the resulting KeyPair is immutable.
"""

import logging
from dataclasses import dataclass

from fernetkit.codec import DecodingError, b64url_decode, b64url_encode, random_bytes
from fernetkit.config import SECRET_SIZE, SUBKEY_SIZE
from fernetkit.errors import InvalidSecret, SecretFault
from fernetkit.providers import (
    Algorithm,
    CryptoProvider,
    KeyHandle,
    KeyUsage,
    default_provider,
)

logger = logging.getLogger(__name__)

_SIGNING_USAGES = frozenset({KeyUsage.SIGN, KeyUsage.VERIFY})
_ENCRYPTION_USAGES = frozenset({KeyUsage.ENCRYPT, KeyUsage.DECRYPT})


@dataclass(frozen=True)
class KeyPair:
    """The two sub-keys derived from one secret."""
    signing_key: KeyHandle
    encryption_key: KeyHandle


def parse_secret(secret: str | bytes, provider: CryptoProvider | None = None) -> KeyPair:
    """
    Decode a base64url secret and bind its halves to their algorithms.

    Args:
        secret: 43-44 characters of URL-safe base64 encoding 32 bytes.
        provider: Crypto provider that binds the key material.

    Returns:
        The KeyPair for this secret.

    Raises:
        InvalidSecret: If the secret is not base64url (ENCODING) or does not
            decode to exactly 32 bytes (LENGTH).
    """
    provider = provider or default_provider()

    if not isinstance(secret, (str, bytes, bytearray, memoryview)):
        raise TypeError("secret must be str or bytes")

    try:
        raw = b64url_decode(secret)
    except DecodingError as exc:
        logger.debug("Rejected secret: %s", SecretFault.ENCODING.value)
        raise InvalidSecret(SecretFault.ENCODING) from exc

    if len(raw) != SECRET_SIZE:
        logger.debug("Rejected secret: %s (%d bytes)", SecretFault.LENGTH.value, len(raw))
        raise InvalidSecret(SecretFault.LENGTH)

    signing_key = provider.import_key(
        raw[:SUBKEY_SIZE], Algorithm.HMAC_SHA256, _SIGNING_USAGES
    )
    encryption_key = provider.import_key(
        raw[SUBKEY_SIZE:], Algorithm.AES_128_CBC, _ENCRYPTION_USAGES
    )
    return KeyPair(signing_key=signing_key, encryption_key=encryption_key)


def generate_secret(provider: CryptoProvider | None = None) -> str:
    """Generate a fresh random secret as padded base64url (44 characters)."""
    return b64url_encode(random_bytes(SECRET_SIZE, provider))
