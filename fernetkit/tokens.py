"""
Fernet Tokens
Encode and decode the Fernet v0x80 token format.

Binary layout (before base64url):

  version(1) || timestamp(8, big-endian) || iv(16) || ciphertext(16n) || hmac(32)

The HMAC-SHA256 covers everything before it and is keyed by the signing key.
Decoding validates in a fixed order and stops at the first failure:
encoding, length, version, decryption, signature, then (optionally) age.
Decryption runs before the signature check, as in the reference
implementation, so a ciphertext that cannot be decrypted reports
FailedDecryption even when its signature is also wrong.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from fernetkit.codec import DecodingError, b64url_decode, b64url_encode, random_bytes
from fernetkit.config import (
    BLOCK_SIZE,
    CIPHERTEXT_OFFSET,
    HMAC_SIZE,
    IV_OFFSET,
    IV_SIZE,
    MAX_CLOCK_SKEW,
    MIN_TOKEN_SIZE,
    OVERHEAD,
    TIMESTAMP_OFFSET,
    TIMESTAMP_SIZE,
    VERSION,
)
from fernetkit.errors import FailedDecryption, InvalidToken, TokenFault
from fernetkit.keys import KeyPair
from fernetkit.padding import pkcs7_pad, pkcs7_unpad
from fernetkit.providers import CryptoProvider, default_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenParts:
    """The fields of a decoded token, sliced by their fixed offsets."""
    version: int
    timestamp: int
    iv: bytes
    ciphertext: bytes
    hmac: bytes
    signed_data: bytes  # version || timestamp || iv || ciphertext


def split_token(raw: bytes) -> TokenParts:
    """Slice a decoded token into its fields. Assumes the length was already checked."""
    return TokenParts(
        version=raw[0],
        timestamp=int.from_bytes(raw[TIMESTAMP_OFFSET:IV_OFFSET], "big"),
        iv=raw[IV_OFFSET:CIPHERTEXT_OFFSET],
        ciphertext=raw[CIPHERTEXT_OFFSET:-HMAC_SIZE],
        hmac=raw[-HMAC_SIZE:],
        signed_data=raw[:-HMAC_SIZE],
    )


def _message_bytes(message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError("message must be bytes or str")


def _reject(fault: TokenFault) -> InvalidToken:
    logger.debug("Rejected token: %s", fault.value)
    return InvalidToken(fault)


def encode_at_time(
    message: bytes | str,
    key_pair: KeyPair,
    current_time: int,
    iv: bytes | None = None,
    provider: CryptoProvider | None = None,
) -> str:
    """
    Build a token stamped with an explicit time.

    Args:
        message: Plaintext bytes, or text to be UTF-8 encoded.
        key_pair: Signing and encryption keys.
        current_time: Unix time in whole seconds to store in the token.
        iv: 16-byte IV. A fresh random IV is drawn when omitted.
        provider: Crypto provider for the cipher, MAC and RNG.

    Returns:
        The padded base64url token text.
    """
    provider = provider or default_provider()
    data = _message_bytes(message)

    if iv is None:
        iv = random_bytes(IV_SIZE, provider)
    elif len(iv) != IV_SIZE:
        raise ValueError(f"iv must be {IV_SIZE} bytes")

    timestamp = int(current_time).to_bytes(TIMESTAMP_SIZE, "big")
    ciphertext = provider.aes_cbc_encrypt(key_pair.encryption_key, iv, pkcs7_pad(data))

    unsigned = bytes([VERSION]) + timestamp + bytes(iv) + ciphertext
    signature = provider.hmac_sign(key_pair.signing_key, unsigned)
    return b64url_encode(unsigned + signature)


def encode(
    message: bytes | str,
    key_pair: KeyPair,
    provider: CryptoProvider | None = None,
    clock: Callable[[], float] | None = None,
) -> str:
    """Build a token stamped with the current time."""
    now = (clock or time.time)()
    return encode_at_time(message, key_pair, int(now), provider=provider)


def _open(
    token: str | bytes,
    key_pair: KeyPair,
    provider: CryptoProvider,
    enforce_version: bool,
) -> tuple[TokenParts, bytes]:
    """Run the validation pipeline and return the token fields and plaintext."""
    if not isinstance(token, (str, bytes, bytearray, memoryview)):
        raise TypeError("token must be str or bytes")

    try:
        raw = b64url_decode(token)
    except DecodingError as exc:
        raise _reject(TokenFault.ENCODING) from exc

    if len(raw) < MIN_TOKEN_SIZE or (len(raw) - OVERHEAD) % BLOCK_SIZE != 0:
        raise _reject(TokenFault.LENGTH)

    parts = split_token(raw)

    if enforce_version and parts.version != VERSION:
        raise _reject(TokenFault.VERSION)

    try:
        padded = provider.aes_cbc_decrypt(key_pair.encryption_key, parts.iv, parts.ciphertext)
        plaintext = pkcs7_unpad(padded)
    except ValueError as exc:
        logger.debug("Rejected token: decryption failed")
        raise FailedDecryption() from exc

    if not provider.hmac_verify(key_pair.signing_key, parts.signed_data, parts.hmac):
        raise _reject(TokenFault.SIGNATURE)

    return parts, plaintext


def decode(
    token: str | bytes,
    key_pair: KeyPair,
    ttl: int | None = None,
    current_time: int | None = None,
    provider: CryptoProvider | None = None,
    enforce_version: bool = True,
    max_clock_skew: int = MAX_CLOCK_SKEW,
) -> bytes:
    """
    Validate a token and recover its message.

    Args:
        token: base64url token text (padded or unpadded).
        key_pair: Signing and encryption keys.
        ttl: Maximum token age in seconds. No age check when None.
        current_time: Unix time to check the age against. Defaults to now.
        provider: Crypto provider for the cipher and MAC.
        enforce_version: Reject tokens whose version byte is not 0x80.
        max_clock_skew: How far in the future a token may be stamped (with ttl).

    Returns:
        The original message bytes.

    Raises:
        InvalidToken: Bad encoding, length, version or signature, or outside ttl.
        FailedDecryption: The ciphertext could not be decrypted and unpadded.
    """
    parts, plaintext = _open(token, key_pair, provider or default_provider(), enforce_version)

    if ttl is not None:
        if current_time is None:
            current_time = int(time.time())
        if parts.timestamp + ttl < current_time:
            raise _reject(TokenFault.EXPIRED)
        if current_time + max_clock_skew < parts.timestamp:
            raise _reject(TokenFault.FUTURE)

    return plaintext


def extract_timestamp(
    token: str | bytes,
    key_pair: KeyPair,
    provider: CryptoProvider | None = None,
    enforce_version: bool = True,
) -> int:
    """Return the creation time of an authentic token, in Unix seconds."""
    parts, _ = _open(token, key_pair, provider or default_provider(), enforce_version)
    return parts.timestamp
