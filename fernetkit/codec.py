"""
Codec Utilities
URL-safe base64 (RFC 4648 section 5) and secure random bytes.

Encoding always emits '=' padding, matching the reference Fernet format.
Decoding accepts padded and unpadded input and rejects any character
outside the URL-safe alphabet.
"""

import base64
import binascii
import re

from fernetkit.providers import CryptoProvider, default_provider


_B64URL_PATTERN = re.compile(rb"[A-Za-z0-9_-]*={0,2}")


class DecodingError(ValueError):
    """Input is not valid URL-safe base64."""


def random_bytes(length: int, provider: CryptoProvider | None = None) -> bytes:
    """Return `length` bytes from the provider's secure random source."""
    return (provider or default_provider()).random_bytes(length)


def b64url_encode(data: bytes) -> str:
    """Encode bytes as padded URL-safe base64 text."""
    return base64.urlsafe_b64encode(bytes(data)).decode("ascii")


def b64url_decode(text: str | bytes) -> bytes:
    """
    Decode URL-safe base64, restoring any stripped '=' padding.

    Args:
        text: Padded or unpadded URL-safe base64.

    Returns:
        The decoded bytes.

    Raises:
        DecodingError: If the input has characters outside the alphabet
            or an impossible length.
    """
    if isinstance(text, str):
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise DecodingError("Invalid character in base64url input") from exc
    elif isinstance(text, (bytes, bytearray, memoryview)):
        raw = bytes(text)
    else:
        raise TypeError("base64url input must be str or bytes")

    if not _B64URL_PATTERN.fullmatch(raw):
        raise DecodingError("Invalid character in base64url input")

    body = raw.rstrip(b"=")
    if len(body) % 4 == 1:
        raise DecodingError("Invalid base64url length")
    body += b"=" * (-len(body) % 4)

    try:
        return base64.urlsafe_b64decode(body)
    except binascii.Error as exc:
        raise DecodingError(str(exc)) from exc
