"""
fernetkit: Fernet tokens for Python
Authenticated symmetric encryption in the Fernet v0x80 format.

A Fernet token is a self-contained, URL-safe string carrying:
1. A version byte and creation timestamp
2. A random IV and the AES-128-CBC ciphertext of the message
3. An HMAC-SHA256 over all of the above

Tokens produced here open with any other Fernet implementation, and vice versa.

Usage:
    from fernetkit import Fernet
    secret = Fernet.generate_secret()
    f = Fernet(secret)
    token = f.encrypt(b"hello world")
    f.decrypt(token)  # b"hello world"
"""

import logging

from fernetkit.config import FernetConfig
from fernetkit.errors import (
    FailedDecryption,
    FernetError,
    InvalidSecret,
    InvalidToken,
    SecretFault,
    TokenFault,
)
from fernetkit.fernet import Fernet
from fernetkit.keys import KeyPair, generate_secret, parse_secret
from fernetkit.tokens import decode, encode, encode_at_time, extract_timestamp

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "Fernet",
    "FernetConfig",
    "FernetError",
    "InvalidSecret",
    "InvalidToken",
    "FailedDecryption",
    "SecretFault",
    "TokenFault",
    "KeyPair",
    "parse_secret",
    "generate_secret",
    "encode",
    "encode_at_time",
    "decode",
    "extract_timestamp",
]
