"""
Configuration
Token layout constants and per-instance settings.

The byte layout is fixed by the Fernet format and shared with every other
implementation; only the clock, the crypto provider and the strictness of the
version check can vary.
"""

import time
from dataclasses import dataclass, field
from typing import Callable

from fernetkit.providers.base import CryptoProvider


# Token layout: version(1) || timestamp(8) || iv(16) || ciphertext(16n) || hmac(32)
VERSION = 0x80
VERSION_SIZE = 1
TIMESTAMP_SIZE = 8
IV_SIZE = 16
HMAC_SIZE = 32
BLOCK_SIZE = 16

OVERHEAD = VERSION_SIZE + TIMESTAMP_SIZE + IV_SIZE + HMAC_SIZE  # 57
MIN_TOKEN_SIZE = OVERHEAD + BLOCK_SIZE                           # 73

# Field offsets inside a decoded token
TIMESTAMP_OFFSET = VERSION_SIZE
IV_OFFSET = TIMESTAMP_OFFSET + TIMESTAMP_SIZE
CIPHERTEXT_OFFSET = IV_OFFSET + IV_SIZE

# Secret: signing-key(16) || encryption-key(16)
SECRET_SIZE = 32
SUBKEY_SIZE = 16

# Seconds a token timestamp may run ahead of the local clock
MAX_CLOCK_SKEW = 60


@dataclass(frozen=True)
class FernetConfig:
    """
    Settings for a Fernet instance.

    Args:
        provider: Crypto back end. Falls back to the shared default provider.
        clock: Returns the current Unix time in seconds.
        max_clock_skew: Tolerance for tokens stamped in the future (with ttl).
        enforce_version: Reject tokens whose first byte is not 0x80.
    """
    provider: CryptoProvider | None = None
    clock: Callable[[], float] = field(default=time.time)
    max_clock_skew: int = MAX_CLOCK_SKEW
    enforce_version: bool = True
