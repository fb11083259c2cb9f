"""
Base class for crypto providers.
Every back end that supplies AES-128-CBC, HMAC-SHA256 and random bytes
implements this interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class Algorithm(Enum):
    """Algorithms a key handle can be bound to."""
    HMAC_SHA256 = "HMAC-SHA256"
    AES_128_CBC = "AES-128-CBC"


class KeyUsage(Enum):
    """Operations a key handle may be used for."""
    SIGN = "sign"
    VERIFY = "verify"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class KeyUsageError(Exception):
    """A key was used with the wrong algorithm, for a usage it lacks, or has bad material."""


@dataclass(frozen=True)
class KeyHandle:
    """Raw key material bound to one algorithm and a fixed set of usages."""
    algorithm: Algorithm
    usages: frozenset[KeyUsage]
    material: bytes = field(repr=False)

    def require(self, algorithm: Algorithm, usage: KeyUsage) -> None:
        """Raise KeyUsageError unless this key may perform `usage` under `algorithm`."""
        if self.algorithm is not algorithm:
            raise KeyUsageError(
                f"{self.algorithm.value} key cannot be used for {algorithm.value}"
            )
        if usage not in self.usages:
            raise KeyUsageError(
                f"{self.algorithm.value} key does not permit '{usage.value}'"
            )


class CryptoProvider(ABC):
    """Abstract base class for the primitives the token codec relies on."""

    @abstractmethod
    def random_bytes(self, length: int) -> bytes:
        """Return `length` bytes from a cryptographically secure source."""

    @abstractmethod
    def import_key(
        self,
        material: bytes,
        algorithm: Algorithm,
        usages: frozenset[KeyUsage],
    ) -> KeyHandle:
        """
        Bind raw key material to an algorithm.

        Raises:
            KeyUsageError: If the material is unsuitable for the algorithm.
        """

    @abstractmethod
    def aes_cbc_encrypt(self, key: KeyHandle, iv: bytes, data: bytes) -> bytes:
        """Encrypt block-aligned `data` with AES-128-CBC."""

    @abstractmethod
    def aes_cbc_decrypt(self, key: KeyHandle, iv: bytes, data: bytes) -> bytes:
        """
        Decrypt block-aligned `data` with AES-128-CBC.

        Raises:
            ValueError: If the ciphertext is not block-aligned.
        """

    @abstractmethod
    def hmac_sign(self, key: KeyHandle, data: bytes) -> bytes:
        """Return the 32-byte HMAC-SHA256 of `data`."""

    @abstractmethod
    def hmac_verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        """Check `signature` against `data` in constant time."""
