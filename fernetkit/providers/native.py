"""
Native crypto provider.
Backed by the `cryptography` package (OpenSSL) and the OS random source.
"""

import os

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from fernetkit.providers.base import (
    Algorithm,
    CryptoProvider,
    KeyHandle,
    KeyUsage,
    KeyUsageError,
)


AES_128_KEY_SIZE = 16


class CryptographyProvider(CryptoProvider):
    """
    Crypto provider using `cryptography.hazmat` primitives.

    Holds no state, so a single instance can be shared across threads.
    """

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError("length must be non-negative")
        return os.urandom(length)

    def import_key(
        self,
        material: bytes,
        algorithm: Algorithm,
        usages: frozenset[KeyUsage],
    ) -> KeyHandle:
        material = bytes(material)
        if algorithm is Algorithm.AES_128_CBC:
            if len(material) != AES_128_KEY_SIZE:
                raise KeyUsageError(
                    f"AES-128 key must be {AES_128_KEY_SIZE} bytes, got {len(material)}"
                )
            allowed = {KeyUsage.ENCRYPT, KeyUsage.DECRYPT}
        elif algorithm is Algorithm.HMAC_SHA256:
            if not material:
                raise KeyUsageError("HMAC key must not be empty")
            allowed = {KeyUsage.SIGN, KeyUsage.VERIFY}
        else:
            raise KeyUsageError(f"Unsupported algorithm: {algorithm!r}")

        usages = frozenset(usages)
        if not usages or not usages <= allowed:
            raise KeyUsageError(
                f"Invalid usages for {algorithm.value}: "
                f"{sorted(u.value for u in usages)}"
            )
        return KeyHandle(algorithm=algorithm, usages=usages, material=material)

    def aes_cbc_encrypt(self, key: KeyHandle, iv: bytes, data: bytes) -> bytes:
        key.require(Algorithm.AES_128_CBC, KeyUsage.ENCRYPT)
        encryptor = Cipher(algorithms.AES(key.material), modes.CBC(iv)).encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def aes_cbc_decrypt(self, key: KeyHandle, iv: bytes, data: bytes) -> bytes:
        key.require(Algorithm.AES_128_CBC, KeyUsage.DECRYPT)
        decryptor = Cipher(algorithms.AES(key.material), modes.CBC(iv)).decryptor()
        return decryptor.update(data) + decryptor.finalize()

    def hmac_sign(self, key: KeyHandle, data: bytes) -> bytes:
        key.require(Algorithm.HMAC_SHA256, KeyUsage.SIGN)
        h = hmac.HMAC(key.material, hashes.SHA256())
        h.update(data)
        return h.finalize()

    def hmac_verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        key.require(Algorithm.HMAC_SHA256, KeyUsage.VERIFY)
        h = hmac.HMAC(key.material, hashes.SHA256())
        h.update(data)
        try:
            h.verify(signature)
        except InvalidSignature:
            return False
        return True
