"""
Fernet: Symmetric Authenticated Encryption
Holds one parsed secret and issues/opens tokens with it.

Flow for encrypting:
1. Stamp the current time
2. Draw a random IV
3. PKCS#7-pad and AES-128-CBC encrypt the message
4. HMAC-SHA256 the header and ciphertext
5. base64url the whole token

Flow for decrypting runs the same steps in reverse, rejecting the token at
the first check that fails. Tokens are interoperable with every other
Fernet implementation, including `cryptography.fernet`.
"""

from fernetkit import tokens
from fernetkit.config import FernetConfig
from fernetkit.keys import KeyPair, generate_secret, parse_secret
from fernetkit.providers import default_provider


class Fernet:
    """
    Encrypts and decrypts Fernet tokens under a single secret.

    The secret is parsed once; the resulting keys are immutable, so an
    instance can be shared across threads.

    Args:
        secret: 32 bytes of key material as URL-safe base64.
        config: Provider, clock and validation settings.

    Raises:
        InvalidSecret: If the secret is malformed.
    """

    def __init__(self, secret: str | bytes, config: FernetConfig | None = None):
        self.config = config or FernetConfig()
        self._provider = self.config.provider or default_provider()
        self._keys: KeyPair = parse_secret(secret, self._provider)

    @classmethod
    def from_secret(cls, secret: str | bytes, config: FernetConfig | None = None) -> "Fernet":
        return cls(secret, config)

    @staticmethod
    def generate_secret() -> str:
        """Generate a new random secret suitable for the constructor."""
        return generate_secret()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

    def encrypt(self, message: bytes | str) -> str:
        """
        Encrypt a message into a token stamped with the current time.

        Args:
            message: Bytes, or text to be UTF-8 encoded.

        Returns:
            The base64url token text.
        """
        return tokens.encode(
            message, self._keys, provider=self._provider, clock=self.config.clock
        )

    def encrypt_at_time(self, message: bytes | str, current_time: int) -> str:
        """Encrypt a message into a token stamped with `current_time`."""
        return tokens.encode_at_time(
            message, self._keys, current_time, provider=self._provider
        )

    def decrypt(self, token: str | bytes, ttl: int | None = None) -> bytes:
        """
        Decrypt a token and return the original message.

        Args:
            token: Token text produced by any Fernet implementation.
            ttl: If given, reject tokens older than this many seconds.

        Raises:
            InvalidToken: The token is malformed, forged or expired.
            FailedDecryption: The ciphertext does not decrypt under this key.
        """
        current_time = int(self.config.clock()) if ttl is not None else None
        return self.decrypt_at_time(token, ttl, current_time)

    def decrypt_at_time(
        self,
        token: str | bytes,
        ttl: int | None = None,
        current_time: int | None = None,
    ) -> bytes:
        """Decrypt a token, checking its age against an explicit time."""
        return tokens.decode(
            token,
            self._keys,
            ttl=ttl,
            current_time=current_time,
            provider=self._provider,
            enforce_version=self.config.enforce_version,
            max_clock_skew=self.config.max_clock_skew,
        )

    def decrypt_text(self, token: str | bytes, ttl: int | None = None) -> str:
        """Decrypt a token whose message is UTF-8 text."""
        return self.decrypt(token, ttl).decode("utf-8")

    def extract_timestamp(self, token: str | bytes) -> int:
        """Return the creation time of an authentic token."""
        return tokens.extract_timestamp(
            token,
            self._keys,
            provider=self._provider,
            enforce_version=self.config.enforce_version,
        )

    # One-shot helpers: parse the secret, run one operation, keep nothing.

    @classmethod
    def encrypt_with(
        cls,
        message: bytes | str,
        secret: str | bytes,
        config: FernetConfig | None = None,
    ) -> str:
        """Encrypt a message under `secret` without keeping an instance."""
        return cls(secret, config).encrypt(message)

    @classmethod
    def decrypt_with(
        cls,
        token: str | bytes,
        secret: str | bytes,
        ttl: int | None = None,
        config: FernetConfig | None = None,
    ) -> bytes:
        """Decrypt a token under `secret` without keeping an instance."""
        return cls(secret, config).decrypt(token, ttl)
