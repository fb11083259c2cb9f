"""
fernetkit: Integration Tests
Tests the Fernet facade: instance and one-shot encrypt/decrypt, secret
handling, time-limited tokens and concurrent use of one instance.
"""

import base64
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add parent to path for local development
sys.path.insert(0, str(Path(__file__).parent.parent))

from cryptography.hazmat.primitives import hashes, hmac

from fernetkit import (
    FailedDecryption,
    Fernet,
    FernetConfig,
    FernetError,
    InvalidSecret,
    InvalidToken,
    SecretFault,
    TokenFault,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_generate_secret():
    """Test generated secrets are distinct and usable."""
    print("Testing generate_secret...", end=" ")
    s1, s2, s3 = Fernet.generate_secret(), Fernet.generate_secret(), Fernet.generate_secret()
    assert len({s1, s2, s3}) == 3
    assert isinstance(Fernet(s1), Fernet)
    assert isinstance(Fernet.from_secret(s2), Fernet)
    print("PASS")


def test_encrypt_decrypt():
    """Test the hello world round trip."""
    print("Testing encrypt/decrypt...", end=" ")
    f = Fernet(Fernet.generate_secret())
    token = f.encrypt("hello world")
    assert isinstance(token, str)
    assert token != "hello world"
    assert f.decrypt(token) == b"hello world"
    assert f.decrypt_text(token) == "hello world"
    print("PASS")


def test_fixed_secret():
    """Test a hand-written 32-byte secret round trip."""
    print("Testing fixed secret...", end=" ")
    f = Fernet("0" * 43 + "=")
    assert f.decrypt(f.encrypt(b"hello world")) == b"hello world"
    assert f.decrypt(f.encrypt(b"")) == b""
    print("PASS")


def test_one_shot_helpers():
    """Test stateless encrypt/decrypt with the secret passed directly."""
    print("Testing one-shot helpers...", end=" ")
    secret = Fernet.generate_secret()
    token = Fernet.encrypt_with(b"one shot", secret)
    assert Fernet.decrypt_with(token, secret) == b"one shot"
    assert Fernet(secret).decrypt(token) == b"one shot"
    assert Fernet.decrypt_with(Fernet(secret).encrypt(b"x"), secret) == b"x"
    print("PASS")


def test_invalid_secrets():
    """Test secret rejection by the constructor and the one-shot helpers."""
    print("Testing invalid secrets...", end=" ")
    try:
        Fernet("bG9yZW1pcHN1bQ")
        assert False, "should have raised InvalidSecret"
    except InvalidSecret as e:
        assert e.fault is SecretFault.LENGTH
    try:
        Fernet("#$&(^$$#$$#@#%&**(&*()_?><:;}]{[!@#")
        assert False, "should have raised InvalidSecret"
    except InvalidSecret as e:
        assert e.fault is SecretFault.ENCODING
    try:
        Fernet.decrypt_with("anything", "not a secret")
        assert False, "should have raised InvalidSecret"
    except InvalidSecret:
        pass
    print("PASS")


def test_invalid_tokens():
    """Test each token fault is reported with its own kind."""
    print("Testing invalid tokens...", end=" ")
    f = Fernet(Fernet.generate_secret())

    try:
        f.decrypt("invalid_token")
        assert False, "should have raised InvalidToken"
    except InvalidToken as e:
        assert e.fault is TokenFault.ENCODING

    try:
        f.decrypt("bG9yZW1pcHN1bQ")
        assert False, "should have raised InvalidToken"
    except InvalidToken as e:
        assert e.fault is TokenFault.LENGTH
        assert str(e) == "Fernet token has invalid length."

    raw = base64.urlsafe_b64decode(f.encrypt(b"hello world"))
    forged = base64.urlsafe_b64encode(raw[:-32] + bytes(32)).decode()
    try:
        f.decrypt(forged)
        assert False, "should have raised InvalidToken"
    except InvalidToken as e:
        assert e.fault is TokenFault.SIGNATURE
    print("PASS")


def test_wrong_secret():
    """Test a token never opens under another secret."""
    print("Testing wrong secret...", end=" ")
    token = Fernet(Fernet.generate_secret()).encrypt(b"sensitive")
    other = Fernet(Fernet.generate_secret())
    try:
        other.decrypt(token)
        assert False, "should have raised"
    except (InvalidToken, FailedDecryption) as e:
        assert isinstance(e, FernetError)
    print("PASS")


def test_ttl_with_clock():
    """Test ttl uses the configured clock."""
    print("Testing ttl...", end=" ")
    clock = FakeClock(1_000_000.0)
    f = Fernet(Fernet.generate_secret(), FernetConfig(clock=clock))
    token = f.encrypt(b"short-lived")
    assert f.extract_timestamp(token) == 1_000_000

    clock.now += 30
    assert f.decrypt(token, ttl=30) == b"short-lived"

    clock.now += 1
    try:
        f.decrypt(token, ttl=30)
        assert False, "should have expired"
    except InvalidToken as e:
        assert e.fault is TokenFault.EXPIRED
    # Without ttl age does not matter
    assert f.decrypt(token) == b"short-lived"

    assert f.decrypt_at_time(token, ttl=30, current_time=1_000_010) == b"short-lived"
    print("PASS")


def test_future_token():
    """Test tokens stamped beyond the clock skew are rejected under ttl."""
    print("Testing future token...", end=" ")
    secret = Fernet.generate_secret()
    f = Fernet(secret, FernetConfig(clock=FakeClock(5000.0), max_clock_skew=10))
    token = f.encrypt_at_time(b"later", 5011)
    try:
        f.decrypt(token, ttl=100)
        assert False, "should have raised InvalidToken"
    except InvalidToken as e:
        assert e.fault is TokenFault.FUTURE
    assert f.decrypt(f.encrypt_at_time(b"later", 5010), ttl=100) == b"later"
    print("PASS")


def test_version_check_configurable():
    """Test enforce_version=False accepts a signed non-0x80 token."""
    print("Testing version check...", end=" ")
    secret = Fernet.generate_secret()
    strict = Fernet(secret)
    lenient = Fernet(secret, FernetConfig(enforce_version=False))

    raw = bytearray(base64.urlsafe_b64decode(strict.encrypt(b"v")))
    raw[0] = 0x00
    body = bytes(raw[:-32])
    signing = base64.urlsafe_b64decode(secret)[:16]

    h = hmac.HMAC(signing, hashes.SHA256())
    h.update(body)
    token = base64.urlsafe_b64encode(body + h.finalize()).decode()

    try:
        strict.decrypt(token)
        assert False, "should have raised InvalidToken"
    except InvalidToken as e:
        assert e.fault is TokenFault.VERSION
    assert lenient.decrypt(token) == b"v"
    print("PASS")


def test_concurrent_use():
    """Test one instance shared across threads."""
    print("Testing concurrent use...", end=" ")
    f = Fernet(Fernet.generate_secret())
    messages = [f"message {i}".encode() for i in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        tokens = list(pool.map(f.encrypt, messages))
        decrypted = list(pool.map(f.decrypt, tokens))

    assert decrypted == messages
    assert len(set(tokens)) == len(tokens)
    print("PASS")


def test_repr_hides_keys():
    """Test the instance repr reveals nothing."""
    secret = Fernet.generate_secret()
    assert secret not in repr(Fernet(secret))


def main():
    print("=" * 50)
    print("  fernetkit Integration Tests")
    print("=" * 50)
    print()

    tests = [
        test_generate_secret,
        test_encrypt_decrypt,
        test_fixed_secret,
        test_one_shot_helpers,
        test_invalid_secrets,
        test_invalid_tokens,
        test_wrong_secret,
        test_ttl_with_clock,
        test_future_token,
        test_version_check_configurable,
        test_concurrent_use,
        test_repr_hides_keys,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
