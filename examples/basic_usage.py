"""
fernetkit: Basic Usage Example

Demonstrates issuing and opening Fernet tokens, one-shot helpers,
time-limited tokens, and how each kind of bad token is reported.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fernetkit import FailedDecryption, Fernet, InvalidToken


def main():
    # The secret is the only key to your tokens: keep it out of source control
    secret = Fernet.generate_secret()

    print("=" * 50)
    print("  fernetkit: Fernet tokens")
    print("=" * 50)
    print(f"\nSecret: {secret[:6]}... ({len(secret)} characters)")

    f = Fernet(secret)

    token = f.encrypt(b"hello world")
    print(f"\nToken:     {token}")
    print(f"Issued at: {f.extract_timestamp(token)}")
    print(f"Decrypted: {f.decrypt(token)!r}")

    # One-shot: parse the secret, run one operation, keep nothing
    one_shot = Fernet.encrypt_with("no instance needed", secret)
    print(f"\nOne-shot:  {Fernet.decrypt_with(one_shot, secret)!r}")

    # Time-limited: reject tokens older than ttl seconds
    print(f"Within ttl: {f.decrypt(token, ttl=60)!r}")

    print("\nRejected tokens:")
    for label, bad in [
        ("not base64url", "invalid_token"),
        ("truncated", token[:40]),
        ("forged", token[:-4] + ("BA==" if token.endswith("AA==") else "AA==")),
    ]:
        try:
            f.decrypt(bad)
            print(f"  ERROR: {label} token was accepted!")
        except InvalidToken as e:
            print(f"  {label:<14} -> InvalidToken({e.fault.value}): {e}")

    other = Fernet(Fernet.generate_secret())
    try:
        other.decrypt(token)
        print("  ERROR: token opened under another secret!")
    except (InvalidToken, FailedDecryption) as e:
        print(f"  {'wrong secret':<14} -> {e.__class__.__name__}: {e}")


if __name__ == "__main__":
    main()
