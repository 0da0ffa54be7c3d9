"""
Key Derivation.

Turns a passphrase into the 256-bit AES-GCM key with PBKDF2-HMAC-SHA256.

The salt and iteration count are fixed: every note encrypted under a given
passphrase shares one key, and previously stored notes only decrypt if
these parameters stay exactly as they are. Changing the passphrase
therefore leaves notes sealed under the old one unreadable.
"""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

KDF_SALT = b"dashboard_salt_v1"
KDF_ITERATIONS = 100_000
KEY_LENGTH = 32


def derive_key(passphrase: str) -> bytes:
    """
    Derive the note-encryption key for a passphrase.

    Deterministic and deliberately slow. An empty passphrase is accepted
    and yields a valid (weak) key; strength checks belong to the caller.

    Args:
        passphrase: User-supplied passphrase

    Returns:
        32-byte key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8"))
