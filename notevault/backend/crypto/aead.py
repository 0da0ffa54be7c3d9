"""
AEAD Cipher.

AES-256-GCM authenticated encryption of byte payloads. Ciphertext and the
16-byte authentication tag come back as one byte string.
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from notevault.backend.core.exceptions import AuthenticationFailedError
from notevault.backend.crypto.key_derivation import KEY_LENGTH

NONCE_LENGTH = 12
TAG_LENGTH = 16


def generate_nonce() -> bytes:
    """Return a fresh random 96-bit nonce. Never reuse one under the same key."""
    return os.urandom(NONCE_LENGTH)


class AeadCipher:
    """
    AES-256-GCM bound to one key.

    Usage:
        cipher = AeadCipher(derive_key("passphrase"))
        nonce = generate_nonce()
        sealed = cipher.seal(nonce, b"hello")
        assert cipher.open(nonce, sealed) == b"hello"
    """

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_LENGTH:
            raise ValueError(f"AES-256-GCM requires a {KEY_LENGTH}-byte key")
        self._aesgcm = AESGCM(key)

    def seal(self, nonce: bytes, plaintext: bytes) -> bytes:
        """Encrypt and authenticate plaintext. Returns ciphertext || tag."""
        return self._aesgcm.encrypt(nonce, plaintext, None)

    def open(self, nonce: bytes, ciphertext: bytes) -> bytes:
        """
        Verify and decrypt ciphertext || tag.

        Raises:
            AuthenticationFailedError: If the tag does not verify
        """
        try:
            return self._aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag:
            raise AuthenticationFailedError(
                "Wrong passphrase or corrupted note"
            ) from None
