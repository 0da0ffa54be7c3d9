# Note encryption package
from notevault.backend.crypto.envelope import (
    decrypt_note,
    decrypt_with_key,
    encrypt_note,
    encrypt_with_key,
)
from notevault.backend.crypto.key_derivation import derive_key

__all__ = [
    "decrypt_note",
    "decrypt_with_key",
    "derive_key",
    "encrypt_note",
    "encrypt_with_key",
]
