"""
Note Envelope.

Text-level sealing of note bodies, composed from key derivation, the AEAD
cipher and the blob codec:

    encrypt_note(plaintext, passphrase) -> blob
    decrypt_note(blob, passphrase) -> plaintext

The *_with_key variants skip key derivation so a caller holding a
derived key does not pay the PBKDF2 cost per note.
"""

from notevault.backend.core.exceptions import BlobFormatError
from notevault.backend.crypto import blob_codec
from notevault.backend.crypto.aead import AeadCipher, generate_nonce
from notevault.backend.crypto.key_derivation import derive_key


def encrypt_with_key(plaintext: str, key: bytes) -> str:
    """Seal UTF-8 plaintext under a derived key with a fresh nonce."""
    nonce = generate_nonce()
    sealed = AeadCipher(key).seal(nonce, plaintext.encode("utf-8"))
    return blob_codec.encode(nonce, sealed)


def decrypt_with_key(blob: str, key: bytes) -> str:
    """
    Open a sealed blob with a derived key.

    Raises:
        BlobFormatError: If the blob is not well-formed
        AuthenticationFailedError: If the blob does not verify under the key
    """
    nonce, sealed = blob_codec.decode(blob)
    plaintext = AeadCipher(key).open(nonce, sealed)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError:
        raise BlobFormatError("Decrypted content is not UTF-8 text") from None


def encrypt_note(plaintext: str, passphrase: str) -> str:
    """Seal a note body under a passphrase."""
    return encrypt_with_key(plaintext, derive_key(passphrase))


def decrypt_note(blob: str, passphrase: str) -> str:
    """Open a note body sealed under a passphrase."""
    return decrypt_with_key(blob, derive_key(passphrase))
