"""
Blob Codec.

Framing for stored ciphertext: the nonce followed by ciphertext || tag,
the whole byte string encoded as standard base64 so it fits in a text
field.
"""

import base64
import binascii

from notevault.backend.core.exceptions import BlobFormatError
from notevault.backend.crypto.aead import NONCE_LENGTH


def encode(nonce: bytes, ciphertext: bytes) -> str:
    """Frame nonce and ciphertext into one base64 string."""
    if len(nonce) != NONCE_LENGTH:
        raise ValueError(f"Nonce must be {NONCE_LENGTH} bytes")
    return base64.b64encode(nonce + ciphertext).decode("ascii")


def decode(text: str) -> tuple[bytes, bytes]:
    """
    Split an encoded blob into (nonce, ciphertext).

    Raises:
        BlobFormatError: If the text is not strict base64 or the frame is
            shorter than a nonce
    """
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        raise BlobFormatError("Content is not valid base64") from None

    if len(raw) < NONCE_LENGTH:
        raise BlobFormatError(
            f"Blob is {len(raw)} bytes, shorter than the {NONCE_LENGTH}-byte nonce"
        )

    return raw[:NONCE_LENGTH], raw[NONCE_LENGTH:]
