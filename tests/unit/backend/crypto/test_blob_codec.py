"""
Unit Tests for the Blob Codec.

Framing and base64 validation of stored ciphertext.
"""

import base64

import pytest

from notevault.backend.core.exceptions import AuthenticationFailedError, BlobFormatError
from notevault.backend.crypto import blob_codec

NONCE = b"\x01" * 12


class TestEncode:
    def test_is_base64_of_nonce_then_ciphertext(self):
        text = blob_codec.encode(NONCE, b"ciphertext-and-tag")
        assert base64.b64decode(text) == NONCE + b"ciphertext-and-tag"

    def test_output_is_ascii_text(self):
        text = blob_codec.encode(NONCE, bytes(range(256)))
        assert isinstance(text, str)
        assert text.isascii()

    def test_rejects_wrong_nonce_length(self):
        with pytest.raises(ValueError):
            blob_codec.encode(b"\x00" * 8, b"data")


class TestDecode:
    def test_splits_nonce_prefix(self):
        nonce, ciphertext = blob_codec.decode(blob_codec.encode(NONCE, b"payload"))
        assert nonce == NONCE
        assert ciphertext == b"payload"

    def test_nonce_only_frame_is_accepted(self):
        nonce, ciphertext = blob_codec.decode(base64.b64encode(NONCE).decode())
        assert nonce == NONCE
        assert ciphertext == b""

    def test_rejects_frame_shorter_than_nonce(self):
        with pytest.raises(BlobFormatError):
            blob_codec.decode(base64.b64encode(b"\x00" * 11).decode())

    def test_rejects_empty_string(self):
        with pytest.raises(BlobFormatError):
            blob_codec.decode("")

    @pytest.mark.parametrize(
        "text",
        [
            "not base64 at all!",
            "AAAA*AAAAAAAAAAAAAAAAAAA",
            "AAAAAAAAAAAAAAAAA",
            "AAAAAAAAAAAAAAAA\nAAAA",
            "ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏ",
        ],
    )
    def test_rejects_invalid_base64(self, text):
        with pytest.raises(BlobFormatError):
            blob_codec.decode(text)

    def test_format_error_is_not_authentication_failure(self):
        with pytest.raises(BlobFormatError) as exc_info:
            blob_codec.decode("@@@@")
        assert not isinstance(exc_info.value, AuthenticationFailedError)
        assert exc_info.value.code == "CRYPTO_BAD_FORMAT"
