"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class DecryptionError(ApplicationError):
    """
    Raised when stored content cannot be turned back into plaintext.

    Callers that only need to show "cannot decrypt" catch this base class.
    The subclasses keep the cause distinguishable in logs and tests.
    """

    def __init__(
        self,
        message: str = "Decryption failed",
        code: str = "CRYPTO_DECRYPTION_FAILED",
    ) -> None:
        super().__init__(message, code=code)


class AuthenticationFailedError(DecryptionError):
    """Raised when the ciphertext or tag is not valid for the derived key."""

    def __init__(self, message: str = "Authentication tag mismatch") -> None:
        super().__init__(message, code="CRYPTO_AUTH_FAILED")


class BlobFormatError(DecryptionError):
    """Raised when stored content is not a valid encoded blob."""

    def __init__(self, message: str = "Malformed encrypted blob") -> None:
        super().__init__(message, code="CRYPTO_BAD_FORMAT")


class PersistenceError(ApplicationError):
    """Raised when the backing store cannot be read or written."""

    def __init__(self, message: str = "Persistence error") -> None:
        super().__init__(message, code="SYS_PERSISTENCE_ERROR")
