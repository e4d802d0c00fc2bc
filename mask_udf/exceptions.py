"""
Mask UDF Exceptions.

Every failure raised by the library derives from ``MaskUDFError`` so a host
can report it as a single error family. Errors coming from the cryptographic
backend are chained with ``raise ... from err``.
"""
from typing import Optional


class MaskUDFError(Exception):
    """Base class for all mask_udf errors."""


class AlgorithmUnavailable(MaskUDFError, RuntimeError):
    """The cryptographic backend does not provide the requested primitive."""

    def __init__(self, algorithm: str, message: Optional[str] = None):
        self.algorithm = algorithm
        super().__init__(
            message or f"Algorithm {algorithm} is not available in this backend"
        )


class InvalidArgument(MaskUDFError, ValueError):
    """A function argument is outside of its contract."""


class CipherError(MaskUDFError):
    """Encryption or decryption failed."""


class InvalidKeyError(CipherError):
    """Key material was rejected by the cipher."""


class BlockSizeError(CipherError, ValueError):
    """Ciphertext length does not match the cipher block layout."""


class InvalidPaddingError(CipherError, ValueError):
    """Padding check failed, the ciphertext was tampered or does not match the key."""


class TamperedCiphertextError(CipherError, ValueError):
    """Authentication tag mismatch, the ciphertext or its IV was modified."""
