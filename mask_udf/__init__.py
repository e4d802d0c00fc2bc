"""Mask UDF.

Hashing, masking and reversible encryption primitives for SQL engines.
"""
from .version import __version__
from .exceptions import (
    MaskUDFError,
    AlgorithmUnavailable,
    InvalidArgument,
    CipherError,
    InvalidKeyError,
    BlockSizeError,
    InvalidPaddingError,
    TamperedCiphertextError,
)
from .masking import mask_column, mask_email
from .functions import (
    ScalarFunction,
    FunctionRegistry,
    load_functions,
    ripemd_160,
    encrypt,
    decrypt,
)

__all__ = [
    "__version__",
    "MaskUDFError",
    "AlgorithmUnavailable",
    "InvalidArgument",
    "CipherError",
    "InvalidKeyError",
    "BlockSizeError",
    "InvalidPaddingError",
    "TamperedCiphertextError",
    "mask_column",
    "mask_email",
    "ScalarFunction",
    "FunctionRegistry",
    "load_functions",
    "ripemd_160",
    "encrypt",
    "decrypt",
]
