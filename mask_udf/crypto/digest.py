"""RIPEMD-160 digest rendered as hexadecimal text."""
from typing import Union

try:
    from Crypto.Hash import RIPEMD160
except ImportError:  # native hash module missing from the pycryptodome build
    RIPEMD160 = None

from ..exceptions import AlgorithmUnavailable, InvalidArgument

DIGEST_ALGORITHM = "RIPEMD160"
DIGEST_HEX_LENGTH = 40


def _new_hash():
    if RIPEMD160 is None:
        raise AlgorithmUnavailable(DIGEST_ALGORITHM)
    return RIPEMD160.new()


def ensure_available() -> None:
    """Check that the backend provides RIPEMD-160.

    Raises:
        AlgorithmUnavailable: If the hash cannot be instantiated.
    """
    _new_hash()


def ripemd_160(value: Union[str, bytes], *, zero_pad: bool = False) -> str:
    """Return the lowercase hex RIPEMD-160 digest of ``value``.

    The digest is rendered as a big-endian unsigned integer, so leading zero
    bytes are dropped (an all-zero digest renders as ``"0"``). Pass
    ``zero_pad=True`` to always get the 40 character form.

    Args:
        value: Text (encoded as UTF-8) or raw bytes.
        zero_pad: Left-pad the result with zeros to 40 characters.

    Returns:
        Hexadecimal digest string.

    Raises:
        InvalidArgument: If value is neither str nor bytes.
        AlgorithmUnavailable: If the backend lacks RIPEMD-160.
    """
    if isinstance(value, str):
        data = value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
    else:
        raise InvalidArgument(
            f"ripemd_160 expects str or bytes, got {type(value).__name__}"
        )
    h = _new_hash()
    h.update(data)
    hexdigest = format(int.from_bytes(h.digest(), "big"), "x")
    if zero_pad:
        return hexdigest.zfill(DIGEST_HEX_LENGTH)
    return hexdigest
