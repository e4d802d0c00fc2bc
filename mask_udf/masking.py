"""Masking functions: a fixed redaction token and a positional email mask."""
import operator
from typing import Any, Union

from .exceptions import InvalidArgument

MASK_TOKEN = "*****"
MASK_CHAR = "*"
DELIMITER = "@"


def mask_column(value: Any = None) -> str:
    """Return the redaction token, whatever the value is."""
    return MASK_TOKEN


def _prefix_length(num: Any) -> int:
    if isinstance(num, bool):
        raise InvalidArgument("mask_email prefix length must be an integer, got bool")
    try:
        num = operator.index(num)
    except TypeError as err:
        raise InvalidArgument(
            f"mask_email prefix length must be an integer, got {type(num).__name__}"
        ) from err
    if num < 0:
        raise InvalidArgument(
            f"mask_email prefix length must be non-negative, got {num}"
        )
    return num


def mask_email(value: Union[str, bytes], num: int) -> str:
    """Mask the local part of an email after its first ``num`` characters.

    Every character between position ``num`` and the first ``@`` becomes
    ``*``; the ``@`` and the rest of the string are kept. Without ``@`` the
    mask runs to the end of the string.

    >>> mask_email("canner-dev@cannerdata.com", 5)
    'canne*****@cannerdata.com'

    Args:
        value: Text, or UTF-8 encoded bytes.
        num: Number of leading characters left visible.

    Returns:
        The masked string.

    Raises:
        InvalidArgument: If num is negative or not an integer, or value
            is not text.
    """
    num = _prefix_length(num)
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidArgument("mask_email expects UTF-8 text") from err
    elif not isinstance(value, str):
        raise InvalidArgument(
            f"mask_email expects str or bytes, got {type(value).__name__}"
        )
    local, at, rest = value.partition(DELIMITER)
    if len(local) <= num:
        return value
    return local[:num] + MASK_CHAR * (len(local) - num) + at + rest
