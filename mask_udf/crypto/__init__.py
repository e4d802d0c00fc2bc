"""Crypto primitives — process key material, AES-CBC cipher and RIPEMD-160.

Security Note (Threat Model):
    Key material lives only in process memory and is lost on restart;
    values encrypted by one process cannot be decrypted by another.
    Key persistence and rotation are out of scope.
"""

from .keys import KeyMaterial, generate_key_material, get_key_material, initialize
from .cipher import Cipher
from .config import CipherConfig
from .digest import ripemd_160

__all__ = [
    "KeyMaterial",
    "generate_key_material",
    "get_key_material",
    "initialize",
    "Cipher",
    "CipherConfig",
    "ripemd_160",
]
