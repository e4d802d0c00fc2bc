"""
Key Material — process-lifetime AES key and IV.

The key and IV are generated once per process and never persisted, so values
encrypted in one process can only be decrypted by that same process.

Security Note:
    Never log key or IV bytes. ``KeyMaterial.__repr__`` hides them.
"""
import secrets
import logging
import threading
from typing import Optional
from dataclasses import dataclass, field

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..exceptions import AlgorithmUnavailable
from . import digest

logger = logging.getLogger("mask_udf")

KEY_SIZE = 24  # AES-192
IV_SIZE = 16  # AES block size


@dataclass(frozen=True)
class KeyMaterial:
    """Symmetric key and initialization vector, immutable once built."""

    key: bytes = field(repr=False)
    iv: bytes = field(repr=False)

    @property
    def key_bits(self) -> int:
        return len(self.key) * 8

    def __repr__(self) -> str:
        return f"<KeyMaterial AES-{self.key_bits}>"


def _check_cipher_supported(material: KeyMaterial) -> None:
    """Instantiate AES-CBC once so an unusable backend fails at startup."""
    try:
        Cipher(algorithms.AES(material.key), modes.CBC(material.iv)).encryptor()
    except UnsupportedAlgorithm as err:
        raise AlgorithmUnavailable(
            f"AES-{material.key_bits}-CBC"
        ) from err


def generate_key_material() -> KeyMaterial:
    """Generate a new AES-192 key and a 16-byte IV from a secure RNG.

    Returns:
        A fresh KeyMaterial instance.

    Raises:
        AlgorithmUnavailable: If the backend does not support AES-192-CBC.
    """
    material = KeyMaterial(
        key=secrets.token_bytes(KEY_SIZE),
        iv=secrets.token_bytes(IV_SIZE),
    )
    _check_cipher_supported(material)
    return material


_key_material: Optional[KeyMaterial] = None
_lock = threading.Lock()


def initialize() -> KeyMaterial:
    """Initialize the process-wide key material exactly once.

    Also checks that RIPEMD-160 is available, so every backend requirement
    is verified in the same startup step.

    Returns:
        The process KeyMaterial (same instance on every call).

    Raises:
        AlgorithmUnavailable: If a required primitive is missing; the
            singleton stays unset.
    """
    global _key_material
    if _key_material is not None:
        return _key_material
    with _lock:
        if _key_material is None:
            try:
                digest.ensure_available()
                material = generate_key_material()
            except AlgorithmUnavailable as err:
                logger.error("Key material initialization failed: %s", err)
                raise
            _key_material = material
            logger.debug("Key material initialized: %r", material)
    return _key_material


def get_key_material() -> KeyMaterial:
    """Return the process KeyMaterial, initializing it on first access."""
    if _key_material is None:
        return initialize()
    return _key_material
