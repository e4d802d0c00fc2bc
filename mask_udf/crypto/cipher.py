"""
Cipher — AES-CBC encryption with PKCS#7 padding over process key material.

Two ciphertext layouts, selected by ``CipherConfig.iv_mode``:
- random: [iv 16B][ciphertext][HMAC-SHA256 tag 32B], a fresh IV per call
  (default); the tag covers iv and ciphertext and is checked before
  decrypting (encrypt-then-MAC)
- fixed:  [ciphertext], the process IV reused for every call (legacy)

Security Note:
    Fixed mode leaks equality of plaintext prefixes between values encrypted
    in the same process, and carries no tag: it only detects modifications
    that break the padding. Use it only to read or produce legacy values.
    Never log plaintext or ciphertext values.
"""
import secrets
import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.ciphers import (
    Cipher as BlockCipher,
    algorithms,
    modes,
)

from ..exceptions import (
    AlgorithmUnavailable,
    BlockSizeError,
    InvalidArgument,
    InvalidKeyError,
    InvalidPaddingError,
    TamperedCiphertextError,
)
from .config import CipherConfig
from .keys import IV_SIZE, KeyMaterial, get_key_material

logger = logging.getLogger("mask_udf")

BLOCK_SIZE = algorithms.AES.block_size  # bits
BLOCK_BYTES = BLOCK_SIZE // 8
TAG_SIZE = 32  # HMAC-SHA256
MAC_KEY_LENGTH = 32
MAC_CONTEXT = "mask-udf-mac"


def derive_mac_key(key: bytes) -> bytes:
    """Derive the HMAC key from the AES key using HKDF-SHA256.

    Args:
        key: AES key bytes.

    Returns:
        32-byte MAC key, independent from the encryption key.
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=MAC_KEY_LENGTH,
        salt=None,
        info=MAC_CONTEXT.encode("utf-8"),
    )
    return hkdf.derive(key)


def _as_bytes(value: Union[str, bytes], operation: str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidArgument(
        f"{operation} expects str or bytes, got {type(value).__name__}"
    )


class Cipher:
    """AES-CBC cipher bound to one KeyMaterial instance.

    Args:
        key_material: Key and IV to use; all calls share it.
        config: Cipher settings; defaults to random IV mode.
    """

    def __init__(
        self,
        key_material: KeyMaterial,
        config: Optional[CipherConfig] = None,
    ):
        self._key_material = key_material
        self._config = config or CipherConfig()
        self._mac_key = None if self.fixed_iv else derive_mac_key(key_material.key)

    @property
    def iv_mode(self) -> str:
        return self._config.iv_mode

    @property
    def fixed_iv(self) -> bool:
        return self._config.fixed_iv

    def __repr__(self) -> str:
        return f"<Cipher AES-{self._key_material.key_bits}-CBC iv_mode={self.iv_mode}>"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _block_cipher(self, iv: bytes) -> BlockCipher:
        """Build the AES-CBC primitive for ``iv``."""
        try:
            return BlockCipher(
                algorithms.AES(self._key_material.key), modes.CBC(iv),
            )
        except UnsupportedAlgorithm as err:
            raise AlgorithmUnavailable("AES-CBC") from err
        except ValueError as err:
            raise InvalidKeyError(f"Key material rejected: {err}") from err

    def _tag(self, data: bytes) -> hmac.HMAC:
        h = hmac.HMAC(self._mac_key, hashes.SHA256())
        h.update(data)
        return h

    def _split(self, data: bytes) -> tuple[bytes, bytes]:
        """Split a ciphertext into (iv, body), checking length and tag."""
        if self.fixed_iv:
            iv, body = self._key_material.iv, data
        else:
            _min = IV_SIZE + BLOCK_BYTES + TAG_SIZE
            if len(data) < _min:
                raise BlockSizeError(
                    f"Ciphertext too short: {len(data)} bytes "
                    f"(minimum {_min})"
                )
            signed, tag = data[:-TAG_SIZE], data[-TAG_SIZE:]
            iv, body = signed[:IV_SIZE], signed[IV_SIZE:]
        if not body or len(body) % BLOCK_BYTES:
            raise BlockSizeError(
                f"Ciphertext length {len(body)} is not a positive multiple "
                f"of the {BLOCK_BYTES}-byte block size"
            )
        if not self.fixed_iv:
            try:
                self._tag(signed).verify(tag)
            except InvalidSignature as err:
                raise TamperedCiphertextError(
                    "Authentication tag mismatch: ciphertext was modified "
                    "or encrypted with another key"
                ) from err
        return iv, body

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encrypt(self, value: Union[str, bytes]) -> bytes:
        """Encrypt ``value`` with AES-CBC and PKCS#7 padding.

        Args:
            value: Plaintext bytes, or text encoded as UTF-8.

        Returns:
            Ciphertext bytes; in random mode prefixed by the IV and
            followed by the HMAC tag.
        """
        data = _as_bytes(value, "encrypt")
        iv = self._key_material.iv if self.fixed_iv else secrets.token_bytes(IV_SIZE)
        padder = padding.PKCS7(BLOCK_SIZE).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = self._block_cipher(iv).encryptor()
        ct = encryptor.update(padded) + encryptor.finalize()
        if self.fixed_iv:
            return ct
        signed = iv + ct
        return signed + self._tag(signed).finalize()

    def decrypt(self, value: bytes) -> bytes:
        """Decrypt a ciphertext produced by ``encrypt`` with the same key.

        Args:
            value: Ciphertext bytes.

        Returns:
            Original plaintext bytes.

        Raises:
            BlockSizeError: If the ciphertext is not block aligned.
            TamperedCiphertextError: If the random-mode tag does not match.
            InvalidPaddingError: If the padding is invalid after decryption.
        """
        if isinstance(value, str):
            raise InvalidArgument("decrypt expects bytes, got str")
        data = _as_bytes(value, "decrypt")
        iv, body = self._split(data)
        decryptor = self._block_cipher(iv).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()
        unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as err:
            raise InvalidPaddingError(
                "Invalid padding: ciphertext was modified or "
                "encrypted with another key"
            ) from err

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def default(cls, config: Optional[CipherConfig] = None) -> "Cipher":
        """Build a cipher over the process key material.

        Args:
            config: Settings to use; read from environment when omitted.

        Returns:
            Cipher bound to the process-wide KeyMaterial.
        """
        config = config or CipherConfig.from_env()
        cipher = cls(get_key_material(), config)
        logger.debug("Default cipher built: %r", cipher)
        return cipher
