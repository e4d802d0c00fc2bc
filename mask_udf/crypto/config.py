"""
Cipher Configuration — validated settings read from the environment.

Reads the IV mode from:
    MASK_UDF_IV_MODE = random | fixed

``random`` prepends a fresh IV to every ciphertext. ``fixed`` reuses the
process IV for every call and emits the bare ciphertext; it exists for
compatibility with values produced by the legacy engine functions.

Security Note:
    Never log key material. Only log modes and key sizes.
"""
import os
import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("mask_udf")

IV_MODE_ENV = "MASK_UDF_IV_MODE"
IV_MODE_RANDOM = "random"
IV_MODE_FIXED = "fixed"
IV_MODES = (IV_MODE_RANDOM, IV_MODE_FIXED)


def get_iv_mode() -> str:
    """Read the IV mode from MASK_UDF_IV_MODE, defaulting to ``random``.

    Returns:
        Lowercased IV mode string (not yet validated).
    """
    return os.environ.get(IV_MODE_ENV, IV_MODE_RANDOM).strip().lower()


class CipherConfig(BaseModel):
    """Validated cipher configuration."""

    iv_mode: str = Field(default=IV_MODE_RANDOM)

    model_config = {"frozen": True}

    @field_validator("iv_mode")
    @classmethod
    def validate_iv_mode(cls, v: str) -> str:
        """Validate IV mode is supported."""
        if v not in IV_MODES:
            raise ValueError(
                f"Unsupported IV mode: {v} (expected one of {', '.join(IV_MODES)})"
            )
        return v

    @property
    def fixed_iv(self) -> bool:
        return self.iv_mode == IV_MODE_FIXED

    @classmethod
    def from_env(cls) -> "CipherConfig":
        """Create CipherConfig by loading values from environment.

        Returns:
            Populated CipherConfig instance.
        """
        iv_mode = get_iv_mode()
        logger.debug("Cipher IV mode from environment: %s", iv_mode)
        return cls(iv_mode=iv_mode)
