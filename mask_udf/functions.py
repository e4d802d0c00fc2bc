"""
Scalar Functions — descriptors and entry points for SQL engine registration.

The host calls ``load_functions()`` once at startup. It verifies the
cryptographic backend and creates the process key material; if that fails
the error is raised there and no function gets registered.

Module-level ``encrypt``/``decrypt`` share one lazily built default cipher.
"""
import logging
import threading
from typing import Any, Callable, Optional
from collections.abc import Iterator

import orjson
from pydantic import BaseModel, Field

from .crypto.cipher import Cipher
from .crypto.config import CipherConfig
from .crypto.digest import ripemd_160
from .crypto.keys import initialize
from .masking import mask_column, mask_email

logger = logging.getLogger("mask_udf")

VARCHAR = "varchar"
VARBINARY = "varbinary"
BIGINT = "bigint"


class ScalarFunction(BaseModel):
    """Signature and handler of one SQL scalar function."""

    name: str
    description: str
    argument_types: list[str]
    return_type: str
    deterministic: bool = Field(default=True)
    handler: Callable[..., Any] = Field(exclude=True)

    model_config = {"frozen": True}

    def __call__(self, *args):
        return self.handler(*args)


class FunctionRegistry:
    """Read-only set of scalar functions keyed by SQL name."""

    def __init__(self, functions: list[ScalarFunction]):
        self._functions = {fn.name: fn for fn in functions}

    def __getitem__(self, name: str) -> ScalarFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise KeyError(f"Unknown scalar function: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:
        return f"<FunctionRegistry {sorted(self._functions)}>"

    def call(self, name: str, *args) -> Any:
        """Invoke function ``name`` with positional ``args``."""
        return self[name](*args)

    def manifest(self) -> bytes:
        """Return the function signatures as JSON, without handlers."""
        return orjson.dumps(
            [fn.model_dump() for fn in self._functions.values()]
        )


def _build_functions(cipher: Cipher) -> list[ScalarFunction]:
    return [
        ScalarFunction(
            name="ripemd_160",
            description="RipeMD160",
            argument_types=[VARCHAR],
            return_type=VARCHAR,
            handler=ripemd_160,
        ),
        ScalarFunction(
            name="mask_column",
            description="mask value in column",
            argument_types=[VARCHAR],
            return_type=VARCHAR,
            handler=mask_column,
        ),
        ScalarFunction(
            name="mask_email",
            description="mask email",
            argument_types=[VARCHAR, BIGINT],
            return_type=VARCHAR,
            handler=mask_email,
        ),
        ScalarFunction(
            name="encrypt",
            description="encrypt",
            argument_types=[VARCHAR],
            return_type=VARBINARY,
            # random IVs make the output differ between calls
            deterministic=cipher.fixed_iv,
            handler=cipher.encrypt,
        ),
        ScalarFunction(
            name="decrypt",
            description="decrypt",
            argument_types=[VARBINARY],
            return_type=VARCHAR,
            handler=cipher.decrypt,
        ),
    ]


def load_functions(config: Optional[CipherConfig] = None) -> FunctionRegistry:
    """Initialize the backend and return the scalar function registry.

    Args:
        config: Cipher settings; read from environment when omitted.

    Returns:
        Registry holding ripemd_160, mask_column, mask_email, encrypt
        and decrypt.

    Raises:
        AlgorithmUnavailable: If AES-CBC or RIPEMD-160 is missing.
        pydantic.ValidationError: If the environment holds an invalid setting.
    """
    config = config or CipherConfig.from_env()
    key_material = initialize()
    cipher = Cipher(key_material, config)
    registry = FunctionRegistry(_build_functions(cipher))
    logger.info(
        "Loaded %d scalar function(s) (iv_mode=%s)", len(registry), config.iv_mode,
    )
    return registry


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

_default_cipher: Optional[Cipher] = None
_lock = threading.Lock()


def default_cipher() -> Cipher:
    """Return the process default cipher, building it on first use."""
    global _default_cipher
    if _default_cipher is None:
        with _lock:
            if _default_cipher is None:
                _default_cipher = Cipher.default()
    return _default_cipher


def encrypt(value) -> bytes:
    """Encrypt text or bytes with the process default cipher."""
    return default_cipher().encrypt(value)


def decrypt(value: bytes) -> bytes:
    """Decrypt bytes produced by ``encrypt`` in this process."""
    return default_cipher().decrypt(value)
