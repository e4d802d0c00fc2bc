import pytest

from mask_udf.crypto import generate_key_material, Cipher, CipherConfig


@pytest.fixture
def key_material():
    """Fresh key material, independent from the process singleton."""
    return generate_key_material()


@pytest.fixture
def cipher(key_material):
    """Cipher in the default (random IV) mode."""
    return Cipher(key_material, CipherConfig(iv_mode="random"))


@pytest.fixture
def legacy_cipher(key_material):
    """Cipher reusing the process IV, as the legacy functions did."""
    return Cipher(key_material, CipherConfig(iv_mode="fixed"))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("MASK_UDF_IV_MODE", raising=False)
