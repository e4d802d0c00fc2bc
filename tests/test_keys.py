"""
Tests for process key material.
"""
import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from mask_udf import AlgorithmUnavailable
from mask_udf.crypto import digest, keys
from mask_udf.crypto.keys import (
    KeyMaterial,
    generate_key_material,
    get_key_material,
    initialize,
)


@pytest.fixture
def fresh_singleton(monkeypatch):
    """Start from an uninitialized process singleton."""
    monkeypatch.setattr(keys, "_key_material", None)


class TestGenerateKeyMaterial:
    """Tests for key and IV generation."""

    def test_sizes(self, key_material):
        """Test key is AES-192 and IV is one block."""
        assert len(key_material.key) == 24
        assert len(key_material.iv) == 16
        assert key_material.key_bits == 192

    def test_values_are_random(self):
        """Test two generations never share key or IV."""
        first, second = generate_key_material(), generate_key_material()
        assert first.key != second.key
        assert first.iv != second.iv

    def test_immutable(self, key_material):
        """Test key material cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            key_material.key = b"\x00" * 24

    def test_repr_hides_material(self, key_material):
        """Test repr shows only the key size."""
        assert repr(key_material) == "<KeyMaterial AES-192>"
        assert key_material.iv.hex() not in repr(key_material)


class TestProcessSingleton:
    """Tests for one-time initialization."""

    def test_initialize_is_idempotent(self, fresh_singleton):
        """Test repeated initialization returns the same instance."""
        assert initialize() is initialize()

    def test_get_initializes_on_first_use(self, fresh_singleton):
        """Test get_key_material creates the singleton lazily."""
        material = get_key_material()
        assert isinstance(material, KeyMaterial)
        assert keys._key_material is material

    def test_concurrent_first_use(self, fresh_singleton):
        """Test concurrent first use yields a single instance."""
        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: initialize(), range(64)))
        assert all(result is results[0] for result in results)

    def test_failure_leaves_singleton_unset(self, fresh_singleton, monkeypatch):
        """Test a missing hash algorithm aborts initialization."""
        def _unavailable():
            raise AlgorithmUnavailable("RIPEMD160")
        monkeypatch.setattr(digest, "ensure_available", _unavailable)
        with pytest.raises(AlgorithmUnavailable):
            initialize()
        assert keys._key_material is None


class TestCipherBackend:
    """Tests for a backend without AES-CBC."""

    @pytest.fixture
    def no_aes(self, monkeypatch):
        def _unsupported(algorithm, mode):
            raise UnsupportedAlgorithm("AES-CBC disabled")
        monkeypatch.setattr(keys, "Cipher", _unsupported)

    def test_generate_key_material(self, no_aes):
        """Test generation reports the missing cipher."""
        with pytest.raises(AlgorithmUnavailable) as exc:
            generate_key_material()
        assert exc.value.algorithm == "AES-192-CBC"
        assert isinstance(exc.value.__cause__, UnsupportedAlgorithm)

    def test_initialize_leaves_singleton_unset(self, fresh_singleton, no_aes):
        """Test startup fails and no key material is kept."""
        with pytest.raises(AlgorithmUnavailable):
            initialize()
        assert keys._key_material is None
