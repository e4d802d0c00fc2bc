"""
Tests for the RIPEMD-160 digest.
"""

import pytest

from mask_udf import ripemd_160, AlgorithmUnavailable, InvalidArgument
from mask_udf.crypto import digest


class TestRipemd160:
    """Tests for hex rendering of the digest."""

    def test_known_digest(self):
        """Test a known value."""
        assert ripemd_160("canner-dev") == "2a9dc86c2b13606ffeef8b257f619edfadf7e1d6"

    def test_empty_input(self):
        """Test the digest of an empty string."""
        assert ripemd_160("") == "9c1185a5c5e9fc54612808977ee8f548b2258d31"

    def test_deterministic(self):
        """Test repeated calls give the same digest."""
        assert ripemd_160("same value") == ripemd_160("same value")

    def test_text_and_bytes_agree(self):
        """Test text is hashed as its UTF-8 encoding."""
        assert ripemd_160("débito") == ripemd_160("débito".encode("utf-8"))

    def test_lowercase_hex(self):
        """Test output only holds lowercase hex digits."""
        result = ripemd_160("Canner")
        assert result == result.lower()
        int(result, 16)

    def test_leading_zeros_are_dropped(self):
        """Test the unpadded form is the padded form without leading zeros."""
        for i in range(512):
            padded = ripemd_160(str(i), zero_pad=True)
            assert len(padded) == 40
            assert ripemd_160(str(i)) == (padded.lstrip("0") or "0")

    def test_invalid_type(self):
        """Test non-text values are rejected."""
        with pytest.raises(InvalidArgument):
            ripemd_160(42)


class TestDigestBackend:
    """Tests for a backend without RIPEMD-160."""

    @pytest.fixture
    def no_ripemd(self, monkeypatch):
        monkeypatch.setattr(digest, "RIPEMD160", None)

    def test_digest_unavailable(self, no_ripemd):
        """Test the digest reports a missing algorithm."""
        with pytest.raises(AlgorithmUnavailable) as exc:
            ripemd_160("canner-dev")
        assert exc.value.algorithm == "RIPEMD160"

    def test_ensure_available(self, no_ripemd):
        """Test the startup check reports a missing algorithm."""
        with pytest.raises(AlgorithmUnavailable):
            digest.ensure_available()
