"""Tests for the XXH3-64 byte hasher."""

from __future__ import annotations

import pytest
import xxhash

from xxh3util.hasher import UINT64_MAX, XXH3_64_EMPTY, xxh3_64
from xxh3util.types import ByteHasher


class TestXxh3_64:
    def test_matches_reference(self) -> None:
        data = b"hello world"
        assert xxh3_64(data) == xxhash.xxh3_64(data).intdigest()

    def test_empty_input(self) -> None:
        """Empty input hashes to the algorithm's defined value, not zero."""
        assert xxh3_64(b"") == XXH3_64_EMPTY
        assert XXH3_64_EMPTY == xxhash.xxh3_64_intdigest(b"")

    def test_buffer_types_agree(self) -> None:
        data = b"The quick brown fox jumps over the lazy dog"
        expected = xxh3_64(data)
        assert xxh3_64(bytearray(data)) == expected
        assert xxh3_64(memoryview(data)) == expected

    def test_memoryview_slice(self) -> None:
        buf = bytearray(b"abcdef" + b"\xff" * 10)
        assert xxh3_64(memoryview(buf)[:6]) == xxh3_64(b"abcdef")

    def test_fits_in_64_bits(self) -> None:
        assert 0 <= xxh3_64(b"some bytes") <= UINT64_MAX

    def test_deterministic(self) -> None:
        assert xxh3_64(b"repeat") == xxh3_64(b"repeat")

    def test_rejects_str(self) -> None:
        with pytest.raises(TypeError):
            xxh3_64("text")  # type: ignore[arg-type]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(xxh3_64, ByteHasher)
