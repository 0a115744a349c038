"""Text and byte hashing with XXH3-64.

Public entry points of the package.  All text callers should import from
here instead of calling :mod:`xxhash` directly, so that text is always
UTF-8 encoded the same way and digests are always rendered in the same
canonical form.

Usage::

    digest = hash_text("hello world")      # 16 lowercase hex chars
    assert verify("hello world", digest)
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from xxh3util.encoding import (
    DEFAULT_CHUNK_CHARS,
    DEFAULT_LOCAL_THRESHOLD,
    EncodingStrategy,
)
from xxh3util.errors import ERRORS, MissingInputError
from xxh3util.hasher import xxh3_64
from xxh3util.hexcodec import to_hex, try_parse_hex
from xxh3util.pool import BufferPool
from xxh3util.types import ByteHasher

if TYPE_CHECKING:
    from collections.abc import Buffer

    from xxh3util.config import Config


def _require_text(value: object, argument: str) -> str:
    """Reject ``None`` and non-``str`` arguments at the API boundary."""
    if value is None:
        raise MissingInputError(argument)
    if not isinstance(value, str):
        raise TypeError(
            f"{argument}: {ERRORS['E003'].message} "
            f"(expected str, got {type(value).__name__})"
        )
    return value


class HashAdapter:
    """XXH3-64 hashing over text, with hex output and verification.

    Attributes:
        threshold: Largest UTF-8 size (bytes) hashed from a local buffer;
            larger inputs go through the buffer pool.
    """

    def __init__(
        self,
        threshold: int = DEFAULT_LOCAL_THRESHOLD,
        *,
        pool: BufferPool | None = None,
        hasher: ByteHasher = xxh3_64,
        chunk_chars: int = DEFAULT_CHUNK_CHARS,
    ) -> None:
        self._strategy = EncodingStrategy(
            threshold, pool=pool, chunk_chars=chunk_chars
        )
        self._hasher = hasher

    @classmethod
    def from_config(cls, config: Config) -> HashAdapter:
        """Build an adapter with its own pool from *config*."""
        pool = BufferPool(
            max_buffer_size=config.pool.max_buffer_size,
            max_buffers_per_bucket=config.pool.max_buffers_per_bucket,
            clear_on_return=config.pool.clear_on_return,
        )
        return cls(
            config.encoding.local_threshold,
            pool=pool,
            chunk_chars=config.encoding.chunk_chars,
        )

    @property
    def threshold(self) -> int:
        return self._strategy.threshold

    @property
    def strategy(self) -> EncodingStrategy:
        return self._strategy

    @property
    def pool(self) -> BufferPool:
        return self._strategy.pool

    def hash_text(self, text: str) -> str:
        """Hash *text* and return its 16-character lowercase hex digest.

        Raises:
            MissingInputError: If *text* is ``None``.
        """
        return to_hex(self.hash_to_int(text))

    def hash_to_int(self, text: str) -> int:
        """Hash *text* and return the raw 64-bit digest.

        Raises:
            MissingInputError: If *text* is ``None``.
        """
        text = _require_text(text, "text")
        return self._strategy.digest(text, self._hasher)

    def hash_bytes_to_int(self, data: Buffer) -> int:
        """Hash bytes-like *data* directly, with no encoding step."""
        if data is None:
            raise MissingInputError("data")
        return self._hasher(data)

    def verify(self, text: str, expected_hash: str) -> bool:
        """Check whether *text* hashes to *expected_hash*.

        A malformed *expected_hash* is reported as ``False`` without
        hashing *text*.

        Args:
            text: Input text.
            expected_hash: 16-character lowercase hex digest.

        Returns:
            ``True`` on a match, ``False`` on mismatch or malformed digest.

        Raises:
            MissingInputError: If either argument is ``None``.
        """
        text = _require_text(text, "text")
        expected_hash = _require_text(expected_hash, "expected_hash")

        expected = try_parse_hex(expected_hash)
        if expected is None:
            return False
        return self._strategy.digest(text, self._hasher) == expected


_default_adapter: HashAdapter | None = None
_default_lock = threading.Lock()


def default_adapter() -> HashAdapter:
    """Return the process-wide adapter used by the module-level functions."""
    global _default_adapter
    if _default_adapter is None:
        with _default_lock:
            if _default_adapter is None:
                _default_adapter = HashAdapter()
    return _default_adapter


def hash_text(text: str) -> str:
    """Compute the lowercase 16-character hex XXH3-64 digest of *text*.

    Args:
        text: Input string (UTF-8 encoded internally).

    Returns:
        Hex digest.

    Raises:
        MissingInputError: If *text* is ``None``.
    """
    return default_adapter().hash_text(text)


def hash_to_int(text: str) -> int:
    """Compute the XXH3-64 digest of *text* as an unsigned integer."""
    return default_adapter().hash_to_int(text)


def hash_bytes_to_int(data: Buffer) -> int:
    """Compute the XXH3-64 digest of bytes-like *data*."""
    return default_adapter().hash_bytes_to_int(data)


def verify(text: str, expected_hash: str) -> bool:
    """Check whether *text* hashes to the hex digest *expected_hash*.

    Returns ``False`` (never raises) for a malformed *expected_hash*.

    Raises:
        MissingInputError: If either argument is ``None``.
    """
    return default_adapter().verify(text, expected_hash)
