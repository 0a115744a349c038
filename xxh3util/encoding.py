"""UTF-8 encoding strategy for text hashing.

Text is hashed as its UTF-8 bytes.  How those bytes are materialized
depends on their size:

  1. Size the input exactly, encoding at most ``chunk_chars`` characters
     at a time.
  2. Small inputs (≤ ``threshold`` bytes) are encoded into a local
     ``bytes`` object that never outlives the call.
  3. Larger inputs are encoded chunk by chunk into a buffer leased from
     a :class:`~xxh3util.pool.BufferPool`, which is returned on every
     exit path.
  4. Only the exact range ``[0, size)`` is handed to the byte hasher.

The threshold only moves allocations around; the digest is the same on
both sides of it.

Python ``str`` can hold lone surrogate code points, which have no UTF-8
form.  Each one is encoded as U+FFFD, and the sizing pass counts it as
three bytes to match.
"""

from __future__ import annotations

import codecs

from xxh3util.hasher import xxh3_64
from xxh3util.pool import BufferPool, shared_pool
from xxh3util.types import ByteHasher

# Largest UTF-8 size encoded into a local buffer
DEFAULT_LOCAL_THRESHOLD: int = 256

# Characters encoded per step when filling a pooled buffer
DEFAULT_CHUNK_CHARS: int = 4096

# Codec error handler substituting U+FFFD for unencodable code points
ERROR_HANDLER: str = "xxh3util.replace"

MODE_LOCAL = "local"
MODE_POOLED = "pooled"

# UTF-8 bytes of U+FFFD, substituted for each unencodable code point
_REPLACEMENT = b"\xef\xbf\xbd"


def _replace_unencodable(exc: UnicodeError) -> tuple[bytes, int]:
    if isinstance(exc, UnicodeEncodeError):
        return _REPLACEMENT * (exc.end - exc.start), exc.end
    raise exc


codecs.register_error(ERROR_HANDLER, _replace_unencodable)


def encode_utf8(text: str) -> bytes:
    """Encode *text* as UTF-8, replacing lone surrogates with U+FFFD."""
    return text.encode("utf-8", ERROR_HANDLER)


def utf8_byte_count(text: str, chunk_chars: int = DEFAULT_CHUNK_CHARS) -> int:
    """Count the UTF-8 bytes of *text*.

    ASCII text is sized from its length.  Other text is encoded
    ``chunk_chars`` characters at a time and only the lengths are kept,
    so the transient allocation stays bounded.

    Args:
        text: Input text.
        chunk_chars: Characters encoded per sizing step.

    Returns:
        Exact length of ``encode_utf8(text)``.
    """
    if text.isascii():
        return len(text)
    return sum(
        len(encode_utf8(text[start : start + chunk_chars]))
        for start in range(0, len(text), chunk_chars)
    )


class EncodingStrategy:
    """Size-tiered UTF-8 encoder feeding a byte hasher.

    Usage::

        strategy = EncodingStrategy(threshold=256)
        digest = strategy.digest("hello world", xxh3_64)
    """

    def __init__(
        self,
        threshold: int = DEFAULT_LOCAL_THRESHOLD,
        *,
        pool: BufferPool | None = None,
        chunk_chars: int = DEFAULT_CHUNK_CHARS,
    ) -> None:
        if threshold < 0:
            raise ValueError("threshold must be >= 0")
        if chunk_chars < 1:
            raise ValueError("chunk_chars must be >= 1")
        self._threshold = threshold
        self._pool = pool
        self._chunk_chars = chunk_chars

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def chunk_chars(self) -> int:
        return self._chunk_chars

    @property
    def pool(self) -> BufferPool:
        """Pool used for large inputs (the shared pool unless one was given)."""
        if self._pool is None:
            self._pool = shared_pool()
        return self._pool

    def mode_for(self, byte_count: int) -> str:
        """Return ``"local"`` or ``"pooled"`` for an input of *byte_count* bytes."""
        return MODE_LOCAL if byte_count <= self._threshold else MODE_POOLED

    def digest(self, text: str, hasher: ByteHasher = xxh3_64) -> int:
        """Hash the UTF-8 encoding of *text*.

        Args:
            text: Input text.
            hasher: Byte hasher applied to the encoded range.

        Returns:
            The hasher's 64-bit digest.
        """
        byte_count = utf8_byte_count(text, self._chunk_chars)
        if byte_count <= self._threshold:
            return hasher(encode_utf8(text))

        with self.pool.lease(byte_count) as buf, memoryview(buf) as view:
            written = self._encode_into(text, view)
            if written != byte_count:
                raise RuntimeError(f"encoded {written} bytes, sized {byte_count}")
            return hasher(view[:byte_count])

    def _encode_into(self, text: str, view: memoryview) -> int:
        """Encode *text* into *view* in chunks; return bytes written."""
        step = self._chunk_chars
        pos = 0
        for start in range(0, len(text), step):
            chunk = encode_utf8(text[start : start + step])
            end = pos + len(chunk)
            view[pos:end] = chunk
            pos = end
        return pos
