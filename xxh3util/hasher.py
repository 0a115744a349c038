"""XXH3-64 byte hashing.

Thin leaf over :mod:`xxhash`.  Every text entry point in the package ends
here once its input has been UTF-8 encoded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import xxhash

if TYPE_CHECKING:
    from collections.abc import Buffer

# Digest of a zero-length input (unseeded XXH3-64)
XXH3_64_EMPTY: int = 0x2D06800538D394C2

# Largest representable digest
UINT64_MAX: int = (1 << 64) - 1


def xxh3_64(data: Buffer) -> int:
    """Compute the unseeded XXH3-64 digest of *data*.

    Args:
        data: Contiguous bytes-like object (``bytes``, ``bytearray``,
            ``memoryview`` slice, ...).  May be empty.

    Returns:
        Unsigned 64-bit digest.

    Raises:
        TypeError: If *data* is a ``str``; text must be encoded first.
    """
    if isinstance(data, str):
        raise TypeError("xxh3_64 takes bytes-like data, not str")
    return xxhash.xxh3_64_intdigest(data)
