"""Shared Protocol types.

Structural interfaces (PEP 544) for the pieces a caller may swap out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Buffer


@runtime_checkable
class ByteHasher(Protocol):
    """Structural interface for an unseeded 64-bit byte hasher.

    Any callable taking a contiguous bytes-like object and returning an
    unsigned 64-bit ``int`` satisfies this protocol, including
    :func:`xxh3util.hasher.xxh3_64` and test doubles.
    """

    def __call__(self, data: Buffer) -> int: ...  # noqa: D102
