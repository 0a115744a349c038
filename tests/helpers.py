"""Test doubles shared across test modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xxh3util.hasher import xxh3_64

if TYPE_CHECKING:
    from collections.abc import Buffer


class RecordingHasher:
    """Byte hasher double that records every input it receives."""

    def __init__(self) -> None:
        self.calls: list[bytes] = []

    def __call__(self, data: Buffer) -> int:
        self.calls.append(bytes(data))
        return xxh3_64(data)
