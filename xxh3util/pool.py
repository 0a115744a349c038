"""Reusable byte-buffer pool.

Large text inputs are encoded into a leased ``bytearray`` instead of a
fresh allocation per call.  Buffers are grouped into power-of-two size
buckets; a lease returns a buffer at least as large as requested, and
only the first *n* bytes are meaningful to the lessee.

Thread-safe via a single lock.  The lock is held only while a buffer
moves in or out of a bucket, never while the lessee uses it.

Usage::

    pool = shared_pool()
    with pool.lease(4096) as buf:
        ...  # use buf[:4096]
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from xxh3util.errors import ERRORS

logger = structlog.get_logger()

# Smallest bucket size in bytes
MIN_BUFFER_SIZE: int = 16

# Largest pooled buffer; bigger requests get an unretained buffer
DEFAULT_MAX_BUFFER_SIZE: int = 1 << 20

# Retained buffers per bucket
DEFAULT_MAX_BUFFERS_PER_BUCKET: int = 50


@dataclass
class PoolStats:
    """Pool counters."""

    rents: int = 0
    returns: int = 0
    allocations: int = 0
    discards: int = 0

    @property
    def outstanding(self) -> int:
        """Buffers currently leased and not yet returned."""
        return self.rents - self.returns

    def to_dict(self) -> dict[str, int]:
        return {
            "rents": self.rents,
            "returns": self.returns,
            "allocations": self.allocations,
            "discards": self.discards,
            "outstanding": self.outstanding,
        }


def bucket_size(min_size: int) -> int:
    """Round *min_size* up to the bucket size that serves it."""
    if min_size <= MIN_BUFFER_SIZE:
        return MIN_BUFFER_SIZE
    return 1 << (min_size - 1).bit_length()


class BufferPool:
    """Thread-safe pool of reusable ``bytearray`` buffers.

    Attributes:
        max_buffer_size: Largest bucket size; must be a power of two.
        max_buffers_per_bucket: Buffers kept per bucket once returned.
        clear_on_return: Zero buffers as they come back.
    """

    def __init__(
        self,
        *,
        max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
        max_buffers_per_bucket: int = DEFAULT_MAX_BUFFERS_PER_BUCKET,
        clear_on_return: bool = False,
    ) -> None:
        if max_buffer_size < MIN_BUFFER_SIZE:
            raise ValueError(f"max_buffer_size must be >= {MIN_BUFFER_SIZE}")
        if max_buffers_per_bucket < 1:
            raise ValueError("max_buffers_per_bucket must be >= 1")
        self._max_buffer_size = bucket_size(max_buffer_size)
        self._max_per_bucket = max_buffers_per_bucket
        self._clear_on_return = clear_on_return
        self._buckets: dict[int, list[bytearray]] = {}
        self._lock = threading.Lock()
        self._stats = PoolStats()

    @property
    def max_buffer_size(self) -> int:
        return self._max_buffer_size

    @property
    def max_buffers_per_bucket(self) -> int:
        return self._max_per_bucket

    @property
    def clear_on_return(self) -> bool:
        return self._clear_on_return

    @property
    def stats(self) -> PoolStats:
        return self._stats

    @property
    def size(self) -> int:
        """Number of idle buffers held by the pool."""
        with self._lock:
            return sum(len(b) for b in self._buckets.values())

    def rent(self, min_size: int) -> bytearray:
        """Take a buffer of at least *min_size* bytes.

        The caller owns the buffer until it is handed back with
        :meth:`give_back`.  Contents are unspecified.

        Args:
            min_size: Minimum required length in bytes.

        Returns:
            A ``bytearray`` with ``len(buf) >= min_size``.
        """
        if min_size < 0:
            raise ValueError("min_size must be >= 0")
        size = bucket_size(min_size)
        with self._lock:
            self._stats.rents += 1
            if size <= self._max_buffer_size:
                bucket = self._buckets.get(size)
                if bucket:
                    return bucket.pop()
            self._stats.allocations += 1
        if size > self._max_buffer_size:
            # Never retained, so sized exactly
            return bytearray(min_size)
        return bytearray(size)

    def give_back(self, buf: bytearray) -> None:
        """Return a leased buffer to the pool.

        Args:
            buf: A buffer obtained from :meth:`rent` on this pool.

        Raises:
            ValueError: If *buf* could not have come from this pool or
                is already sitting in it.
        """
        size = len(buf)
        if size > self._max_buffer_size:
            with self._lock:
                self._stats.returns += 1
                self._stats.discards += 1
            return
        if size < MIN_BUFFER_SIZE or size & (size - 1):
            raise ValueError(ERRORS["E005"].message)
        if self._clear_on_return:
            buf[:] = bytes(size)

        with self._lock:
            bucket = self._buckets.get(size)
            if bucket is None:
                bucket = self._buckets[size] = []
                logger.debug("pool_bucket_created", size=size)
            elif any(b is buf for b in bucket):
                raise ValueError(ERRORS["E005"].message)

            self._stats.returns += 1
            if len(bucket) >= self._max_per_bucket:
                self._stats.discards += 1
                logger.debug("pool_buffer_discarded", size=size)
                return
            bucket.append(buf)

    @contextmanager
    def lease(self, min_size: int) -> Iterator[bytearray]:
        """Lease a buffer for the duration of a ``with`` block.

        The buffer is returned on every exit path, including exceptions
        raised inside the block.
        """
        buf = self.rent(min_size)
        try:
            yield buf
        finally:
            self.give_back(buf)

    def clear(self) -> None:
        """Drop every idle buffer."""
        with self._lock:
            self._buckets.clear()

    def get_stats(self) -> dict[str, int]:
        """Return pool statistics."""
        with self._lock:
            stats = self._stats.to_dict()
            stats["idle_buffers"] = sum(len(b) for b in self._buckets.values())
            return stats


_shared_pool: BufferPool | None = None
_shared_lock = threading.Lock()


def shared_pool() -> BufferPool:
    """Return the process-wide pool, creating it on first use."""
    global _shared_pool
    if _shared_pool is None:
        with _shared_lock:
            if _shared_pool is None:
                _shared_pool = BufferPool()
    return _shared_pool
