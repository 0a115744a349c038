"""xxh3util — XXH3-64 hashing for text with canonical hex digests."""

from __future__ import annotations

__version__ = "0.1.0"

from xxh3util.errors import MalformedDigestError, MissingInputError  # noqa: E402
from xxh3util.hashing import (  # noqa: E402
    HashAdapter,
    default_adapter,
    hash_bytes_to_int,
    hash_text,
    hash_to_int,
    verify,
)
from xxh3util.hexcodec import parse_hex, to_hex, try_parse_hex  # noqa: E402

__all__ = [
    "HashAdapter",
    "MalformedDigestError",
    "MissingInputError",
    "__version__",
    "default_adapter",
    "hash_bytes_to_int",
    "hash_text",
    "hash_to_int",
    "parse_hex",
    "to_hex",
    "try_parse_hex",
    "verify",
]
