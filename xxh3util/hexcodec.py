"""Canonical hex rendering and parsing of 64-bit digests.

A digest is written as exactly 16 lowercase hex characters, most
significant nibble first, zero-padded, with no ``0x`` prefix.

Parsing is strict: exactly 16 characters drawn from ``0-9a-f``.
Uppercase letters are rejected so that every accepted string is one
:func:`to_hex` could have produced.  ``int(text, 16)`` is not used
because it also accepts prefixes, underscores, whitespace and signs.
"""

from __future__ import annotations

from xxh3util.errors import MalformedDigestError
from xxh3util.hasher import UINT64_MAX

# Characters in a rendered digest
HEX_LENGTH: int = 16

_HEX_DIGITS = b"0123456789abcdef"
_NIBBLES: dict[str, int] = {ch: i for i, ch in enumerate(_HEX_DIGITS.decode())}


def to_hex(value: int) -> str:
    """Render a 64-bit digest as 16 lowercase hex characters.

    Args:
        value: Unsigned 64-bit integer.

    Returns:
        Fixed-width hex string, e.g. ``"00000000000000ff"`` for 255.

    Raises:
        ValueError: If *value* is outside ``[0, 2**64)``.
    """
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"value out of uint64 range: {value}")
    out = bytearray(HEX_LENGTH)
    for i in range(HEX_LENGTH - 1, -1, -1):
        out[i] = _HEX_DIGITS[value & 0xF]
        value >>= 4
    return out.decode("ascii")


def try_parse_hex(text: str) -> int | None:
    """Parse a 16-character lowercase hex digest.

    Args:
        text: Candidate digest.

    Returns:
        The digest value, or ``None`` if *text* is malformed.
    """
    if not isinstance(text, str) or len(text) != HEX_LENGTH:
        return None
    value = 0
    for ch in text:
        nibble = _NIBBLES.get(ch)
        if nibble is None:
            return None
        value = (value << 4) | nibble
    return value


def parse_hex(text: str) -> int:
    """Parse a hex digest, raising on malformed input.

    Raises:
        MalformedDigestError: If *text* is not 16 lowercase hex characters.
    """
    value = try_parse_hex(text)
    if value is None:
        raise MalformedDigestError(text)
    return value


def is_hex_digest(text: str) -> bool:
    """Return ``True`` if *text* is a well-formed hex digest."""
    return try_parse_hex(text) is not None
