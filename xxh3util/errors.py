"""Structured error codes and exception types.

Two failure kinds reach callers: a required argument was ``None``
(:class:`MissingInputError`) and, only through :func:`~xxh3util.hexcodec.parse_hex`,
a malformed hex digest (:class:`MalformedDigestError`).  ``verify`` never
raises for a malformed digest; it reports ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error category classification."""

    INPUT = "INPUT"
    FORMAT = "FORMAT"
    CONFIG = "CONFIG"
    POOL = "POOL"


@dataclass(frozen=True)
class ErrorInfo:
    """Structured error with code, message, and resolution."""

    code: str
    category: ErrorCategory
    message: str
    resolution: str

    def to_dict(self) -> dict[str, object]:
        return {
            "error": {
                "code": self.code,
                "category": self.category.value,
                "message": self.message,
                "resolution": self.resolution,
            },
        }

    def format(self) -> str:
        return f"Error [{self.code}]: {self.message}\nResolution: {self.resolution}"


# ── Pre-defined error catalog ─────────────────────────────────────

ERRORS: dict[str, ErrorInfo] = {
    "E001": ErrorInfo(
        code="XXH3UTIL_E001",
        category=ErrorCategory.INPUT,
        message="Required input is missing (None)",
        resolution="Pass a str value; use an empty string to hash empty input",
    ),
    "E002": ErrorInfo(
        code="XXH3UTIL_E002",
        category=ErrorCategory.FORMAT,
        message="Expected hash is not a 16-character lowercase hex digest",
        resolution="Provide exactly 16 characters from 0-9 and a-f",
    ),
    "E003": ErrorInfo(
        code="XXH3UTIL_E003",
        category=ErrorCategory.INPUT,
        message="Input has the wrong type",
        resolution=(
            "Text operations take str; use hash_bytes_to_int for bytes-like data"
        ),
    ),
    "E004": ErrorInfo(
        code="XXH3UTIL_E004",
        category=ErrorCategory.CONFIG,
        message="Invalid configuration value",
        resolution=(
            "Check config.toml for valid values. Run 'xxh3util config show' to review."
        ),
    ),
    "E005": ErrorInfo(
        code="XXH3UTIL_E005",
        category=ErrorCategory.POOL,
        message="Buffer was not leased from this pool or was already returned",
        resolution="Return each leased buffer exactly once to the pool it came from",
    ),
}


def get_error(code: str) -> ErrorInfo | None:
    """Look up an error by short code (e.g. 'E001')."""
    return ERRORS.get(code)


def format_error(code: str) -> str:
    """Format an error message by code."""
    err = ERRORS.get(code)
    if err is None:
        return f"Unknown error: {code}"
    return err.format()


class MissingInputError(TypeError):
    """A required argument was ``None``.

    This is a caller contract violation and is never caught internally.

    Attributes:
        argument: Name of the offending parameter.
    """

    info = ERRORS["E001"]

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"{argument}: {self.info.message}")


class MalformedDigestError(ValueError):
    """Text is not a valid 16-character lowercase hex digest."""

    info = ERRORS["E002"]

    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"{text!r}: {self.info.message}")
