"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from tests.helpers import RecordingHasher
from xxh3util.pool import BufferPool


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep XXH3UTIL_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("XXH3UTIL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pool() -> BufferPool:
    """A private pool so tests can inspect its counters."""
    return BufferPool()


@pytest.fixture
def recording_hasher() -> RecordingHasher:
    return RecordingHasher()


@pytest.fixture
def missing_config(tmp_path: Path) -> Path:
    """Path to a config file that does not exist."""
    return tmp_path / "nonexistent.toml"
