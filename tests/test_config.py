"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from xxh3util.config import (
    DEFAULT_CONFIG_PATH,
    Config,
    load_config,
    resolve_config_path,
)


def test_default_config() -> None:
    """Default config should match the library defaults."""
    config = Config()
    assert config.encoding.local_threshold == 256
    assert config.encoding.chunk_chars == 4096
    assert config.pool.max_buffer_size == 1 << 20
    assert config.pool.max_buffers_per_bucket == 50
    assert config.pool.clear_on_return is False
    assert config.logging.level == "warning"
    assert config.logging.format == "console"


def test_load_config_no_file(missing_config: Path) -> None:
    """Loading config without a file should return defaults."""
    assert load_config(missing_config) == Config()


def test_load_config_from_toml(tmp_path: Path) -> None:
    """Loading config from a TOML file should override defaults."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[encoding]
local_threshold = 512

[pool]
max_buffers_per_bucket = 8
clear_on_return = true

[logging]
format = "json"
""")
    config = load_config(config_file)
    assert config.encoding.local_threshold == 512
    assert config.pool.max_buffers_per_bucket == 8
    assert config.pool.clear_on_return is True
    assert config.logging.format == "json"
    # Unset values remain default
    assert config.encoding.chunk_chars == 4096
    assert config.logging.level == "warning"


def test_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should override TOML values."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("[encoding]\nlocal_threshold = 512\n")

    monkeypatch.setenv("XXH3UTIL_ENCODING_LOCAL_THRESHOLD", "1024")
    monkeypatch.setenv("XXH3UTIL_POOL_CLEAR_ON_RETURN", "yes")
    config = load_config(config_file)
    assert config.encoding.local_threshold == 1024
    assert config.pool.clear_on_return is True


def test_env_invalid_int_ignored(
    missing_config: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("XXH3UTIL_ENCODING_CHUNK_CHARS", "lots")
    assert load_config(missing_config).encoding.chunk_chars == 4096


def test_values_clamped(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        "[encoding]\nlocal_threshold = -5\nchunk_chars = 1\n"
        "[pool]\nmax_buffers_per_bucket = 0\n"
    )
    config = load_config(config_file)
    assert config.encoding.local_threshold == 0
    assert config.encoding.chunk_chars == 64
    assert config.pool.max_buffers_per_bucket == 1


def test_invalid_enum_uses_default(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text('[logging]\nlevel = "verbose"\nformat = "XML"\n')
    config = load_config(config_file)
    assert config.logging.level == "warning"
    assert config.logging.format == "console"


def test_invalid_values_logged_with_error_code(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        '[encoding]\nlocal_threshold = -5\n[logging]\nformat = "XML"\n'
    )
    with capture_logs() as logs:
        load_config(config_file)
    events = {entry["event"]: entry for entry in logs}
    assert events["config_value_out_of_range"]["code"] == "XXH3UTIL_E004"
    assert events["config_invalid_value"]["code"] == "XXH3UTIL_E004"


def test_enum_case_normalized(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text('[logging]\nlevel = "DEBUG"\n')
    assert load_config(config_file).logging.level == "debug"


def test_resolve_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    explicit = tmp_path / "explicit.toml"
    assert resolve_config_path(explicit) == explicit
    assert resolve_config_path() == DEFAULT_CONFIG_PATH

    env_path = tmp_path / "from_env.toml"
    env_path.write_text("[encoding]\nlocal_threshold = 64\n")
    monkeypatch.setenv("XXH3UTIL_CONFIG", str(env_path))
    assert resolve_config_path() == env_path
    assert load_config().encoding.local_threshold == 64
