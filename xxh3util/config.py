"""Configuration management for xxh3util.

Loads settings from ~/.xxh3util/config.toml with environment variable overrides.
The library functions never read this file; the CLI and
:meth:`~xxh3util.hashing.HashAdapter.from_config` do.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import TypeVar

import structlog

from xxh3util.encoding import DEFAULT_CHUNK_CHARS, DEFAULT_LOCAL_THRESHOLD
from xxh3util.errors import ERRORS
from xxh3util.pool import DEFAULT_MAX_BUFFER_SIZE, DEFAULT_MAX_BUFFERS_PER_BUCKET

logger = structlog.get_logger()

T = TypeVar("T")

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".xxh3util"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable naming an alternate config file
CONFIG_PATH_ENV = "XXH3UTIL_CONFIG"


@dataclass(frozen=True)
class EncodingConfig:
    """Text encoding strategy settings."""

    local_threshold: int = DEFAULT_LOCAL_THRESHOLD  # bytes
    chunk_chars: int = DEFAULT_CHUNK_CHARS


@dataclass(frozen=True)
class PoolConfig:
    """Buffer pool settings."""

    max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE  # bytes
    max_buffers_per_bucket: int = DEFAULT_MAX_BUFFERS_PER_BUCKET
    clear_on_return: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """structlog output settings."""

    level: str = "warning"
    format: str = "console"


@dataclass(frozen=True)
class Config:
    """Root configuration container."""

    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env_override(section: str, key: str) -> str | None:
    """Check for XXH3UTIL_{SECTION}_{KEY} environment variable."""
    env_key = f"XXH3UTIL_{section.upper()}_{key.upper()}"
    return os.environ.get(env_key)


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string value to the target type."""
    if target_type is bool:
        return value.lower() in ("true", "1", "yes")
    if target_type is int:
        return int(value)
    return value


# Configuration value constraints
_VALUE_CONSTRAINTS: dict[str, tuple[int, int]] = {
    "local_threshold": (0, 1 << 20),
    "chunk_chars": (64, 1 << 20),
    "max_buffer_size": (16, 1 << 30),
    "max_buffers_per_bucket": (1, 10000),
}

# Allowed values for string enums
_ALLOWED_VALUES: dict[str, frozenset[str]] = {
    "level": frozenset({"debug", "info", "warning", "error", "critical"}),
    "format": frozenset({"console", "json"}),
}


def _validate_value(key: str, value: object) -> object:
    """Validate a config value against known constraints."""
    if (
        key in _VALUE_CONSTRAINTS
        and isinstance(value, int)
        and not isinstance(value, bool)
    ):
        lo, hi = _VALUE_CONSTRAINTS[key]
        if not (lo <= value <= hi):
            logger.warning(
                "config_value_out_of_range",
                code=ERRORS["E004"].code,
                key=key,
                value=value,
                min=lo,
                max=hi,
            )
            # Clamp to valid range
            return max(lo, min(hi, value))
    if key in _ALLOWED_VALUES and isinstance(value, str):
        if value.lower() not in _ALLOWED_VALUES[key]:
            logger.warning(
                "config_invalid_value",
                code=ERRORS["E004"].code,
                key=key,
                value=value,
                allowed=sorted(_ALLOWED_VALUES[key]),
            )
            return None  # Will use default
        return value.lower()
    return value


def _build_section(
    cls: type[T], toml_section: dict[str, object], section_name: str
) -> T:
    """Build a dataclass instance from TOML data + env overrides."""
    kwargs: dict[str, object] = {}
    for f in dataclass_fields(cls):  # type: ignore[arg-type]
        # TOML value
        raw = toml_section.get(f.name)
        # env override
        env_val = _env_override(section_name, f.name)
        if env_val is not None:
            try:
                raw = _coerce(env_val, type(f.default))
            except ValueError:
                logger.warning(
                    "config_invalid_env_value",
                    section=section_name,
                    key=f.name,
                    value=env_val,
                )
                continue
        if raw is not None:
            validated = _validate_value(f.name, raw)
            if validated is not None:
                kwargs[f.name] = validated
    return cls(**kwargs)


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Pick the config file: explicit path > $XXH3UTIL_CONFIG > default."""
    if config_path is not None:
        return config_path
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from TOML file with environment variable overrides.

    Priority: env vars > config.toml > defaults.

    Args:
        config_path: Path to config file. Defaults to ~/.xxh3util/config.toml.

    Returns:
        Populated Config instance.
    """
    path = resolve_config_path(config_path)
    raw: dict[str, object] = {}

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        logger.info("config_loaded", path=str(path))
    else:
        logger.debug("config_default", path=str(path), reason="file not found")

    encoding = _build_section(EncodingConfig, raw.get("encoding", {}), "encoding")  # type: ignore[arg-type]
    pool = _build_section(PoolConfig, raw.get("pool", {}), "pool")  # type: ignore[arg-type]
    logging_cfg = _build_section(LoggingConfig, raw.get("logging", {}), "logging")  # type: ignore[arg-type]

    return Config(encoding=encoding, pool=pool, logging=logging_cfg)
