"""xxh3util CLI — Click command group and sub-commands.

- ``hash`` — ``hash``, ``verify``
- ``config`` — ``config show``
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import structlog

from xxh3util import __version__
from xxh3util.config import LoggingConfig, load_config


def configure_logging(settings: LoggingConfig) -> None:
    """Configure structlog once at CLI entry."""
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if settings.format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.level.upper()]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group()
@click.version_option(version=__version__, prog_name="xxh3util")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.xxh3util/config.toml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """xxh3util — XXH3-64 text hashing and digest verification."""
    configure_logging(LoggingConfig())
    config = load_config(config_path)
    configure_logging(config.logging)
    ctx.obj = config


# Register sub-command modules
from xxh3util.cli.config import config_group  # noqa: E402
from xxh3util.cli.hash import hash_cmd, verify_cmd  # noqa: E402

cli.add_command(hash_cmd)
cli.add_command(verify_cmd)
cli.add_command(config_group)
