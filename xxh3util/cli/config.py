"""CLI commands: config show."""

from __future__ import annotations

from dataclasses import asdict

import click

from xxh3util.config import Config


@click.group("config")
def config_group() -> None:
    """Configuration management."""


@config_group.command("show")
@click.pass_obj
def config_show(config: Config) -> None:
    """Show current configuration."""
    cfg = asdict(config)
    for section_name, section in cfg.items():
        click.echo(f"[{section_name}]")
        for key, value in section.items():
            click.echo(f"  {key} = {value}")
        click.echo()
