"""CLI commands: hash, verify."""

from __future__ import annotations

import sys

import click

from xxh3util.config import Config
from xxh3util.errors import MalformedDigestError, format_error
from xxh3util.hashing import HashAdapter
from xxh3util.hexcodec import parse_hex, to_hex


@click.command("hash")
@click.argument("texts", nargs=-1)
@click.option("--stdin", "from_stdin", is_flag=True, help="Hash standard input")
@click.option(
    "--int", "as_int", is_flag=True, default=False, help="Print decimal digests"
)
@click.pass_obj
def hash_cmd(
    config: Config, texts: tuple[str, ...], from_stdin: bool, as_int: bool
) -> None:
    """Print the XXH3-64 digest of each TEXT."""
    if not texts and not from_stdin:
        raise click.UsageError("Provide TEXT arguments or --stdin")

    adapter = HashAdapter.from_config(config)

    if from_stdin:
        data = sys.stdin.read()
        digest = adapter.hash_to_int(data)
        click.echo(str(digest) if as_int else to_hex(digest))

    for text in texts:
        if as_int:
            click.echo(f"{adapter.hash_to_int(text)}  {text}")
        else:
            click.echo(f"{adapter.hash_text(text)}  {text}")


@click.command("verify")
@click.argument("text")
@click.argument("expected")
@click.pass_obj
def verify_cmd(config: Config, text: str, expected: str) -> None:
    """Check that TEXT hashes to the hex digest EXPECTED.

    Exits 0 on a match and 1 otherwise.  A malformed EXPECTED is
    reported with its error code.
    """
    try:
        expected_value = parse_hex(expected)
    except MalformedDigestError as exc:
        raise click.ClickException(format_error("E002")) from exc

    adapter = HashAdapter.from_config(config)
    if adapter.hash_to_int(text) == expected_value:
        click.echo("OK")
        return

    click.echo("MISMATCH")
    raise SystemExit(1)
