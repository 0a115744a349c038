"""xxh3util CLI entry point.

Delegates to ``xxh3util.cli`` which houses all Click commands, so that
``python -m xxh3util`` and the ``xxh3util`` console script both resolve
here.
"""

from __future__ import annotations

from xxh3util.cli import cli


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
