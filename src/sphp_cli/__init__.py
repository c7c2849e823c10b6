#!/usr/bin/env python3
"""
sphp - switch between Homebrew-installed PHP versions.

Usage:
    sphp                    Show the active version and installed versions
    sphp list               List installed PHP versions
    sphp switch 8.1         Switch to PHP 8.1 (also: sphp 8.1)
    sphp stop               Stop all running PHP services
"""

from __future__ import annotations

import click
import typer
from typer.core import TyperGroup

from sphp_cli.cli import helpers
from sphp_cli.cli.commands import register_commands, show_status
from sphp_cli.core.versions import is_version_string

__version__ = "1.0.0"

EPILOG = """\
Examples:

  sphp list               # Show installed PHP versions

  sphp switch 8.1         # Switch to PHP 8.1

  sphp 7.4                # Switch to PHP 7.4

  sphp stop               # Stop every running PHP service

Requirements: Homebrew and at least one PHP version installed via
Homebrew (brew install php@VERSION).
"""


class SwitcherGroup(TyperGroup):
    """Route ``sphp X.Y`` to ``switch`` and fail unknown commands with exit code 1."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and is_version_string(args[0]):
            args = ["switch", *args]
        elif args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            helpers.get_reporter().error(f"Unknown command: {args[0]}")
            click.echo("")
            click.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="sphp",
    help="Switch between PHP versions installed with Homebrew.",
    epilog=EPILOG,
    add_completion=False,
    invoke_without_command=True,
    cls=SwitcherGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Switch between PHP versions installed with Homebrew."""
    helpers.configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        show_status()


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this help message."""
    parent = ctx.parent or ctx
    click.echo(parent.get_help())


register_commands(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
