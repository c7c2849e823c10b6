"""``sphp status`` and ``sphp list`` commands."""

from __future__ import annotations

import typer

from sphp_cli.cli import helpers
from sphp_cli.core.exceptions import SwitcherError


def show_status() -> None:
    """Print the active version, the installed versions and a usage hint."""
    host = helpers.get_host()
    helpers.require_package_manager(host)
    try:
        helpers.show_active_version(host)
        helpers.console.print()
        helpers.render_installed(host)
    except SwitcherError as exc:
        helpers.get_reporter().error(str(exc))
        raise typer.Exit(1)
    helpers.console.print()
    helpers.console.print("[dim]Run 'sphp switch VERSION' to change versions, 'sphp help' for usage.[/dim]")


def status() -> None:
    """Show the active PHP version and installed versions."""
    show_status()


def list_versions() -> None:
    """List all installed PHP versions."""
    host = helpers.get_host()
    helpers.require_package_manager(host)
    try:
        helpers.render_installed(host)
    except SwitcherError as exc:
        helpers.get_reporter().error(str(exc))
        raise typer.Exit(1)


__all__ = ["list_versions", "show_status", "status"]
