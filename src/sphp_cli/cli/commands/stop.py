"""``sphp stop`` command."""

from __future__ import annotations

import typer

from sphp_cli.cli import helpers
from sphp_cli.core.exceptions import SwitcherError
from sphp_cli.switcher import stop_all_services


def stop() -> None:
    """Stop every running PHP service."""
    host = helpers.get_host()
    helpers.require_package_manager(host)
    reporter = helpers.get_reporter()
    try:
        stop_all_services(host, reporter)
    except SwitcherError as exc:
        reporter.error(str(exc))
        raise typer.Exit(1)


__all__ = ["stop"]
