"""CLI command modules for sphp."""

from __future__ import annotations

import typer

from .config_cmd import config
from .status import list_versions, show_status, status
from .stop import stop
from .switch import switch


def register_commands(app: typer.Typer) -> None:
    """Attach every sphp command to ``app``."""
    app.command("list")(list_versions)
    app.command()(status)
    app.command()(switch)
    app.command()(stop)
    app.command()(config)


__all__ = ["config", "list_versions", "register_commands", "show_status", "status", "stop", "switch"]
