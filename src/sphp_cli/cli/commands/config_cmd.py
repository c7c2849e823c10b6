"""``sphp config`` command.

Shows the effective settings and where each one comes from, or persists a
single setting with ``--set KEY=VALUE``.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from sphp_cli.cli import helpers
from sphp_cli.core.config import SwitcherConfig, get_config_file, set_config_value
from sphp_cli.core.exceptions import SwitcherError
from sphp_cli.core.paths import resolve_prefix


def config(
    set_value: Optional[str] = typer.Option(None, "--set", help="Persist a setting, e.g. --set start_service=false"),
) -> None:
    """Display or change the switcher configuration."""
    reporter = helpers.get_reporter()
    config_file = get_config_file()

    if set_value is not None:
        name, sep, value = set_value.partition("=")
        if not sep or not name.strip():
            reporter.error("Expected KEY=VALUE")
            raise typer.Exit(1)
        try:
            set_config_value(name.strip(), value, config_file)
        except SwitcherError as exc:
            reporter.error(str(exc))
            raise typer.Exit(1)
        reporter.success(f"Saved {name.strip()} to {config_file}")
        return

    settings = helpers.load_effective_config()
    prefix, prefix_origin = resolve_prefix(settings.brew_prefix)

    table = Table(title="sphp configuration", show_lines=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Source", style="magenta")

    table.add_row("brew_prefix", str(prefix), prefix_origin)
    for name in SwitcherConfig.setting_names():
        if name == "brew_prefix":
            continue
        table.add_row(name, str(getattr(settings, name)), settings.origin(name))

    helpers.console.print(table)
    helpers.console.print(f"[dim]Config file: {config_file}[/dim]")


__all__ = ["config"]
