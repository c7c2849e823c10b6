"""Shared state and helpers for CLI commands."""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sphp_cli.brew import InstalledPackage, ServiceState
from sphp_cli.core.config import SwitcherConfig, load_config
from sphp_cli.core.exceptions import BrewCommandError, SwitcherError
from sphp_cli.switcher import (
    Host,
    build_host,
    current_active_version,
    current_active_version_string,
    ensure_package_manager_present,
    list_installed,
)
from sphp_cli.switcher.discovery import family_services

from .ui import ConsoleReporter

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def get_reporter() -> ConsoleReporter:
    return ConsoleReporter(console, err_console)


def configure_logging(verbose: bool) -> None:
    """Attach a RichHandler to the ``sphp_cli`` logger when verbose output is requested."""
    package_logger = logging.getLogger("sphp_cli")
    if not verbose:
        return
    if any(isinstance(h, RichHandler) for h in package_logger.handlers):
        return
    package_logger.setLevel(logging.DEBUG)
    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger.addHandler(handler)


def is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def confirm(prompt: str) -> bool:
    return typer.confirm(prompt, default=False)


def load_effective_config() -> SwitcherConfig:
    try:
        return load_config()
    except SwitcherError as exc:
        get_reporter().error(str(exc))
        raise typer.Exit(1)


def get_host(config: SwitcherConfig | None = None) -> Host:
    return build_host(config or load_effective_config())


def require_package_manager(host: Host) -> None:
    """Exit 1 when Homebrew is missing; exit 0 right after bootstrapping it."""
    reporter = get_reporter()
    try:
        bootstrapped = ensure_package_manager_present(
            host.brew,
            interactive=is_interactive(),
            confirm=confirm,
        )
    except SwitcherError as exc:
        reporter.error(str(exc))
        raise typer.Exit(1)
    if bootstrapped:
        reporter.success("Homebrew installed. Restart your shell, then run sphp again.")
        raise typer.Exit(0)


def show_active_version(host: Host) -> None:
    reporter = get_reporter()
    line = current_active_version_string(host)
    if line:
        reporter.info(f"Current PHP version: {line}")
    else:
        reporter.warning("Current PHP version: not found")


def render_installed(host: Host) -> int:
    """Print the installed-versions table; returns the number of rows."""
    reporter = get_reporter()
    reporter.info("Installed PHP versions:")

    packages = list(list_installed(host))
    if not packages:
        reporter.warning("No PHP versions found. Install PHP versions using: brew install php@VERSION")
        return 0

    services: dict[str, ServiceState] = {}
    try:
        services = {entry.name: entry.state for entry in family_services(host)}
    except BrewCommandError as exc:
        logger.warning("Cannot query services: %s", exc)

    active = current_active_version(host)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Formula", style="cyan")
    table.add_column("Version")
    table.add_column("Active", justify="center")
    table.add_column("Service")

    for package in sorted(packages, key=_sort_key, reverse=True):
        is_active = active is not None and package.runtime_version == active
        state = services.get(package.formula)
        table.add_row(
            package.formula,
            package.version,
            "[green]●[/green]" if is_active else "",
            _format_state(state),
        )

    console.print(table)
    return len(packages)


def _sort_key(package: InstalledPackage) -> tuple[int, int]:
    version = package.runtime_version
    return (version.major, version.minor) if version else (0, 0)


def _format_state(state: ServiceState | None) -> str:
    if state is None:
        return "[dim]-[/dim]"
    colors = {
        ServiceState.STARTED: "green",
        ServiceState.STOPPED: "dim",
        ServiceState.OTHER: "yellow",
    }
    color = colors.get(state, "white")
    return f"[{color}]{state.value}[/{color}]"


__all__ = [
    "configure_logging",
    "confirm",
    "console",
    "err_console",
    "get_host",
    "get_reporter",
    "is_interactive",
    "load_effective_config",
    "render_installed",
    "require_package_manager",
    "show_active_version",
]
