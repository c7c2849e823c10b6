"""``sphp switch`` command."""

from __future__ import annotations

from typing import Optional

import typer

from sphp_cli.cli import helpers
from sphp_cli.cli.ui import StepTracker, select_with_arrows
from sphp_cli.core.exceptions import SwitcherError
from sphp_cli.core.versions import RuntimeVersion, validate_version
from sphp_cli.switcher import Host, SwitchOptions, SwitchOrchestrator, current_active_version, list_installed


def _pick_version(host: Host) -> RuntimeVersion:
    """Ask the user to choose among installed versions."""
    reporter = helpers.get_reporter()
    choices: dict[str, str] = {}
    for package in list_installed(host):
        version = package.runtime_version
        if version is not None:
            choices.setdefault(str(version), f"{package.formula} {package.version}")
    if not choices:
        reporter.error("No PHP versions found. Install PHP versions using: brew install php@VERSION")
        raise typer.Exit(1)

    active = current_active_version(host)
    ordered = dict(sorted(choices.items(), key=lambda item: validate_version(item[0]), reverse=True))
    selected = select_with_arrows(
        ordered,
        prompt_text="Switch to PHP version",
        default_key=str(active) if active else None,
        console=helpers.console,
    )
    return validate_version(selected)


def switch(
    version: Optional[str] = typer.Argument(None, help="PHP version to activate (e.g., 8.1)"),
    assume_yes: bool = typer.Option(False, "--yes", "-y", help="Install the version without asking if it is missing"),
    restart: Optional[bool] = typer.Option(
        None,
        "--restart/--no-restart",
        help="Restart the service when the version is already active",
    ),
    no_service: bool = typer.Option(False, "--no-service", help="Do not start the PHP service after switching"),
    no_shell_config: bool = typer.Option(False, "--no-shell-config", help="Leave shell startup files untouched"),
    brew_link: bool = typer.Option(False, "--brew-link", help="Link through 'brew link' instead of a direct symlink"),
) -> None:
    """Switch to the specified PHP version."""
    reporter = helpers.get_reporter()
    interactive = helpers.is_interactive()

    try:
        requested = validate_version(version) if version is not None else None
    except SwitcherError as exc:
        reporter.error(str(exc))
        raise typer.Exit(1)

    if requested is None and not interactive:
        reporter.error("Please specify a PHP version (e.g., 8.1)")
        raise typer.Exit(1)

    config = helpers.load_effective_config()
    host = helpers.get_host(config)
    helpers.require_package_manager(host)

    options = SwitchOptions.from_config(
        config,
        restart=restart,
        assume_yes=assume_yes,
        interactive=interactive,
        update_shell_config=False if no_shell_config else None,
        start_service=False if no_service else None,
        link_strategy="brew" if brew_link else None,
    )

    try:
        if requested is None:
            requested = _pick_version(host)
        orchestrator = SwitchOrchestrator(host, reporter, options, confirm=helpers.confirm)
        result = orchestrator.switch(requested)
    except SwitcherError as exc:
        reporter.error(str(exc))
        raise typer.Exit(1)

    if result.short_circuited:
        return

    helpers.console.print()
    helpers.console.print(StepTracker.from_result(result).render())
    helpers.console.print()
    reporter.success("PHP version switched successfully!")


__all__ = ["switch"]
