"""Service supervisor actions for the PHP family."""

from __future__ import annotations

import logging

from sphp_cli.core.exceptions import BrewCommandError

from .discovery import running_family_services
from .host import Host, Reporter

logger = logging.getLogger(__name__)


def stop_family_services(host: Host, reporter: Reporter) -> list[str]:
    """Stop every started PHP service.

    Individual stop failures are reported as warnings. Returns the names
    that were stopped.
    """
    running = running_family_services(host)
    if not running:
        reporter.info("No running PHP services to stop")
        return []

    stopped: list[str] = []
    for entry in running:
        reporter.info(f"Stopping {entry.name} service...")
        try:
            host.brew.control_service("stop", entry.name)
        except BrewCommandError as exc:
            logger.warning("Failed to stop %s: %s", entry.name, exc)
            reporter.warning(f"Failed to stop {entry.name}: {exc}")
            continue
        stopped.append(entry.name)
    return stopped


def stop_all_services(host: Host, reporter: Reporter) -> list[str]:
    """``sphp stop``: like ``stop_family_services`` but an idle family is a warning."""
    if not running_family_services(host):
        reporter.warning("No running PHP services found")
        return []
    stopped = stop_family_services(host, reporter)
    if stopped:
        reporter.success(f"Stopped {', '.join(stopped)}")
    return stopped


def start_service(host: Host, formula: str, reporter: Reporter, *, restart: bool = False) -> None:
    """Start (or restart) ``formula``'s service.

    Raises:
        BrewCommandError: the supervisor rejected the request.
    """
    action = "restart" if restart else "start"
    reporter.info(f"{action.capitalize()}ing {formula} service...")
    host.brew.control_service(action, formula)


__all__ = ["start_service", "stop_all_services", "stop_family_services"]
