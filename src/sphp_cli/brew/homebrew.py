"""Homebrew adapter: runs ``brew`` and normalizes its output."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass

from sphp_cli.core.constants import HOMEBREW_INSTALL_URL
from sphp_cli.core.exceptions import BrewCommandError

from .types import ServiceEntry, ServiceState

logger = logging.getLogger(__name__)

SERVICE_ACTIONS = ("start", "stop", "restart")


@dataclass
class _BrewCommandResult:
    returncode: int
    stdout: str
    stderr: str


class Homebrew:
    """Real ``brew`` / ``brew services`` invocations.

    Commands block until ``brew`` exits; there is no timeout because installs
    and service restarts can legitimately take minutes.
    """

    def __init__(self, executable: str = "brew"):
        self.executable = executable

    def _run(self, args: list[str], *, capture: bool = True) -> _BrewCommandResult:
        logger.debug("Running: %s %s", self.executable, " ".join(args))
        try:
            completed = subprocess.run(
                [self.executable, *args],
                capture_output=capture,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            return _BrewCommandResult(
                returncode=127,
                stdout="",
                stderr=f"{self.executable} executable not found on PATH",
            )
        return _BrewCommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def _check(self, args: list[str], *, capture: bool = True) -> _BrewCommandResult:
        result = self._run(args, capture=capture)
        if result.returncode != 0:
            raise BrewCommandError(args, result.returncode, result.stderr)
        return result

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def bootstrap(self) -> None:
        command = f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"'
        logger.debug("Bootstrapping Homebrew: %s", command)
        completed = subprocess.run(command, shell=True, check=False)
        if completed.returncode != 0:
            raise BrewCommandError(["<install.sh>"], completed.returncode)

    def list_formulas(self) -> list[str]:
        result = self._check(["list", "--formula", "-1"])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def installed_versions(self, formula: str) -> list[str]:
        # Output shape: "php@8.1 8.1.27 8.1.26"
        result = self._run(["list", "--versions", formula])
        if result.returncode != 0:
            return []
        for line in result.stdout.splitlines():
            parts = line.split()
            if parts and parts[0] == formula:
                return parts[1:]
        return []

    def install_formula(self, formula: str) -> None:
        # Stream installer output straight to the terminal.
        self._check(["install", formula], capture=False)

    def link_formula(self, formula: str) -> None:
        self._check(["link", "--force", "--overwrite", formula])

    def unlink_formula(self, formula: str) -> None:
        self._check(["unlink", formula])

    def list_services(self) -> list[ServiceEntry]:
        result = self._check(["services", "list"])
        return parse_services_list(result.stdout)

    def control_service(self, action: str, name: str) -> None:
        if action not in SERVICE_ACTIONS:
            raise ValueError(f"Unsupported service action: {action}")
        self._check(["services", action, name])


def parse_services_list(output: str) -> list[ServiceEntry]:
    """Parse ``brew services list`` table output.

    The first line is a header (``Name Status User File``); rows with a single
    column are skipped.
    """
    entries: list[ServiceEntry] = []
    lines = [line for line in output.splitlines() if line.strip()]
    for line in lines[1:]:
        parts = line.split()
        if len(parts) < 2:
            continue
        entries.append(ServiceEntry(name=parts[0], state=ServiceState.parse(parts[1])))
    return entries


__all__ = ["Homebrew", "SERVICE_ACTIONS", "parse_services_list"]
