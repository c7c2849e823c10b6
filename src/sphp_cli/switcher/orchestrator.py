"""Version switch procedure.

The switch is a linear, non-resumable sequence::

    IDLE -> SERVICES_STOPPING -> UNLINKING -> LINKING -> SERVICE_STARTING -> VERIFIED

Each step is declared as a ``SwitchStep`` with an explicit ``fatal`` flag. A
``SwitcherError`` from a fatal step aborts the run with no rollback; from a
non-fatal step it is reported as a warning and the run continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from sphp_cli.core.config import SwitcherConfig
from sphp_cli.core.exceptions import (
    AbortedByUser,
    BrewCommandError,
    SwitcherError,
    VerificationFailure,
    VersionNotInstalled,
)
from sphp_cli.core.versions import RuntimeVersion, parse_version_token, validate_version

from .discovery import (
    current_active_version_string,
    formula_for_version,
    is_service_running,
    is_version_active,
)
from .host import Host, Reporter
from .links import brew_relink, link_active, link_companion, unlink_active
from .services import start_service, stop_family_services
from .shell_config import update_shell_config

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class SwitchState(str, Enum):
    IDLE = "idle"
    SERVICES_STOPPING = "services_stopping"
    UNLINKING = "unlinking"
    LINKING = "linking"
    SERVICE_STARTING = "service_starting"
    VERIFIED = "verified"


@dataclass
class SwitchStep:
    """One fallible step.

    ``action`` returns a detail string when it did something and None when it
    had nothing to do.
    """

    key: str
    label: str
    action: Callable[[], "str | None"]
    fatal: bool = True
    state: SwitchState | None = None
    enabled: bool = True


@dataclass
class StepOutcome:
    key: str
    label: str
    status: str  # "done", "skipped", "error"
    detail: str = ""


@dataclass
class SwitchOptions:
    restart: bool | None = None
    assume_yes: bool = False
    interactive: bool = False
    update_shell_config: bool = True
    start_service: bool = True
    link_strategy: str = "symlink"

    @classmethod
    def from_config(cls, config: SwitcherConfig, **overrides: object) -> "SwitchOptions":
        options = cls(
            update_shell_config=config.update_shell_config,
            start_service=config.start_service,
            link_strategy=config.link_strategy,
        )
        for name, value in overrides.items():
            if value is not None:
                setattr(options, name, value)
        return options


@dataclass
class SwitchResult:
    requested: RuntimeVersion
    state: SwitchState = SwitchState.IDLE
    formula: str | None = None
    active_version_line: str | None = None
    short_circuited: bool = False
    outcomes: list[StepOutcome] = field(default_factory=list)

    def outcome(self, key: str) -> StepOutcome | None:
        for item in self.outcomes:
            if item.key == key:
                return item
        return None


class SwitchOrchestrator:
    """Switch the active PHP version on ``host``."""

    def __init__(
        self,
        host: Host,
        reporter: Reporter,
        options: SwitchOptions | None = None,
        confirm: Confirm | None = None,
    ):
        self.host = host
        self.reporter = reporter
        self.options = options or SwitchOptions()
        self.confirm = confirm

    def _ask(self, prompt: str) -> bool:
        if not self.options.interactive or self.confirm is None:
            return False
        return self.confirm(prompt)

    def switch(self, requested: str | RuntimeVersion) -> SwitchResult:
        version = requested if isinstance(requested, RuntimeVersion) else validate_version(requested)
        result = SwitchResult(requested=version)

        if is_version_active(self.host, version) and self._service_running(version):
            return self._already_active(result)

        result.formula = self._ensure_installed(version)
        self.reporter.info(f"Switching to PHP {version}...")
        self._run_steps(self._build_steps(result), result)
        result.state = SwitchState.VERIFIED
        return result

    def _service_running(self, version: RuntimeVersion) -> bool:
        """Service state for the short-circuit; a failed query counts as not running."""
        try:
            return is_service_running(self.host, version)
        except BrewCommandError as exc:
            logger.warning("Cannot query services, relinking PHP %s anyway: %s", version, exc)
            return False

    def _already_active(self, result: SwitchResult) -> SwitchResult:
        version = result.requested
        result.short_circuited = True
        result.formula = formula_for_version(self.host, version) or version.formula

        restart = self.options.restart
        if restart is None:
            restart = self._ask(f"PHP {version} is already active. Restart its service?")
        if not restart:
            self.reporter.info(f"PHP {version} is already active and its service is running")
            result.active_version_line = current_active_version_string(self.host)
            result.state = SwitchState.VERIFIED
            return result

        formula = result.formula
        steps = [
            SwitchStep(
                key="service",
                label=f"Restart {formula}",
                action=lambda: self._start(formula, restart=True),
                fatal=False,
                state=SwitchState.SERVICE_STARTING,
            )
        ]
        self._run_steps(steps, result)
        result.active_version_line = current_active_version_string(self.host)
        result.state = SwitchState.VERIFIED
        return result

    def _ensure_installed(self, version: RuntimeVersion) -> str:
        formula = formula_for_version(self.host, version)
        if formula:
            return formula

        if not self.options.assume_yes:
            if not self.options.interactive:
                raise VersionNotInstalled(str(version))
            if not self._ask(f"PHP {version} is not installed. Install {version.formula} with Homebrew?"):
                raise AbortedByUser(f"PHP {version} is not installed and installation was declined")

        self.reporter.info(f"Installing {version.formula}...")
        self.host.brew.install_formula(version.formula)
        self.reporter.success(f"Installed {version.formula}")
        return formula_for_version(self.host, version) or version.formula

    def _build_steps(self, result: SwitchResult) -> list[SwitchStep]:
        version = result.requested
        formula = result.formula or version.formula
        link = brew_relink if self.options.link_strategy == "brew" else link_active

        return [
            SwitchStep(
                key="stop_services",
                label="Stop running PHP services",
                action=self._stop_services,
                fatal=False,
                state=SwitchState.SERVICES_STOPPING,
            ),
            SwitchStep(
                key="unlink",
                label="Unlink current PHP",
                action=lambda: "removed" if unlink_active(self.host, self.reporter) else None,
                state=SwitchState.UNLINKING,
            ),
            SwitchStep(
                key="link",
                label=f"Link PHP {version}",
                action=lambda: str(link(self.host, formula, version, self.reporter)),
                state=SwitchState.LINKING,
            ),
            SwitchStep(
                key="fpm",
                label="Link PHP-FPM",
                action=lambda: _optional_str(link_companion(self.host, formula, version, self.reporter)),
                fatal=False,
            ),
            SwitchStep(
                key="shell_config",
                label="Update shell PATH",
                action=lambda: _optional_str(update_shell_config(self.host, self.reporter)),
                fatal=False,
                enabled=self.options.update_shell_config,
            ),
            SwitchStep(
                key="service",
                label=f"Start {formula}",
                action=lambda: self._start(formula, restart=False),
                fatal=False,
                state=SwitchState.SERVICE_STARTING,
                enabled=self.options.start_service,
            ),
            SwitchStep(
                key="verify",
                label="Verify active version",
                action=lambda: self._verify(result),
            ),
        ]

    def _run_steps(self, steps: list[SwitchStep], result: SwitchResult) -> None:
        for step in steps:
            if not step.enabled:
                result.outcomes.append(StepOutcome(step.key, step.label, "skipped", "disabled"))
                continue
            if step.state is not None:
                result.state = step.state
            logger.debug("Step %s (state=%s)", step.key, result.state.value)
            try:
                detail = step.action()
            except SwitcherError as exc:
                result.outcomes.append(StepOutcome(step.key, step.label, "error", str(exc)))
                if step.fatal:
                    raise
                logger.warning("Non-fatal step %s failed: %s", step.key, exc)
                self.reporter.warning(str(exc))
                continue
            status = "skipped" if detail is None else "done"
            result.outcomes.append(StepOutcome(step.key, step.label, status, detail or ""))

    def _stop_services(self) -> str | None:
        stopped = stop_family_services(self.host, self.reporter)
        return ", ".join(stopped) if stopped else None

    def _start(self, formula: str, *, restart: bool) -> str:
        start_service(self.host, formula, self.reporter, restart=restart)
        return "restarted" if restart else "started"

    def _verify(self, result: SwitchResult) -> str:
        line = current_active_version_string(self.host)
        result.active_version_line = line
        if parse_version_token(line) != result.requested:
            raise VerificationFailure(str(result.requested), line)
        self.reporter.success(f"Successfully switched to PHP {result.requested}")
        self.reporter.info(f"Current version: {line}")
        return line or ""


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


__all__ = [
    "StepOutcome",
    "SwitchOptions",
    "SwitchOrchestrator",
    "SwitchResult",
    "SwitchState",
    "SwitchStep",
]
