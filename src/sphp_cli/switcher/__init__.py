"""Discovery, validation and the version switch procedure."""

from .discovery import (
    current_active_version,
    current_active_version_string,
    formula_for_version,
    is_service_running,
    is_version_active,
    list_installed,
    running_family_services,
)
from .host import Host, Reporter, build_host, probe_binary_version
from .orchestrator import SwitchOptions, SwitchOrchestrator, SwitchResult, SwitchState
from .services import stop_all_services
from .validation import ensure_package_manager_present

__all__ = [
    "Host",
    "Reporter",
    "SwitchOptions",
    "SwitchOrchestrator",
    "SwitchResult",
    "SwitchState",
    "build_host",
    "current_active_version",
    "current_active_version_string",
    "ensure_package_manager_present",
    "formula_for_version",
    "is_service_running",
    "is_version_active",
    "list_installed",
    "probe_binary_version",
    "running_family_services",
    "stop_all_services",
]
