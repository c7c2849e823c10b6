"""Package manager access (Homebrew) behind a small protocol."""

from .homebrew import Homebrew, parse_services_list
from .protocol import PackageManager
from .types import InstalledPackage, ServiceEntry, ServiceState

__all__ = [
    "Homebrew",
    "InstalledPackage",
    "PackageManager",
    "ServiceEntry",
    "ServiceState",
    "parse_services_list",
]
