"""Preconditions checked before any state is read or mutated."""

from __future__ import annotations

import logging
from typing import Callable

from sphp_cli.brew import PackageManager
from sphp_cli.core.exceptions import PackageManagerMissing

logger = logging.getLogger(__name__)


def ensure_package_manager_present(
    brew: PackageManager,
    *,
    interactive: bool = False,
    confirm: Callable[[str], bool] | None = None,
) -> bool:
    """Make sure Homebrew is usable.

    Returns:
        False when Homebrew was already present; True when it was just
        bootstrapped, in which case the caller must stop and ask the user to
        restart their shell.

    Raises:
        PackageManagerMissing: Homebrew is absent and was not installed.
    """
    if brew.is_available():
        return False

    if not interactive or confirm is None:
        raise PackageManagerMissing()

    if not confirm("Homebrew is not installed. Install it now?"):
        raise PackageManagerMissing("Homebrew is required. Installation declined.")

    logger.info("Running the Homebrew installer")
    brew.bootstrap()
    return True


__all__ = ["ensure_package_manager_present"]
