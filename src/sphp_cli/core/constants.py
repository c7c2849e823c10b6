"""Shared naming and path constants for the PHP switcher."""

from __future__ import annotations

import re

PHP_FORMULA = "php"
FPM_BINARY = "php-fpm"

# Bare ``php`` or a pinned ``php@X.Y`` keg.
FAMILY_PATTERN = re.compile(r"^php(@\d+\.\d+)?$")
VERSION_PATTERN = re.compile(r"^\d+\.\d+$")

SHELL_RC_CANDIDATES: tuple[str, ...] = (".zshrc", ".bash_profile", ".bashrc")

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

CONFIG_DIR_NAME = ".sphp"
CONFIG_FILE_NAME = "config.toml"
CONFIG_SECTION = "switcher"

LINK_STRATEGIES: tuple[str, ...] = ("symlink", "brew")

__all__ = [
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "CONFIG_SECTION",
    "FAMILY_PATTERN",
    "FPM_BINARY",
    "HOMEBREW_INSTALL_URL",
    "LINK_STRATEGIES",
    "PHP_FORMULA",
    "SHELL_RC_CANDIDATES",
    "VERSION_PATTERN",
]
