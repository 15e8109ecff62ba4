"""
Config check use case — validate config.yml and report issues.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from archup.adapters.base import ExecutionContext
from archup.adapters.registry import BackendRegistry
from archup.core.config.loader import ConfigError, find_config_file, load_config
from archup.core.models.config import ArchPackageManager, UpgradeConfig

# Which backends read each argument string
_ARGUMENT_OWNERS = {
    "yay_arguments": {ArchPackageManager.YAY, ArchPackageManager.PARU},
    "garuda_update_arguments": {ArchPackageManager.GARUDA_UPDATE},
    "trizen_arguments": {ArchPackageManager.TRIZEN},
    "pikaur_arguments": {ArchPackageManager.PIKAUR},
    "pamac_arguments": {ArchPackageManager.PAMAC},
    "aura_aur_arguments": {ArchPackageManager.AURA},
    "aura_pacman_arguments": {ArchPackageManager.AURA},
}


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: UpgradeConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "package_manager": (
                self.config.arch.package_manager.value if self.config else None
            ),
        }


def check_config(
    config_path: Path | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> ConfigCheckResult:
    """Validate the upgrade configuration and report issues.

    Args:
        config_path: Optional explicit path to config.yml.
        which: Executable resolver used for the installed-tool checks.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if config_path is None:
        result.warnings.append("No config file found. Using built-in defaults.")

    selected = config.arch.package_manager
    ctx = ExecutionContext(config=config, which=which)
    registry = BackendRegistry()

    if selected == ArchPackageManager.AUTODETECT:
        if registry.find(ctx) is None:
            result.warnings.append("No supported package manager is installed.")
    else:
        if registry.detect(ctx, selected) is None:
            result.warnings.append(
                f"package_manager is '{selected.value}' but it is not installed."
            )
        for key, owners in _ARGUMENT_OWNERS.items():
            if getattr(config.arch, key) and selected not in owners:
                result.warnings.append(
                    f"'{key}' is set but package_manager '{selected.value}' ignores it."
                )

    if config.arch.show_news and selected not in (
        ArchPackageManager.AUTODETECT, ArchPackageManager.YAY, ArchPackageManager.PARU,
    ):
        result.warnings.append("show_news only applies to yay and paru.")

    if config.sudo_command and which(config.sudo_command) is None:
        result.warnings.append(f"sudo_command '{config.sudo_command}' is not installed.")

    result.valid = len(result.errors) == 0
    return result
