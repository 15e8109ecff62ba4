"""
Configuration loader — reads config.yml into the UpgradeConfig model.

Reads YAML, validates against the Pydantic schema, and returns a typed
config. A missing *discovered* file is not an error: the defaults are
a complete, working configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from archup.core.models.config import UpgradeConfig

logger = logging.getLogger(__name__)

# Default config filename inside the archup config directory
CONFIG_FILE = "config.yml"

CONFIG_ENV_VAR = "ARCHUP_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/archup/config.yml`` (or the ~/.config fallback)."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "archup" / CONFIG_FILE


def find_config_file() -> Path | None:
    """Locate the config file.

    Search order:
        1. ``$ARCHUP_CONFIG``
        2. ``$XDG_CONFIG_HOME/archup/config.yml``

    Returns:
        Path to an existing config file, or None if there is none.
    """
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        candidate = Path(from_env).expanduser()
        if candidate.is_file():
            return candidate
        logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, candidate)

    candidate = default_config_path()
    if candidate.is_file():
        return candidate

    return None


def load_config(path: Path | None = None) -> UpgradeConfig:
    """Load and validate the upgrade configuration.

    Args:
        path: Explicit path to a config file. If None, searches the
            default locations and falls back to built-in defaults.

    Returns:
        Validated UpgradeConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No config file found, using defaults")
            return UpgradeConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults" config
    if data is None:
        return UpgradeConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "archup" key or be flat
    if "archup" in data:
        data = data["archup"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'archup' in {path}")

    try:
        config = UpgradeConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info(
        "Loaded config from %s (package_manager=%s)",
        path, config.arch.package_manager.value,
    )
    return config
