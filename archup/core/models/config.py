"""
Configuration models — what the user asked the upgrade to do.

Loaded from config.yml and overridden by CLI flags. Backends read
these values through the execution context and never modify them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ArchPackageManager(str, Enum):
    """Backend selector: autodetect, or force one specific tool."""

    AUTODETECT = "autodetect"
    GARUDA_UPDATE = "garuda_update"
    PARU = "paru"
    YAY = "yay"
    TRIZEN = "trizen"
    PIKAUR = "pikaur"
    PAMAC = "pamac"
    PACMAN = "pacman"
    AURA = "aura"


class ArchConfig(BaseModel):
    """Arch-specific settings.

    Each ``*_arguments`` string is split on whitespace and appended
    after the backend's mandatory flags. ``yay_arguments`` is shared
    by yay and paru.
    """

    model_config = ConfigDict(extra="forbid")

    package_manager: ArchPackageManager = ArchPackageManager.AUTODETECT
    show_news: bool = False

    yay_arguments: str = ""
    garuda_update_arguments: str = ""
    trizen_arguments: str = ""
    pikaur_arguments: str = ""
    pamac_arguments: str = ""
    aura_aur_arguments: str = ""
    aura_pacman_arguments: str = ""


class UpgradeConfig(BaseModel):
    """Root configuration for one upgrade run."""

    model_config = ConfigDict(extra="forbid")

    assume_yes: bool = False         # skip confirmation prompts
    cleanup: bool = False            # clean package caches afterwards
    dry_run: bool = False            # print commands instead of running them
    sudo_command: str | None = None  # preferred escalation helper (e.g. "doas")

    arch: ArchConfig = Field(default_factory=ArchConfig)
