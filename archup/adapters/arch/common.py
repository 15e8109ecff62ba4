"""
Helpers shared by the Arch backends.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

# Prepended to PATH so a pacman shadowed elsewhere on PATH (conda, linuxbrew,
# ~/.local/bin) never replaces the system one
SYSTEM_BIN_DIR = "/usr/bin"


def execution_path() -> str:
    """The inherited PATH with the system bin directory in front."""
    return f"{SYSTEM_BIN_DIR}:{os.environ.get('PATH', '')}"


def system_path_env(**extra: str) -> dict[str, str]:
    """Per-invocation environment overrides: the system PATH plus ``extra``."""
    return {"PATH": execution_path(), **extra}


def split_args(arguments: str) -> list[str]:
    """Split a user-supplied argument string on whitespace."""
    return arguments.split()


def pacman_delegate(which: Callable[[str], str | None]) -> Path:
    """The low-level tool AUR helpers hand package operations to.

    powerpill when installed, otherwise pacman.
    """
    return Path(which("powerpill") or "pacman")
