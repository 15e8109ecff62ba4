"""
Leftover config scan — report .pacnew / .pacsave files after an upgrade.

pacman never overwrites a modified config file: it writes the packaged
version next to it as ``<file>.pacnew`` (or keeps the old one as
``<file>.pacsave`` on removal) and leaves the merge to the user.

The scan is advisory and never raises. Unreadable directories are
skipped; file names that are not valid UTF-8 are printed lossily.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import click

logger = logging.getLogger(__name__)

CONFIG_ROOT = Path("/etc")
LEFTOVER_SUFFIXES = frozenset({".pacnew", ".pacsave"})
HEADER = "Pacman backup configuration files found:"


def find_leftover_configs(root: Path = CONFIG_ROOT) -> list[Path]:
    """Return every .pacnew / .pacsave file under ``root``, in walk order.

    Symlinked directories are not followed.
    """
    found: list[Path] = []

    def _skip(error: OSError) -> None:
        logger.debug("Skipping %s: %s", error.filename, error.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix in LEFTOVER_SUFFIXES:
                found.append(path)

    return found


def scan_and_report_leftover_configs(
    root: Path = CONFIG_ROOT,
    echo: Callable[[str], None] = click.echo,
) -> None:
    """Print the leftover config files under ``root``, or nothing if there are none."""
    leftovers = find_leftover_configs(root)
    if not leftovers:
        return

    echo(f"\n{HEADER}")
    for path in leftovers:
        echo(click.format_filename(path))
