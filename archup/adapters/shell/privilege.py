"""
Privilege escalation helper discovery.

Finds the first installed helper that can run a command as root.
Only consulted by the backends that need it, and only when they do.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Checked in this order when no preference is configured
SUDO_CANDIDATES = ("doas", "sudo", "pkexec", "run0", "please")


def find_sudo(
    which: Callable[[str], str | None],
    preferred: str | None = None,
) -> str | None:
    """Return the path of an escalation helper, or None if none is installed.

    Args:
        which: Executable resolver (``shutil.which`` in production).
        preferred: Helper name from the config, tried first.
    """
    if preferred:
        path = which(preferred)
        if path:
            logger.debug("Using configured privilege helper: %s", path)
            return path
        logger.warning("Configured sudo_command '%s' is not installed", preferred)

    for name in SUDO_CANDIDATES:
        path = which(name)
        if path:
            logger.debug("Using privilege helper: %s", path)
            return path

    return None
