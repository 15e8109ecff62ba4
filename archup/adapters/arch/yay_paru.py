"""
yay and paru backends.

Both share a command-line dialect: they accept ``--pacman <path>`` to
pick the low-level tool, ``-Syu`` to upgrade, ``-Scc`` to clean, and
``-Pw`` to print unread Arch news.
"""

from __future__ import annotations

import logging
from pathlib import Path

from archup.adapters.arch.aur_helper import AurHelper
from archup.adapters.arch.common import pacman_delegate
from archup.adapters.base import ExecutionContext

logger = logging.getLogger(__name__)

# `-Pw` exits 1 when there is no unread news
NEWS_OK_CODES = (0, 1)


class YayParu(AurHelper):
    """An AUR helper that delegates package operations to pacman or powerpill."""

    arguments_key = "yay_arguments"
    cleanup_flags = ("-Scc",)

    def __init__(self, executable: str | Path, pacman: str | Path):
        super().__init__(executable)
        self.pacman = Path(pacman)

    @classmethod
    def detect(cls, ctx: ExecutionContext) -> YayParu | None:
        executable = ctx.which(cls.tool)
        if not executable:
            return None
        return cls(executable, pacman_delegate(ctx.which))

    def base_command(self) -> list[str | Path]:
        return [self.executable, "--pacman", self.pacman]

    def upgrade(self, ctx: ExecutionContext) -> None:
        if ctx.arch.show_news:
            self.show_news(ctx)
        super().upgrade(ctx)

    def show_news(self, ctx: ExecutionContext) -> bool:
        """Print unread Arch news.

        Returns:
            False when the tool reports there is nothing to show.
        """
        result = self._run(ctx, [self.executable, "-Pw"], step="news", ok_codes=NEWS_OK_CODES)
        if result.returncode == 1:
            logger.info("No unread Arch news")
            return False
        return True


class Paru(YayParu):
    tool = "paru"


class Yay(YayParu):
    tool = "yay"
