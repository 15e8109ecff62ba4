"""
pacman backend — the low-level tool itself, always run through sudo.

powerpill is used in pacman's place when installed; it accepts the
same flags.
"""

from __future__ import annotations

from archup.adapters.arch.common import system_path_env
from archup.adapters.base import Backend, ExecutionContext


class Pacman(Backend):
    """Upgrade with ``sudo pacman -Syu`` and clean with ``sudo pacman -Scc``."""

    @property
    def name(self) -> str:
        return "pacman"

    @classmethod
    def detect(cls, ctx: ExecutionContext) -> Pacman | None:
        executable = ctx.which("powerpill") or ctx.which("pacman")
        return cls(executable) if executable else None

    def upgrade(self, ctx: ExecutionContext) -> None:
        sudo = ctx.require_sudo("sudo is required to run pacman", backend=self.name)

        command = [sudo, self.executable, "-Syu"]
        if ctx.yes:
            command.append("--noconfirm")
        self._run(ctx, command, step="upgrade", env=system_path_env())

        if ctx.cleanup:
            command = [sudo, self.executable, "-Scc"]
            if ctx.yes:
                command.append("--noconfirm")
            self._run(ctx, command, step="cleanup", env=system_path_env())
