"""
garuda-update backend.

Garuda's wrapper takes no sync flags: everything is driven through
environment variables.
"""

from __future__ import annotations

from archup.adapters.arch.common import split_args, system_path_env
from archup.adapters.base import Backend, ExecutionContext


class GarudaUpdate(Backend):
    """Upgrade through ``garuda-update``.

    Confirmation is suppressed with ``PACMAN_NOCONFIRM=1`` rather than a
    flag. There is no cleanup step.
    """

    @property
    def name(self) -> str:
        return "garuda_update"

    @classmethod
    def detect(cls, ctx: ExecutionContext) -> GarudaUpdate | None:
        executable = ctx.which("garuda-update")
        return cls(executable) if executable else None

    def upgrade(self, ctx: ExecutionContext) -> None:
        env = system_path_env(UPDATE_AUR="1", SKIP_MIRRORLIST="1")
        if ctx.yes:
            env["PACMAN_NOCONFIRM"] = "1"

        command = [self.executable, *split_args(ctx.arch.garuda_update_arguments)]
        self._run(ctx, command, step="upgrade", env=env)
