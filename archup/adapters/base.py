"""
Backend base — the contract between the dispatcher and package tools.

Every supported package tool is a Backend subclass. The dispatcher only
talks to backends through this interface, and backends only talk to
the outside world through the ExecutionContext: the command runner,
the executable resolver, and the lazily resolved privilege helper.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from archup.adapters.shell.command import Command, CommandResult, CommandRunner
from archup.adapters.shell.privilege import find_sudo
from archup.core.errors import PrivilegeUnavailable, SubprocessFailed
from archup.core.models.config import ArchConfig, UpgradeConfig

logger = logging.getLogger(__name__)


class ExecutionContext(BaseModel):
    """Everything a backend needs to perform an upgrade.

    The context is read-only from a backend's point of view. The
    privilege helper is looked up on first use, so backends that never
    escalate never trigger the lookup.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: UpgradeConfig = Field(default_factory=UpgradeConfig)
    runner: Any = None
    which: Callable[[str], str | None] = shutil.which

    _sudo: str | None = PrivateAttr(default=None)
    _sudo_resolved: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: Any) -> None:
        if self.runner is None:
            self.runner = CommandRunner(dry_run=self.config.dry_run)

    @property
    def yes(self) -> bool:
        return self.config.assume_yes

    @property
    def cleanup(self) -> bool:
        return self.config.cleanup

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    @property
    def arch(self) -> ArchConfig:
        return self.config.arch

    @property
    def sudo(self) -> str | None:
        """Path of the privilege helper, or None if none is installed."""
        if not self._sudo_resolved:
            self._sudo = find_sudo(self.which, self.config.sudo_command)
            self._sudo_resolved = True
        return self._sudo

    def require_sudo(self, reason: str, backend: str | None = None) -> str:
        """Return the privilege helper path.

        Raises:
            PrivilegeUnavailable: With ``reason`` as the message, naming
                ``backend`` as the one that needed root.
        """
        sudo = self.sudo
        if sudo is None:
            raise PrivilegeUnavailable(reason, backend=backend)
        return sudo


class Backend(ABC):
    """Abstract base class for package tool backends.

    To add a backend:
        1. Subclass Backend
        2. Implement name, detect, upgrade
        3. Add its identifier to the resolver's priority order
    """

    def __init__(self, executable: str | Path):
        self.executable = Path(executable)

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g. 'paru', 'pacman')."""

    @classmethod
    @abstractmethod
    def detect(cls, ctx: ExecutionContext) -> Backend | None:
        """Return a backend instance if its tool is installed, else None.

        Must be fast and must not run the tool.
        """

    @abstractmethod
    def upgrade(self, ctx: ExecutionContext) -> None:
        """Upgrade the system.

        Raises:
            SubprocessFailed: An invocation exited with an unaccepted code.
            PrivilegeUnavailable: Root is needed and no helper exists.
        """

    def _run(
        self,
        ctx: ExecutionContext,
        command: Command,
        *,
        step: str,
        env: Mapping[str, str] | None = None,
        ok_codes: Iterable[int] = (0,),
    ) -> CommandResult:
        """Run one invocation and fail unless its exit code is accepted."""
        result: CommandResult = ctx.runner.run(command, env=env)
        if result.returncode not in set(ok_codes):
            raise SubprocessFailed(
                backend=self.name,
                step=step,
                command=result.command,
                returncode=result.returncode,
                detail=result.stderr,
            )
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} executable={str(self.executable)!r}>"
