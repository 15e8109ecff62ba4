"""
AUR helper backends — tools that run as the user and escalate on their own.

Each helper is described by four things: how it is detected, the flags
that mean "sync and upgrade everything", its non-interactive flag, and
the flags of its optional cache-cleanup run. Subclasses only fill in
those class attributes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from archup.adapters.arch.common import split_args, system_path_env
from archup.adapters.base import Backend, ExecutionContext

logger = logging.getLogger(__name__)


class AurHelper(Backend):
    """Upgrade + optional cleanup through an AUR helper."""

    tool: ClassVar[str]                       # executable name looked up on PATH
    arguments_key: ClassVar[str]              # ArchConfig field with extra arguments
    upgrade_flags: ClassVar[tuple[str, ...]] = ("-Syu",)
    cleanup_flags: ClassVar[tuple[str, ...]] = ("-Sc",)
    noconfirm_flag: ClassVar[str] = "--noconfirm"

    @property
    def name(self) -> str:
        return self.tool

    @classmethod
    def detect(cls, ctx: ExecutionContext) -> AurHelper | None:
        executable = ctx.which(cls.tool)
        return cls(executable) if executable else None

    def base_command(self) -> list[str | Path]:
        """Executable plus any flags every invocation starts with."""
        return [self.executable]

    def upgrade(self, ctx: ExecutionContext) -> None:
        extra = split_args(getattr(ctx.arch, self.arguments_key))
        command = [*self.base_command(), *self.upgrade_flags, *extra]
        if ctx.yes:
            command.append(self.noconfirm_flag)
        self._run(ctx, command, step="upgrade", env=system_path_env())

        if ctx.cleanup:
            self.clean(ctx)

    def clean(self, ctx: ExecutionContext) -> None:
        command = [*self.base_command(), *self.cleanup_flags]
        if ctx.yes:
            command.append(self.noconfirm_flag)
        logger.info("Cleaning %s package cache", self.name)
        self._run(ctx, command, step="cleanup", env=system_path_env())


class Trizen(AurHelper):
    tool = "trizen"
    arguments_key = "trizen_arguments"


class Pikaur(AurHelper):
    tool = "pikaur"
    arguments_key = "pikaur_arguments"


class Pamac(AurHelper):
    """Manjaro's pamac uses subcommands and a hyphenated confirm flag."""

    tool = "pamac"
    arguments_key = "pamac_arguments"
    upgrade_flags = ("upgrade",)
    cleanup_flags = ("clean",)
    noconfirm_flag = "--no-confirm"
