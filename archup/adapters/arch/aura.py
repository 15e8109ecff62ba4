"""
aura backend — privilege model depends on the installed aura version.

Since 4.0.6 aura escalates on its own and must be run as the user;
older releases must be run through sudo.
See https://github.com/fosskers/aura/releases/tag/v4.0.6
"""

from __future__ import annotations

import logging
from pathlib import Path

from archup.adapters.arch.common import split_args, system_path_env
from archup.adapters.base import Backend, ExecutionContext
from archup.core.errors import SubprocessFailed, VersionQueryMalformed
from archup.core.version import Version

logger = logging.getLogger(__name__)

VERSION_PREFIX = "aura "
NO_SUDO_SINCE = Version(4, 0, 6)


def parse_aura_version(output: str) -> Version:
    """Extract the version from ``aura --version`` output ("aura x.y.z\\n").

    Every leading ``"aura "`` is removed, then trailing whitespace.

    Raises:
        ValueError: If what remains is not a version.
    """
    token = output
    while token.startswith(VERSION_PREFIX):
        token = token[len(VERSION_PREFIX):]
    return Version.parse(token.rstrip())


def needs_sudo(version: Version) -> bool:
    """Whether this aura release must be run through sudo.

    Pre-releases of the threshold version still need it.
    """
    return version < NO_SUDO_SINCE


class Aura(Backend):
    """AUR sync (``-Au``) followed by a repository sync (``-Syu``)."""

    @property
    def name(self) -> str:
        return "aura"

    @classmethod
    def detect(cls, ctx: ExecutionContext) -> Aura | None:
        executable = ctx.which("aura")
        return cls(executable) if executable else None

    def installed_version(self, ctx: ExecutionContext) -> Version:
        command = [self.executable, "--version"]
        result = ctx.runner.output(command)
        if result.returncode != 0:
            raise SubprocessFailed(
                backend=self.name,
                step="version",
                command=result.command,
                returncode=result.returncode,
                detail=result.stderr.strip(),
            )
        try:
            return parse_aura_version(result.stdout)
        except ValueError as e:
            raise VersionQueryMalformed(self.name, result.command, result.stdout) from e

    def upgrade(self, ctx: ExecutionContext) -> None:
        version = self.installed_version(ctx)

        prefix: list[str | Path] = []
        if needs_sudo(version):
            logger.info("aura %s predates %s, running through sudo", version, NO_SUDO_SINCE)
            sudo = ctx.require_sudo(
                f"aura < {NO_SUDO_SINCE} requires sudo to work with AUR packages",
                backend=self.name,
            )
            prefix = [sudo]

        command = [*prefix, self.executable, "-Au", *split_args(ctx.arch.aura_aur_arguments)]
        if ctx.yes:
            command.append("--noconfirm")
        self._run(ctx, command, step="aur", env=system_path_env())

        command = [*prefix, self.executable, "-Syu", *split_args(ctx.arch.aura_pacman_arguments)]
        if ctx.yes:
            command.append("--noconfirm")
        self._run(ctx, command, step="pacman", env=system_path_env())
