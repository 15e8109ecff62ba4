"""
Command runner — the single place where package tools are spawned.

Upgrades are interactive: the tools draw progress bars and may ask
questions, so ``run`` inherits the terminal instead of capturing.
``output`` captures stdout for read-only queries such as ``--version``.

The runner never raises on a non-zero exit. It returns a CommandResult
and leaves the decision about which codes are acceptable to the caller.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import click

logger = logging.getLogger(__name__)

# Exit code reported when the executable could not be launched at all
LAUNCH_FAILURE_CODE = 127

Command = Sequence[str | Path]


@dataclass
class CommandResult:
    """Outcome of one invocation."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_command(command: Sequence[str]) -> str:
    """Render a command line the way a user would type it."""
    return shlex.join(command)


class CommandRunner:
    """Run commands, or print them when in dry-run mode.

    Args:
        dry_run: Print ``Dry running: <cmd>`` instead of executing.
        echo: Where dry-run lines go (default: ``click.echo``).
    """

    def __init__(self, dry_run: bool = False, echo: Callable[[str], None] | None = None):
        self._dry_run = dry_run
        self._echo = echo or click.echo

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def run(self, command: Command, env: Mapping[str, str] | None = None) -> CommandResult:
        """Run a command attached to the terminal and return its exit status.

        Args:
            command: Executable followed by its arguments.
            env: Variables layered over the inherited environment for
                this invocation only.
        """
        cmd = [str(part) for part in command]

        if self._dry_run:
            self._echo(f"Dry running: {_describe(cmd, env)}")
            return CommandResult(command=cmd, returncode=0, dry_run=True)

        logger.debug("Executing: %s", _describe(cmd, env))
        try:
            proc = subprocess.run(cmd, env=_merged_env(env), check=False)
        except OSError as e:
            logger.debug("Failed to launch %s: %s", cmd[0], e)
            return CommandResult(command=cmd, returncode=LAUNCH_FAILURE_CODE, stderr=str(e))

        logger.debug("%s exited with code %d", cmd[0], proc.returncode)
        return CommandResult(command=cmd, returncode=proc.returncode)

    def output(self, command: Command, env: Mapping[str, str] | None = None) -> CommandResult:
        """Run a read-only query and capture its stdout as text.

        Queries run even in dry-run mode: they change nothing, and later
        decisions (such as which privilege model to use) depend on them.
        """
        cmd = [str(part) for part in command]
        logger.debug("Querying: %s", _describe(cmd, env))
        try:
            proc = subprocess.run(
                cmd,
                env=_merged_env(env),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            return CommandResult(command=cmd, returncode=LAUNCH_FAILURE_CODE, stderr=str(e))

        return CommandResult(
            command=cmd,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


def _merged_env(env: Mapping[str, str] | None) -> dict[str, str] | None:
    """Inherited environment plus per-invocation overrides (os.environ untouched)."""
    if not env:
        return None
    merged = os.environ.copy()
    merged.update(env)
    return merged


def _describe(cmd: list[str], env: Mapping[str, str] | None) -> str:
    # PATH is left out of the printed line
    shown = {k: v for k, v in (env or {}).items() if k != "PATH"}
    prefix = " ".join(f"{k}={shlex.quote(v)}" for k, v in shown.items())
    line = format_command(cmd)
    return f"{prefix} {line}" if prefix else line
