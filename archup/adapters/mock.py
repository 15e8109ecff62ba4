"""
Mock runner — test double for the command runner.

Records every command instead of spawning it. Exit codes and captured
output are configurable per command, matched on the executable name
and, optionally, the first flag.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath

from archup.adapters.shell.command import Command, CommandResult


@dataclass
class RecordedCall:
    """One command the mock was asked to run."""

    command: list[str]
    env: dict[str, str] = field(default_factory=dict)
    captured: bool = False

    @property
    def program(self) -> str:
        return PurePath(self.command[0]).name


class MockRunner:
    """Universal fake runner for backend tests.

    By default every command exits 0 with empty output.
    """

    def __init__(self, dry_run: bool = False):
        self._dry_run = dry_run
        self._responses: dict[tuple[str, ...], tuple[int, str]] = {}
        self._call_log: list[RecordedCall] = []

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    @property
    def call_log(self) -> list[RecordedCall]:
        """All commands this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[list[str]]:
        return [call.command for call in self._call_log]

    def set_response(self, *key: str, returncode: int = 0, stdout: str = "") -> None:
        """Set the result for commands matching ``key``.

        ``key`` is a program name, optionally followed by the first
        argument after it (e.g. ``("aura", "--version")``). Keys match
        anywhere in the command, so a response for ``"pacman"`` also
        applies to ``sudo pacman -Syu``.
        """
        self._responses[key] = (returncode, stdout)

    def set_failure(self, *key: str, returncode: int = 1) -> None:
        self.set_response(*key, returncode=returncode)

    def run(self, command: Command, env: Mapping[str, str] | None = None) -> CommandResult:
        return self._record(command, env, captured=False)

    def output(self, command: Command, env: Mapping[str, str] | None = None) -> CommandResult:
        return self._record(command, env, captured=True)

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()

    def _record(self, command: Command, env: Mapping[str, str] | None, captured: bool) -> CommandResult:
        cmd = [str(part) for part in command]
        self._call_log.append(RecordedCall(command=cmd, env=dict(env or {}), captured=captured))
        returncode, stdout = self._lookup(cmd)
        return CommandResult(command=cmd, returncode=returncode, stdout=stdout)

    def _lookup(self, cmd: list[str]) -> tuple[int, str]:
        names = [PurePath(part).name for part in cmd]
        best: tuple[int, str] = (0, "")
        best_len = 0
        for key, response in self._responses.items():
            for i, name in enumerate(names):
                if name != key[0]:
                    continue
                if len(key) > 1 and cmd[i + 1 : i + len(key)] != list(key[1:]):
                    continue
                if len(key) > best_len:
                    best, best_len = response, len(key)
        return best
