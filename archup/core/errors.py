"""
Error taxonomy for the upgrade dispatcher.

Every failure a dispatch can surface is one of these types. The CLI
catches ``ArchupError`` and prints the message; callers that need to
branch on the kind of failure match on the subclass.
"""

from __future__ import annotations

from collections.abc import Sequence


class ArchupError(Exception):
    """Base class for dispatch failures."""

    kind = "error"


class BackendUnavailable(ArchupError):
    """No supported package tool could be found on this system."""

    kind = "backend_unavailable"

    def __init__(self, requested: str = "autodetect"):
        self.requested = requested
        if requested == "autodetect":
            message = (
                "Could not find a supported package manager. "
                "Install one of: garuda-update, paru, yay, trizen, pikaur, pamac, pacman, aura."
            )
        else:
            message = (
                f"The configured package manager '{requested}' is not installed. "
                "Install it or switch package_manager to 'autodetect'."
            )
        super().__init__(message)


class PrivilegeUnavailable(ArchupError):
    """A backend needs root and no escalation helper is available."""

    kind = "privilege_unavailable"

    def __init__(self, reason: str, backend: str | None = None):
        self.reason = reason
        self.backend = backend
        super().__init__(reason)


class SubprocessFailed(ArchupError):
    """A package tool exited with a status that is not accepted."""

    kind = "subprocess_failed"

    def __init__(
        self,
        backend: str,
        step: str,
        command: Sequence[str],
        returncode: int,
        detail: str = "",
    ):
        self.backend = backend
        self.step = step
        self.command = list(command)
        self.returncode = returncode
        self.detail = detail
        message = (
            f"{backend}: {step} step failed "
            f"(`{' '.join(self.command)}` exited with code {returncode})"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class VersionQueryMalformed(ArchupError):
    """A tool's ``--version`` output no longer has the expected shape."""

    kind = "version_query_malformed"

    def __init__(self, backend: str, command: Sequence[str], output: str):
        self.backend = backend
        self.command = list(command)
        self.output = output
        super().__init__(
            f"{backend}: `{' '.join(self.command)}` output changed, "
            f"invalid version: {output!r}"
        )
