"""
Semantic version parsing and comparison (pure).

Ordering follows semver precedence: a pre-release sorts before the
release it leads up to, and build metadata is ignored. No I/O, no
subprocess.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

_SEMVER_RE = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
)


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # numeric identifiers sort numerically and before alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A ``major.minor.patch[-prerelease]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a strict semantic version string.

        The pre-release tag is kept; build metadata is accepted and dropped.

        Raises:
            ValueError: If ``text`` is not a semantic version.
        """
        match = _SEMVER_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"Not a semantic version: {text!r}")
        major, minor, patch, prerelease = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease or "")

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _precedence(self) -> tuple:
        if not self.prerelease:
            return (self.major, self.minor, self.patch, 1, ())
        identifiers = tuple(_identifier_key(part) for part in self.prerelease.split("."))
        return (self.major, self.minor, self.patch, 0, identifiers)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.prerelease}" if self.prerelease else core
