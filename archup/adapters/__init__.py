"""Adapters — bindings to the package tools and the processes that run them.

Public re-exports for convenient access.
"""

from archup.adapters.base import Backend, ExecutionContext
from archup.adapters.mock import MockRunner
from archup.adapters.registry import AUTODETECT_ORDER, BackendRegistry
from archup.adapters.shell.command import CommandResult, CommandRunner

__all__ = [
    "AUTODETECT_ORDER",
    "Backend",
    "BackendRegistry",
    "CommandResult",
    "CommandRunner",
    "ExecutionContext",
    "MockRunner",
]
