"""
Upgrade use case — the one entry point the CLI calls.

``upgrade_selected_backend`` is pure composition: resolve a backend,
run its upgrade, let every error through untouched. ``run_upgrade``
wraps it for the CLI: load config, apply flag overrides, dispatch,
then report leftover config files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from archup.adapters.base import Backend, ExecutionContext
from archup.adapters.registry import BackendRegistry
from archup.adapters.shell.command import CommandRunner
from archup.core.config.loader import ConfigError, load_config
from archup.core.errors import ArchupError, SubprocessFailed
from archup.core.models.config import UpgradeConfig
from archup.core.services.pacnew import CONFIG_ROOT, scan_and_report_leftover_configs

logger = logging.getLogger(__name__)


def upgrade_selected_backend(
    ctx: ExecutionContext,
    registry: BackendRegistry | None = None,
) -> Backend:
    """Resolve the configured backend and upgrade the system with it.

    Returns:
        The backend that performed the upgrade.

    Raises:
        BackendUnavailable: No supported package tool is installed.
        PrivilegeUnavailable: The backend needs sudo and none exists.
        SubprocessFailed: A package tool invocation failed.
        VersionQueryMalformed: aura's version could not be parsed.
    """
    backend = (registry or BackendRegistry()).resolve(ctx)
    backend.upgrade(ctx)
    return backend


@dataclass
class UpgradeResult:
    """Outcome of an upgrade run, as shown by the CLI."""

    backend: str | None = None
    dry_run: bool = False
    error: str | None = None
    error_kind: str | None = None
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "ok": self.ok,
            "backend": self.backend,
            "dry_run": self.dry_run,
        }
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            if self.failed_step:
                result["failed_step"] = self.failed_step
        return result


def run_upgrade(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    arch_overrides: dict[str, Any] | None = None,
    registry: BackendRegistry | None = None,
    runner: Any = None,
    which: Callable[[str], str | None] | None = None,
    echo: Callable[[str], None] | None = None,
    report_leftovers: bool = True,
    leftovers_root: Path = CONFIG_ROOT,
) -> UpgradeResult:
    """Load config, dispatch the upgrade, and report leftover config files.

    Args:
        config_path: Optional explicit path to config.yml.
        overrides: Top-level config values from CLI flags (None values ignored).
        arch_overrides: ``arch:`` section values from CLI flags.
        registry: Optional pre-configured backend registry.
        runner: Optional command runner (tests pass a MockRunner).
        which: Optional executable resolver.
        echo: Where dry-run command lines go when no runner is given.
        report_leftovers: Run the .pacnew scan after a non-dry run.
        leftovers_root: Directory the scan walks.

    Returns:
        UpgradeResult. Never raises for dispatch failures.
    """
    result = UpgradeResult()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config"
        return result

    try:
        config = apply_overrides(config, overrides, arch_overrides)
    except ValidationError as e:
        result.error = f"Invalid option: {e}"
        result.error_kind = "config"
        return result

    if runner is None:
        runner = CommandRunner(dry_run=config.dry_run, echo=echo)

    ctx_kwargs: dict[str, Any] = {"config": config, "runner": runner}
    if which is not None:
        ctx_kwargs["which"] = which
    ctx = ExecutionContext(**ctx_kwargs)
    result.dry_run = ctx.dry_run

    try:
        backend = upgrade_selected_backend(ctx, registry)
        result.backend = backend.name
    except ArchupError as e:
        logger.debug("Upgrade failed: %s", e)
        result.backend = getattr(e, "backend", None)
        result.error = str(e)
        result.error_kind = e.kind
        if isinstance(e, SubprocessFailed):
            result.failed_step = e.step

    # Runs whether or not the upgrade succeeded
    if report_leftovers and not ctx.dry_run:
        scan_and_report_leftover_configs(leftovers_root)

    return result


def apply_overrides(
    config: UpgradeConfig,
    overrides: dict[str, Any] | None = None,
    arch_overrides: dict[str, Any] | None = None,
) -> UpgradeConfig:
    """Layer CLI flag values over a loaded config. None means "not given".

    The merged result is validated again, so flag values get the same
    checks as values from the file.
    """
    top = {k: v for k, v in (overrides or {}).items() if v is not None}
    arch = {k: v for k, v in (arch_overrides or {}).items() if v is not None}
    if not top and not arch:
        return config

    data = config.model_dump()
    data.update(top)
    data["arch"] = {**data["arch"], **arch}
    return UpgradeConfig.model_validate(data)
