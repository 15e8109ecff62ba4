"""
archup — CLI entrypoint.

Usage:
    archup --help
    archup upgrade --dry-run
    archup backends
    archup config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from archup import __version__
from archup.core.models.config import ArchPackageManager
from archup.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)

BACKEND_CHOICES = [pm.value for pm in ArchPackageManager]


@click.group()
@click.version_option(version=__version__, prog_name="archup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: ~/.config/archup/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """archup — upgrade an Arch Linux system with whichever package tool is installed."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Print commands instead of running them.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip confirmation prompts.")
@click.option("--cleanup", is_flag=True, help="Clean package caches after upgrading.")
@click.option(
    "--backend",
    type=click.Choice(BACKEND_CHOICES),
    default=None,
    help="Force a package manager instead of autodetecting one.",
)
@click.option("--show-news", is_flag=True, help="Show unread Arch news first (yay/paru).")
@click.option("--no-pacnew", is_flag=True, help="Skip the .pacnew/.pacsave report.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the result as JSON.")
@click.pass_context
def upgrade(
    ctx: click.Context,
    dry_run: bool,
    assume_yes: bool,
    cleanup: bool,
    backend: str | None,
    show_news: bool,
    no_pacnew: bool,
    as_json: bool,
) -> None:
    """Upgrade the system through the selected package manager."""
    from archup.core.use_cases.upgrade import run_upgrade

    result = run_upgrade(
        config_path=ctx.obj.get("config_path"),
        # Flags only switch things on; an absent flag keeps the config value
        overrides={
            "dry_run": dry_run or None,
            "assume_yes": assume_yes or None,
            "cleanup": cleanup or None,
        },
        arch_overrides={"package_manager": backend, "show_news": show_news or None},
        echo=_echo_err if as_json else None,
        report_leftovers=not no_pacnew and not as_json,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        label = " (dry run)" if result.dry_run else ""
        click.secho(f"✅ System upgraded with {result.backend}{label}", fg="green")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def backends(ctx: click.Context, as_json: bool) -> None:
    """List supported package managers in autodetection order."""
    from archup.adapters.base import ExecutionContext
    from archup.adapters.registry import BackendRegistry
    from archup.core.config.loader import ConfigError, load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    registry = BackendRegistry()
    exec_ctx = ExecutionContext(config=config)
    status = registry.status(exec_ctx)
    selected = registry.find(exec_ctx)

    if as_json:
        click.echo(json.dumps({
            "selector": config.arch.package_manager.value,
            "selected": selected.name if selected else None,
            "backends": list(status.values()),
        }, indent=2))
        return

    click.secho(f"\n📦 Package managers (selector: {config.arch.package_manager.value})", fg="cyan", bold=True)
    for entry in status.values():
        marker = " ← selected" if selected and selected.name == entry["name"] else ""
        if entry["available"]:
            click.secho(f"   {entry['priority']}. ✓ {entry['name']} ", fg="green", nl=False)
            click.echo(f"→ {entry['executable']}{marker}")
        else:
            click.secho(f"   {entry['priority']}. ✗ {entry['name']}", fg="red")
    click.echo()


@cli.command()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to scan (default: /etc).",
)
def pacnew(root: Path | None) -> None:
    """Report .pacnew and .pacsave files waiting to be merged."""
    from archup.core.services.pacnew import CONFIG_ROOT, scan_and_report_leftover_configs

    scan_and_report_leftover_configs(root or CONFIG_ROOT)


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate config.yml."""
    from archup.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if result.config_path:
            click.echo(f"   File: {result.config_path}")
        click.echo(f"   Package manager: {result.config.arch.package_manager.value}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
