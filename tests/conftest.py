"""
Shared test fixtures and configuration.

No test spawns a real package tool: backends run against a MockRunner
and a fake ``which`` that only knows the tools a test installs.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from archup.adapters.base import ExecutionContext
from archup.adapters.mock import MockRunner
from archup.core.models.config import ArchConfig, UpgradeConfig


def fake_which(*installed: str) -> Callable[[str], str | None]:
    """Executable resolver that finds ``installed`` under /usr/bin."""
    paths = {name: f"/usr/bin/{name}" for name in installed}
    return paths.get


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def make_ctx(runner: MockRunner) -> Callable[..., ExecutionContext]:
    """Build an ExecutionContext with the given tools installed.

    Keyword arguments go to UpgradeConfig; ``arch=`` takes a dict for ArchConfig.
    """

    def _make(*installed: str, arch: dict | None = None, **config) -> ExecutionContext:
        cfg = UpgradeConfig(arch=ArchConfig(**(arch or {})), **config)
        return ExecutionContext(config=cfg, runner=runner, which=fake_which(*installed))

    return _make


@pytest.fixture(autouse=True)
def fixed_path(monkeypatch: pytest.MonkeyPatch) -> str:
    """Pin PATH so the system-path override is predictable."""
    monkeypatch.setenv("PATH", "/opt/conda/bin:/usr/local/bin")
    return "/usr/bin:/opt/conda/bin:/usr/local/bin"


@pytest.fixture
def etc_dir(tmp_path: Path) -> Path:
    """A scratch directory standing in for /etc."""
    root = tmp_path / "etc"
    root.mkdir()
    return root


@pytest.fixture
def which_with() -> Callable[..., Callable[[str], str | None]]:
    """Factory for fake executable resolvers: ``which_with("paru", "sudo")``."""
    return fake_which


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's real config and log settings out of every test."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    for var in ("ARCHUP_CONFIG", "ARCHUP_LOG_LEVEL", "ARCHUP_LOG_FILE", "ARCHUP_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return xdg / "archup" / "config.yml"
