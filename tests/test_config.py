"""
Tests for configuration loading — config.yml discovery, parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from archup.core.config.loader import (
    ConfigError,
    default_config_path,
    find_config_file,
    load_config,
)
from archup.core.models.config import ArchPackageManager, UpgradeConfig
from archup.core.use_cases.config_check import check_config


@pytest.fixture
def valid_config_yml(tmp_path: Path) -> Path:
    """Create a valid config.yml in a temp directory."""
    content = textwrap.dedent("""\
        assume_yes: true
        cleanup: true
        sudo_command: doas

        arch:
          package_manager: paru
          show_news: true
          yay_arguments: "--devel --timeupdate"
    """)
    path = tmp_path / "config.yml"
    path.write_text(content)
    return path


class TestDefaults:
    def test_defaults(self):
        config = UpgradeConfig()
        assert config.assume_yes is False
        assert config.cleanup is False
        assert config.dry_run is False
        assert config.sudo_command is None
        assert config.arch.package_manager is ArchPackageManager.AUTODETECT
        assert config.arch.show_news is False
        assert config.arch.yay_arguments == ""

    def test_arch_section_not_shared(self):
        a, b = UpgradeConfig(), UpgradeConfig()
        assert a.arch is not b.arch


class TestLoadConfig:
    def test_load_valid(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        assert config.assume_yes is True
        assert config.cleanup is True
        assert config.sudo_command == "doas"
        assert config.arch.package_manager is ArchPackageManager.PARU
        assert config.arch.show_news is True
        assert config.arch.yay_arguments == "--devel --timeupdate"
        assert config.arch.aura_pacman_arguments == ""

    def test_wrapped_under_archup_key(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("archup:\n  arch:\n    package_manager: garuda_update\n")
        config = load_config(path)
        assert config.arch.package_manager is ArchPackageManager.GARUDA_UPDATE

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config(path) == UpgradeConfig()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("arch: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- paru\n- yay\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_unknown_package_manager(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("arch:\n  package_manager: apt\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("arch:\n  yay_args: --devel\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_no_file_anywhere_gives_defaults(self):
        assert load_config() == UpgradeConfig()


class TestFindConfigFile:
    def test_default_path_uses_xdg(self, isolated_config: Path):
        assert default_config_path() == isolated_config

    def test_none_when_missing(self):
        assert find_config_file() is None

    def test_finds_xdg_file(self, isolated_config: Path):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("cleanup: true\n")
        assert find_config_file() == isolated_config
        assert load_config().cleanup is True

    def test_env_var_wins(self, tmp_path: Path, isolated_config: Path, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("cleanup: true\n")
        other = tmp_path / "other.yml"
        other.write_text("dry_run: true\n")
        monkeypatch.setenv("ARCHUP_CONFIG", str(other))
        assert find_config_file() == other

    def test_env_var_missing_file_falls_through(self, tmp_path: Path, isolated_config: Path, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("")
        monkeypatch.setenv("ARCHUP_CONFIG", str(tmp_path / "gone.yml"))
        assert find_config_file() == isolated_config


class TestConfigCheck:
    def test_valid(self, which_with, valid_config_yml: Path):
        result = check_config(valid_config_yml, which=which_with("paru", "doas"))
        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.to_dict()["package_manager"] == "paru"

    def test_invalid(self, which_with, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("dry_run: sometimes\n")
        result = check_config(path, which=which_with())
        assert not result.valid
        assert len(result.errors) == 1
        assert result.to_dict()["package_manager"] is None

    def test_no_file_warns(self, which_with):
        result = check_config(which=which_with("pacman"))
        assert result.valid
        assert any("No config file" in w for w in result.warnings)

    def test_nothing_installed_warns(self, which_with, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        result = check_config(path, which=which_with())
        assert result.warnings == ["No supported package manager is installed."]

    def test_forced_backend_missing_warns(self, which_with, valid_config_yml: Path):
        result = check_config(valid_config_yml, which=which_with("yay", "doas"))
        assert "package_manager is 'paru' but it is not installed." in result.warnings

    def test_ignored_arguments_warn(self, which_with, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("arch:\n  package_manager: pacman\n  trizen_arguments: --devel\n  show_news: true\n")
        result = check_config(path, which=which_with("pacman"))
        assert "'trizen_arguments' is set but package_manager 'pacman' ignores it." in result.warnings
        assert "show_news only applies to yay and paru." in result.warnings

    def test_missing_sudo_command_warns(self, which_with, valid_config_yml: Path):
        result = check_config(valid_config_yml, which=which_with("paru", "sudo"))
        assert result.warnings == ["sudo_command 'doas' is not installed."]
