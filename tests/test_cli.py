"""
Tests for CLI commands — upgrade, backends, pacnew, config check, and global options.
"""

import json
import textwrap
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from archup.core.use_cases.upgrade import UpgradeResult
from archup.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "upgrade" in result.output
        assert "backends" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestUpgradeCommand:
    """The upgrade command only translates flags; run_upgrade is patched out."""

    def _invoke(self, args: list[str], result: UpgradeResult):
        with patch("archup.core.use_cases.upgrade.run_upgrade", return_value=result) as mock_run:
            out = CliRunner().invoke(cli, args)
        return out, mock_run

    def test_success_message(self):
        out, _ = self._invoke(["upgrade"], UpgradeResult(backend="paru"))
        assert out.exit_code == 0
        assert "System upgraded with paru" in out.output

    def test_dry_run_label(self):
        out, _ = self._invoke(["upgrade", "-n"], UpgradeResult(backend="yay", dry_run=True))
        assert "(dry run)" in out.output

    def test_flags_become_overrides(self):
        _, mock_run = self._invoke(
            ["upgrade", "--dry-run", "--yes", "--cleanup", "--backend", "pamac", "--show-news"],
            UpgradeResult(backend="pamac"),
        )
        kwargs = mock_run.call_args.kwargs
        assert kwargs["overrides"] == {"dry_run": True, "assume_yes": True, "cleanup": True}
        assert kwargs["arch_overrides"] == {"package_manager": "pamac", "show_news": True}
        assert kwargs["report_leftovers"] is True

    def test_absent_flags_keep_config(self):
        _, mock_run = self._invoke(["upgrade"], UpgradeResult(backend="paru"))
        kwargs = mock_run.call_args.kwargs
        assert kwargs["overrides"] == {"dry_run": None, "assume_yes": None, "cleanup": None}
        assert kwargs["arch_overrides"] == {"package_manager": None, "show_news": None}

    def test_no_pacnew(self):
        _, mock_run = self._invoke(["upgrade", "--no-pacnew"], UpgradeResult(backend="paru"))
        assert mock_run.call_args.kwargs["report_leftovers"] is False

    def test_unknown_backend_rejected(self):
        out = CliRunner().invoke(cli, ["upgrade", "--backend", "apt"])
        assert out.exit_code == 2

    def test_failure_exits_nonzero(self):
        failed = UpgradeResult(
            backend="yay",
            error="yay: upgrade step failed (`yay -Syu` exited with code 1)",
            error_kind="subprocess_failed",
            failed_step="upgrade",
        )
        out, _ = self._invoke(["upgrade"], failed)
        assert out.exit_code == 1
        assert "upgrade step failed" in out.output

    def test_json(self):
        out, mock_run = self._invoke(["upgrade", "--json"], UpgradeResult(backend="aura"))
        assert out.exit_code == 0
        assert json.loads(out.output) == {"ok": True, "backend": "aura", "dry_run": False}
        assert mock_run.call_args.kwargs["report_leftovers"] is False

    def test_json_failure(self):
        failed = UpgradeResult(error="Could not find a supported package manager.", error_kind="backend_unavailable")
        out, _ = self._invoke(["upgrade", "--json"], failed)
        assert out.exit_code == 1
        data = json.loads(out.output)
        assert data["ok"] is False
        assert data["error_kind"] == "backend_unavailable"


class TestBackendsCommand:
    def test_json_lists_all_backends(self):
        result = CliRunner().invoke(cli, ["backends", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["selector"] == "autodetect"
        assert [b["name"] for b in data["backends"]] == [
            "garuda_update", "paru", "yay", "trizen", "pikaur", "pamac", "pacman", "aura",
        ]

    def test_human_output(self):
        result = CliRunner().invoke(cli, ["backends"])
        assert result.exit_code == 0
        assert "Package managers" in result.output
        assert "garuda_update" in result.output

    def test_invalid_config(self, tmp_path: Path):
        bad = tmp_path / "config.yml"
        bad.write_text("arch: 3\n")
        result = CliRunner().invoke(cli, ["--config", str(bad), "backends"])
        assert result.exit_code == 1


class TestPacnewCommand:
    def test_reports_files(self, etc_dir: Path):
        (etc_dir / "pacman.conf.pacnew").write_text("")
        result = CliRunner().invoke(cli, ["pacnew", "--root", str(etc_dir)])
        assert result.exit_code == 0
        assert "Pacman backup configuration files found:" in result.output
        assert str(etc_dir / "pacman.conf.pacnew") in result.output

    def test_silent_when_clean(self, etc_dir: Path):
        result = CliRunner().invoke(cli, ["pacnew", "--root", str(etc_dir)])
        assert result.exit_code == 0
        assert result.output == ""


class TestConfigCheckCommand:
    def _write(self, tmp_path: Path, content: str) -> Path:
        path = tmp_path / "config.yml"
        path.write_text(textwrap.dedent(content))
        return path

    def test_valid(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            arch:
              package_manager: autodetect
        """)
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "autodetect" in result.output

    def test_invalid(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            arch:
              package_manager: apt
        """)
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check"])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output

    def test_json(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            cleanup: true
        """)
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["config_path"] == str(path)
