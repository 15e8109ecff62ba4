"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from archup.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("ARCHUP_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"
        assert resolve_level(quiet=True) == "ERROR"


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging("LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler(self, tmp_path: Path, restore_root_logger):
        log_file = tmp_path / "archup.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("archup.test").debug("resolved backend paru")
        for handler in root.handlers:
            handler.flush()
        assert "resolved backend paru" in log_file.read_text()

    def test_repeated_setup_does_not_stack_handlers(self, restore_root_logger):
        setup_logging("WARNING")
        setup_logging("DEBUG")
        assert len(restore_root_logger.handlers) == 1
