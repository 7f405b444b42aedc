"""Tests for configuration and logging setup."""

import logging
from pathlib import Path

import pytest

from bibletracker.config import Config, get_config, reset_config
from bibletracker.logger import setup_logging

ENV_VARS = (
    "BIBLETRACKER_DB_PATH",
    "BIBLETRACKER_OWNER",
    "BIBLETRACKER_PLAN_DAYS",
    "BIBLETRACKER_LOG_LEVEL",
    "BIBLETRACKER_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestConfig:
    """Tests for Config.from_env."""

    def test_defaults(self):
        """Test values used when nothing is set."""
        config = Config.from_env()
        assert config.db_path == Path.home() / ".bibletracker" / "readings.db"
        assert config.owner_id == "local"
        assert config.plan_days == 30
        assert config.log_level == "WARNING"
        assert config.log_file is None

    def test_from_environment(self, monkeypatch, tmp_path):
        """Test every setting is read from the environment."""
        monkeypatch.setenv("BIBLETRACKER_DB_PATH", str(tmp_path / "r.db"))
        monkeypatch.setenv("BIBLETRACKER_OWNER", "ana")
        monkeypatch.setenv("BIBLETRACKER_PLAN_DAYS", "14")
        monkeypatch.setenv("BIBLETRACKER_LOG_LEVEL", "debug")
        monkeypatch.setenv("BIBLETRACKER_LOG_FILE", str(tmp_path / "bt.log"))

        config = Config.from_env()
        assert config.db_path == tmp_path / "r.db"
        assert config.owner_id == "ana"
        assert config.plan_days == 14
        assert config.log_level == "DEBUG"
        assert config.log_file == tmp_path / "bt.log"

    def test_validate_ok(self, monkeypatch, tmp_path):
        """Test a valid config has no errors."""
        monkeypatch.setenv("BIBLETRACKER_DB_PATH", str(tmp_path / "sub" / "r.db"))
        config = Config.from_env()
        assert config.validate() == []
        assert (tmp_path / "sub").exists()

    def test_validate_errors(self, tmp_path):
        """Test invalid settings are reported."""
        config = Config(
            db_path=tmp_path / "r.db",
            owner_id=" ",
            plan_days=0,
            log_level="LOUD",
            log_file=None,
        )
        errors = config.validate()
        assert len(errors) == 3

    def test_get_config_cached(self):
        """Test the global config is created once."""
        assert get_config() is get_config()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_level(self):
        """Test the console handler level follows the setting."""
        logger = setup_logging("INFO")
        assert logger.name == "bibletracker"
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.INFO

    def test_file_handler(self, tmp_path):
        """Test records reach the log file."""
        log_file = tmp_path / "logs" / "bt.log"
        logger = setup_logging("WARNING", log_file)
        logging.getLogger("bibletracker.ledger.manager").info("Added Genesis 1")

        for handler in logger.handlers:
            handler.flush()
        assert "Added Genesis 1" in log_file.read_text(encoding="utf-8")

        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_repeat_setup_replaces_handlers(self):
        """Test calling setup twice does not duplicate handlers."""
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
