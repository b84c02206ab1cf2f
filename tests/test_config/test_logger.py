"""Test logging module."""

from pathlib import Path

import pytest

from octomate.config import Settings
from octomate.utils import configure_from_settings, get_logger, level_for, setup_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    setup_logger()


def _read_log(log_file: Path) -> str:
    # Remove sinks so the file is flushed and closed
    from loguru import logger

    logger.remove()
    return log_file.read_text(encoding="utf-8")


class TestLoggerSetup:
    """Test logger setup."""

    def test_setup_logger_console_only(self):
        logger = setup_logger(log_level="DEBUG")
        assert logger is not None

    def test_setup_logger_with_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "octomate.log"
        logger = setup_logger(log_level="DEBUG", log_file=str(log_file))

        logger.info("Test message")

        content = _read_log(log_file)
        assert "Test message" in content
        assert "octomate" in content

    def test_file_captures_debug(self, tmp_path: Path):
        """Test the file sink keeps DEBUG regardless of console level."""
        log_file = tmp_path / "octomate.log"
        logger = setup_logger(log_level="ERROR", log_file=str(log_file))

        logger.debug("Debug message")
        logger.error("Error message")

        content = _read_log(log_file)
        assert "Debug message" in content
        assert "Error message" in content


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_binds_component(self, tmp_path: Path):
        log_file = tmp_path / "octomate.log"
        setup_logger(log_file=str(log_file))

        get_logger("octomate.batch.executor").info("Bound message")

        content = _read_log(log_file)
        assert "octomate.batch.executor" in content
        assert "Bound message" in content

    def test_get_logger_basic(self):
        assert get_logger() is not None


class TestConfigureFromSettings:
    """Test configure_from_settings function."""

    def test_uses_logging_settings(self, tmp_path: Path):
        log_file = tmp_path / "settings.log"
        settings = Settings.model_validate({"logging": {"file": str(log_file)}})

        logger = configure_from_settings(settings)
        logger.info("From settings")

        assert "From settings" in _read_log(log_file)

    def test_quiet_overrides_level(self, capsys):
        settings = Settings()

        logger = configure_from_settings(settings, verbose=True, quiet=True)
        logger.info("hidden")
        logger.error("shown")

        captured = capsys.readouterr()
        assert "hidden" not in captured.err
        assert "shown" in captured.err


class TestLevelFor:
    """Test console level selection from CLI flags."""

    @pytest.mark.parametrize(
        "verbose, quiet, expected",
        [
            (False, False, "WARNING"),
            (True, False, "DEBUG"),
            (False, True, "ERROR"),
            (True, True, "ERROR"),
        ],
    )
    def test_level_for(self, verbose, quiet, expected):
        assert level_for(verbose, quiet, default="WARNING") == expected

    def test_verbose_shows_debug(self, capsys):
        settings = Settings()

        logger = configure_from_settings(settings, verbose=True)
        logger.debug("request details")

        assert "request details" in capsys.readouterr().err
