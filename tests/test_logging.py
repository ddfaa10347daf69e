"""Tests for logging setup."""

import json
import logging

import pytest
from rich.logging import RichHandler

from statscope.utils.logging import QUIET_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers installed by the test and restore logger levels."""
    root = logging.getLogger()
    level = root.level
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    for handler in root.handlers[:]:
        if type(handler) in (RichHandler, logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_handler_on_stderr(self):
        """Test that the default handler keeps stdout free for command output."""
        setup_logging(level="info")

        root = logging.getLogger()
        assert root.level == logging.INFO
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        handler = rich_handlers[0]
        assert handler.console.stderr is True

    def test_json_lines(self, capsys):
        """Test one JSON object per record."""
        setup_logging(level="INFO", json_format=True)
        logging.getLogger("statscope.catalog.loader").warning("Failed to parse x.json")

        line = capsys.readouterr().out.strip()
        data = json.loads(line)
        assert data["level"] == "WARNING"
        assert data["logger"] == "statscope.catalog.loader"
        assert data["message"] == "Failed to parse x.json"

    def test_log_file(self, tmp_path):
        """Test that a log file receives plain formatted records."""
        log_file = tmp_path / "logs" / "statscope.log"
        setup_logging(level="INFO", log_file=log_file, rich_console=False)
        logging.getLogger("statscope.refresh").info("Refreshed 3 snapshot files")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text()
        assert "statscope.refresh - INFO - Refreshed 3 snapshot files" in text

    def test_docker_client_chatter_quieted(self):
        """Test that HTTP client loggers stay at WARNING unless debugging."""
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

        setup_logging(level="INFO")
        assert all(logging.getLogger(n).level == logging.WARNING for n in QUIET_LOGGERS)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)
        setup_logging(level="DEBUG")
        assert all(logging.getLogger(n).level == logging.NOTSET for n in QUIET_LOGGERS)
