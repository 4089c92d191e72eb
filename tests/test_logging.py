"""Tests for logging setup."""

import logging
from pathlib import Path

from amp_wrapped.logging import get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_writes_module_records_to_log_file(self, tmp_path: Path) -> None:
        """Should route amp_wrapped.<name> loggers into amp-wrapped.log."""
        logger = setup_logging(tmp_path / "logs", level=logging.INFO)

        get_logger("parser").info("parsed %d threads", 3)
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "logs" / "amp-wrapped.log").read_text()
        assert "[INFO] amp_wrapped.parser: parsed 3 threads" in content

    def test_no_stderr_handler_unless_verbose(self, tmp_path: Path) -> None:
        logger = setup_logging(tmp_path, verbose=False)

        assert [type(h) for h in logger.handlers] == [logging.FileHandler]

    def test_verbose_adds_debug_stderr_handler(self, tmp_path: Path) -> None:
        logger = setup_logging(tmp_path, level=logging.WARNING, verbose=True)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_second_call_replaces_handlers(self, tmp_path: Path) -> None:
        """Should point the log file at the most recent directory."""
        setup_logging(tmp_path / "first")
        logger = setup_logging(tmp_path / "second")

        assert len(logger.handlers) == 1
        assert Path(logger.handlers[0].baseFilename) == tmp_path / "second" / "amp-wrapped.log"
