"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from transcriber.io.logger import get_logger, setup_logging


def handler_types():
    return [type(handler) for handler in logging.getLogger("transcriber").handlers]


class TestLogging:
    """Test handler configuration."""

    def test_get_logger_namespaces(self):
        assert get_logger("exporter").name == "transcriber.exporter"

    def test_console_handler(self):
        setup_logging("info")

        logger = logging.getLogger("transcriber")
        assert handler_types() == [RichHandler]
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        setup_logging()

        assert handler_types() == [RichHandler]

    def test_file_only(self, tmp_path):
        log_file = tmp_path / "t.log"

        setup_logging("DEBUG", log_file=str(log_file), console=False)
        get_logger("test").debug("written to file")
        for handler in logging.getLogger("transcriber").handlers:
            handler.flush()

        assert handler_types() == [logging.FileHandler]
        assert "written to file" in log_file.read_text()
        setup_logging(console=False)

    def test_silent(self):
        setup_logging(console=False)

        assert handler_types() == [logging.NullHandler]
