"""Test logging setup"""

import io
import logging

import pytest

from id3reader.core.logger import (
    PACKAGE_LOGGER,
    ColoredFormatter,
    get_logger,
    setup_logging,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()


class TestLogger:
    """Test setup_logging() and get_logger()"""

    def test_console_output(self):
        stream = io.StringIO()
        setup_logging("INFO", colored=False, stream=stream)
        logger = get_logger("id3reader.tests")

        logger.debug("hidden")
        logger.warning("Frame TPE1 truncated")

        assert stream.getvalue() == "WARNING: Frame TPE1 truncated\n"

    def test_colored_console_output(self):
        stream = io.StringIO()
        setup_logging("INFO", colored=True, stream=stream)
        get_logger("id3reader.tests").error("broken")

        assert "\x1b[" in stream.getvalue()
        assert "broken" in stream.getvalue()

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "id3reader.log"
        setup_logging("ERROR", log_file=log_file, colored=False, stream=io.StringIO())
        get_logger("id3reader.tests").debug("Frame TIT2: 3 bytes")
        shutdown_logging()

        content = log_file.read_text(encoding="utf-8")
        assert "| DEBUG    | id3reader.tests | Frame TIT2: 3 bytes" in content

    def test_setup_replaces_handlers(self):
        setup_logging("INFO", stream=io.StringIO())
        setup_logging("INFO", stream=io.StringIO())
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1

    def test_shutdown_restores_propagation(self):
        setup_logging("INFO", stream=io.StringIO())
        assert logging.getLogger(PACKAGE_LOGGER).propagate is False

        shutdown_logging()
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert package_logger.handlers == []
        assert package_logger.propagate is True


class TestColoredFormatter:

    def test_plain_level_name_preserved(self):
        """Test coloring does not leak into the original record"""
        record = logging.LogRecord("id3reader", logging.INFO, __file__, 1, "msg", None, None)
        formatted = ColoredFormatter(use_colors=True).format(record)

        assert formatted.endswith("INFO\x1b[0m: msg")
        assert record.levelname == "INFO"
