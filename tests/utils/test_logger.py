"""
Tests for the structured logger.
"""

import io

from geco.models.enums import LogCategory, LogLevel
from geco.utils.logger import Logger, get_category_logger, get_logger


def _logger(level=LogLevel.DEBUG):
    stream = io.StringIO()
    return Logger(min_level=level, use_colors=False, stream=stream), stream


class TestLoggerOutput:

    def test_message_with_tree_details(self):
        logger, stream = _logger()
        logger.info(LogCategory.MUTATION, "Point added", feature="f1", point="p1")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 3
        assert "MUTATION" in lines[0]
        assert "✓ Point added" in lines[0]
        assert lines[1].strip() == "├─ feature: f1"
        assert lines[2].strip() == "└─ point: p1"

    def test_min_level_filters(self):
        logger, stream = _logger(LogLevel.WARN)
        logger.info(LogCategory.CODEC, "hidden")
        logger.debug(LogCategory.CODEC, "hidden")
        logger.warn(LogCategory.CODEC, "shown")
        logger.error(LogCategory.CODEC, "shown too")

        out = stream.getvalue()
        assert "hidden" not in out
        assert "⚠ shown" in out
        assert "✗ shown too" in out

    def test_colors_toggle(self):
        logger, stream = _logger()
        logger.info(LogCategory.API, "plain")
        assert "\033[" not in stream.getvalue()

        colored = Logger(use_colors=True, stream=io.StringIO())
        colored.info(LogCategory.API, "tinted")
        assert "\033[" in colored.stream.getvalue()

    def test_explicit_detail_list(self):
        logger, stream = _logger()
        logger.log(LogCategory.SYSTEM, "Boot", LogLevel.INFO, details=["first"], extra="x")

        lines = stream.getvalue().splitlines()
        assert lines[1].strip() == "├─ first"
        assert lines[2].strip() == "└─ extra: x"


class TestBoundLogger:

    def test_category_binding_and_override(self):
        logger, stream = _logger()
        bound = logger.for_category(LogCategory.RENDER)

        bound.info("frame")
        bound.with_category(LogCategory.STORAGE).warn("blob")

        lines = stream.getvalue().splitlines()
        assert "RENDER" in lines[0]
        assert "STORAGE" in lines[1]

    def test_singleton_configured_by_fixture(self, log_output):
        get_category_logger(LogCategory.GENERAL).debug("captured")

        assert get_logger().stream is log_output
        assert "captured" in log_output.getvalue()
