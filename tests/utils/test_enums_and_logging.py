"""
Tests for the XML enumerations and the logging helpers.
"""

import logging

import pytest

from docxtree.utils.enums import Alignment, BorderStyle, ShadePattern, StyleType, UnderlineStyle
from docxtree.utils.logger import PACKAGE_LOGGER, configure_logging, get_logger, set_log_level


class TestXmlEnum:
    """Test cases for enum coercion."""

    def test_coerce_member(self):
        assert StyleType.coerce(StyleType.PARAGRAPH) is StyleType.PARAGRAPH

    def test_coerce_xml_value_case_insensitive(self):
        assert BorderStyle.coerce("thinThickSmallGap") is BorderStyle.THIN_THICK_SMALL_GAP
        assert ShadePattern.coerce("PCT10") is ShadePattern.PERCENT_10

    def test_coerce_python_name(self):
        assert Alignment.coerce("center") is Alignment.CENTER
        assert ShadePattern.coerce("percent_10") is ShadePattern.PERCENT_10

    def test_none_is_nil_for_borders(self):
        assert BorderStyle.coerce("none") is BorderStyle.NONE
        assert BorderStyle.coerce("nil") is BorderStyle.NONE
        assert UnderlineStyle.coerce("none") is UnderlineStyle.NONE

    @pytest.mark.parametrize("value", ["bogus", "", None, 3])
    def test_coerce_invalid(self, value):
        with pytest.raises(ValueError):
            BorderStyle.coerce(value)

    def test_str_is_xml_value(self):
        assert str(Alignment.BOTH) == "both"
        assert f"{BorderStyle.DOT_DASH}" == "dotDash"


class TestLogging:
    """Test cases for the logging helpers."""

    @pytest.fixture(autouse=True)
    def reset_package_logger(self):
        yield
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_get_logger(self):
        assert get_logger("docxtree.test").name == "docxtree.test"
        with pytest.raises(ValueError):
            get_logger("")

    def test_configure_plain(self):
        logger = configure_logging("DEBUG")

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_configure_rich(self):
        from rich.logging import RichHandler

        logger = configure_logging("WARNING", use_rich=True)

        assert isinstance(logger.handlers[0], RichHandler)

    def test_configure_file(self, temp_dir):
        log_file = temp_dir / "docxtree.log"
        logger = configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("docxtree.document").info("hello file")
        for handler in logger.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_set_log_level(self):
        logger = configure_logging("INFO")
        set_log_level("error")

        assert logger.level == logging.ERROR
        assert all(handler.level == logging.ERROR for handler in logger.handlers)

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")
