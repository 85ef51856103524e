"""
Unit tests for scad_dimensions.logging_config module.

Tests:
- JSON formatter output
- Console formatter output
- Logging setup
- Timing decorator
- Diagnostic collection
"""

import json
import logging
import sys

import pytest

from scad_dimensions.logging_config import (
    ConsoleFormatter,
    JSONFormatter,
    collect_diagnostics,
    record_fields,
    setup_logging,
    timed,
)


def make_record(name="test", level=logging.INFO, msg="Test message", exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestRecordFields:
    """Tests for record_fields helper."""

    def test_plain_record_has_no_fields(self):
        """Test standard LogRecord attributes are not reported as fields."""
        assert record_fields(make_record()) == {}

    def test_extra_passed_through(self):
        """Test attributes from extra={} are returned."""
        record = make_record()
        record.loc = "middle"
        assert record_fields(record) == {"loc": "middle"}


class TestJSONFormatter:
    """Tests for JSONFormatter class."""

    def test_basic_format(self):
        """Test basic JSON log format."""
        data = json.loads(JSONFormatter().format(make_record(name="test.module")))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.module"
        assert data["message"] == "Test message"
        assert "time" in data
        assert "exception" not in data

    def test_extra_fields(self):
        """Test that extra fields are included in JSON output."""
        record = make_record()
        record.loc = "middle"
        record.page = "A4"

        data = json.loads(JSONFormatter().format(record))

        assert data["loc"] == "middle"
        assert data["page"] == "A4"

    def test_unserializable_extra(self):
        """Test that non-JSON extras are stringified."""
        record = make_record()
        record.shape = object()

        data = json.loads(JSONFormatter().format(record))

        assert data["shape"].startswith("<object")

    def test_exception_format(self):
        """Test that exceptions are formatted."""
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]

    def test_unicode_message(self):
        """Test Unicode characters are written unescaped."""
        record = make_record(msg="Размер ⌀8, ±0.1, 45°")
        line = JSONFormatter().format(record)
        assert "⌀" in line
        assert json.loads(line)["message"] == "Размер ⌀8, ±0.1, 45°"


class TestConsoleFormatter:
    """Tests for ConsoleFormatter class."""

    def test_basic_format(self):
        """Test basic console format with the package prefix stripped."""
        record = make_record(name="scad_dimensions.drawing.sheet", msg="Page border")
        result = ConsoleFormatter().format(record)

        assert "INFO" in result
        assert "drawing.sheet: Page border" in result
        assert "scad_dimensions." not in result

    def test_foreign_logger_name_kept(self):
        """Test names outside the package are shown in full."""
        result = ConsoleFormatter().format(make_record(name="other.module"))
        assert "other.module:" in result

    def test_extra_fields_shown(self):
        """Test that extra fields are shown inline, floats shortened."""
        record = make_record()
        record.margin = 13.000001
        record.page = "A4"

        result = ConsoleFormatter().format(record)

        assert result.endswith("[margin=13, page=A4]")

    def test_no_brackets_without_fields(self):
        """Test a record without extras has no field list."""
        assert "[" not in ConsoleFormatter().format(make_record())

    def test_exception_appended(self):
        """Test that the traceback follows the message line."""
        try:
            raise KeyError("ribbon")
        except KeyError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

        first, rest = ConsoleFormatter().format(record).split("\n", 1)

        assert "Test message" in first
        assert "KeyError" in rest


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_package_logger(self):
        """Test that setup returns the package logger."""
        logger = setup_logging(level=logging.DEBUG, console=False)
        assert logger.name == "scad_dimensions"
        assert logger.propagate is False

    def test_console_handler_added(self):
        """Test that console handler is added."""
        logger = setup_logging(console=True)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ConsoleFormatter)

    def test_handlers_replaced(self):
        """Test repeated setup does not stack handlers."""
        setup_logging(console=True)
        logger = setup_logging(console=True)
        assert len(logger.handlers) == 1

    def test_json_file_handler(self, tmp_path):
        """Test JSON file handler creation."""
        json_path = tmp_path / "log.json"
        logger = setup_logging(json_file=json_path, console=False)
        try:
            logger.info("Test message", extra={"key": "value"})
            for handler in logger.handlers:
                handler.flush()

            data = json.loads(json_path.read_text(encoding='utf-8').strip())
            assert data["message"] == "Test message"
            assert data["key"] == "value"
        finally:
            setup_logging(console=False)

    def test_level_setting(self):
        """Test that log level is correctly set."""
        logger = setup_logging(level=logging.WARNING, console=False)
        assert logger.level == logging.WARNING


class TestTimedDecorator:
    """Tests for timed decorator."""

    def test_function_executed(self):
        """Test that decorated function executes correctly."""
        @timed()
        def add(a, b):
            return a + b

        assert add(2, 3) == 5

    def test_preserves_function_name(self):
        """Test that decorator preserves function name."""
        @timed()
        def my_function():
            pass

        assert my_function.__name__ == "my_function"

    def test_duration_logged(self, caplog):
        """Test that elapsed time is logged under the operation name."""
        @timed(operation="draw_sample")
        def draw():
            return 1

        with caplog.at_level(logging.DEBUG):
            draw()

        record = next(r for r in caplog.records if "draw_sample took" in r.getMessage())
        assert record.levelno == logging.DEBUG
        assert record.operation == "draw_sample"
        assert record.elapsed_seconds >= 0

    def test_failure_logged_and_reraised(self, caplog):
        """Test that an exception is logged at ERROR and propagates."""
        @timed(operation="broken")
        def broken():
            raise ValueError("bad cell")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                broken()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "broken failed after" in errors[0].getMessage()
        assert "bad cell" in errors[0].getMessage()


class TestCollectDiagnostics:
    """Tests for the diagnostic channel."""

    def test_collects_warnings(self):
        """Test warnings from package loggers are collected with extras."""
        logger = logging.getLogger("scad_dimensions.test")
        with collect_diagnostics() as diagnostics:
            logger.warning("Margin %s too wide", 140, extra={"page": "A4"})
            logger.info("not a diagnostic")

        assert len(diagnostics) == 1
        assert diagnostics[0].level == "WARNING"
        assert diagnostics[0].message == "Margin 140 too wide"
        assert diagnostics[0].logger == "scad_dimensions.test"
        assert diagnostics[0].fields == {"page": "A4"}

    def test_ignores_foreign_loggers(self):
        """Test loggers outside the package are not collected."""
        with collect_diagnostics() as diagnostics:
            logging.getLogger("other.module").warning("ignored")
        assert diagnostics == []

    def test_handler_removed(self):
        """Test the handler is detached after the block."""
        package_logger = logging.getLogger("scad_dimensions")
        before = list(package_logger.handlers)
        with collect_diagnostics():
            pass
        assert package_logger.handlers == before

    def test_level_restored(self):
        """Test the package level is lowered only inside the block."""
        package_logger = setup_logging(level=logging.ERROR, console=False)
        with collect_diagnostics() as diagnostics:
            logging.getLogger("scad_dimensions.test").warning("seen")
        assert package_logger.level == logging.ERROR
        assert len(diagnostics) == 1
