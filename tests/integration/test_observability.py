"""
Integration tests for revenue_forecast/observability.py

Tests structured logging, formatters and timing helpers.
"""
import json
import logging
import sys
import time as time_module

import pytest

from revenue_forecast.observability import (
    Timer,
    timed,
    StructuredFormatter,
    HumanReadableFormatter,
    setup_logging,
    get_logger,
)


def _record(msg="Test message", level=logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestTimer:
    """Tests for Timer context manager."""

    def test_measures_elapsed_time(self):
        """Timer measures elapsed time correctly."""
        with Timer("test_operation") as timer:
            time_module.sleep(0.05)

        assert timer.elapsed_ms >= 45  # At least 45ms
        assert timer.elapsed_ms < 1000

    def test_timer_name(self):
        """Timer stores operation name."""
        with Timer("my_operation") as timer:
            pass

        assert timer.name == "my_operation"

    def test_logs_duration(self, caplog):
        """Timer logs completion with duration when given a logger."""
        logger = get_logger("test.timer")
        with caplog.at_level(logging.DEBUG, logger="test.timer"):
            with Timer("load_artifacts", logger):
                pass

        record = caplog.records[-1]
        assert record.getMessage() == "load_artifacts completed"
        assert record.levelno == logging.DEBUG
        assert record.duration_ms >= 0


class TestTimed:
    """Tests for the timed decorator."""

    def test_sync_function(self, caplog):
        @timed("sum_values")
        def sum_values(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert sum_values(2, 3) == 5

        assert any(r.getMessage() == "sum_values completed" for r in caplog.records)

    def test_preserves_name(self):
        @timed()
        def forecast():
            pass

        assert forecast.__name__ == "forecast"

    def test_logs_even_on_exception(self, caplog):
        @timed("failing")
        def failing():
            raise RuntimeError("boom")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(RuntimeError):
                failing()

        assert any(r.getMessage() == "failing completed" for r in caplog.records)

    def test_slow_call_logs_warning(self, caplog):
        @timed("slow", warn_threshold_ms=0)
        def slow():
            time_module.sleep(0.01)

        with caplog.at_level(logging.DEBUG):
            slow()

        record = [r for r in caplog.records if r.getMessage() == "slow completed"][0]
        assert record.levelno == logging.WARNING

    def test_forecast_call_is_timed(self, engine, linear_history, june_2024, caplog):
        with caplog.at_level(logging.DEBUG, logger="revenue_forecast.engine"):
            engine.get_revenue_predictions(linear_history, today=june_2024)

        assert any(
            r.getMessage() == "forecast_engine.get_revenue_predictions completed"
            for r in caplog.records
        )


class TestStructuredFormatter:
    """Tests for JSON log formatter."""

    def test_formats_as_json(self):
        """Outputs valid JSON."""
        parsed = json.loads(StructuredFormatter().format(_record()))

        assert parsed["message"] == "Test message"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test.logger"

    def test_includes_timestamp(self):
        """JSON includes ISO timestamp."""
        parsed = json.loads(StructuredFormatter().format(_record()))

        assert "timestamp" in parsed
        assert "T" in parsed["timestamp"]

    def test_includes_extra_fields(self):
        """Fields passed through `extra` are added to the entry."""
        parsed = json.loads(StructuredFormatter().format(_record(rows=90, path="/tmp/f.csv")))

        assert parsed["rows"] == 90
        assert parsed["path"] == "/tmp/f.csv"

    def test_includes_exception(self):
        formatter = StructuredFormatter()
        try:
            raise ValueError("bad artifact")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        parsed = json.loads(formatter.format(record))
        assert "ValueError: bad artifact" in parsed["exception"]


class TestHumanReadableFormatter:
    def test_format(self):
        output = HumanReadableFormatter().format(_record())
        assert "INFO" in output
        assert "test.logger - Test message" in output

    def test_extras_appended(self):
        output = HumanReadableFormatter().format(_record(duration_ms=12.5))
        assert output.endswith("| {'duration_ms': 12.5}")


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_handler(self):
        setup_logging("debug", json_format=True)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_human_readable_handler(self):
        setup_logging("WARNING")
        root = logging.getLogger()

        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, HumanReadableFormatter)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger(self):
        """Returns a logger instance."""
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"
