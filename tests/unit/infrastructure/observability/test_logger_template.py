"""Tests for the shared logger helpers."""

import logging

import pytest

from playreign.infrastructure.observability.logger_template import (
    get_module_logger,
    log_operation,
    log_slow_operation,
)

LOGGER_NAME = "playreign.tests.operations"


@pytest.fixture
def logger() -> logging.Logger:
    return get_module_logger(LOGGER_NAME)


class TestLogOperation:
    """Tests for log_operation()."""

    def test_logs_start_and_completion_with_summary(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with log_operation(logger, "timeline.build", kind="artist") as summary:
                summary["reigns"] = 4

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["timeline.build.started", "timeline.build.completed"]
        completed = caplog.records[-1]
        assert completed.kind == "artist"
        assert completed.reigns == 4
        assert completed.duration_ms >= 0

    def test_logs_failure_and_reraises(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with pytest.raises(ValueError):
                with log_operation(logger, "timeline.build", kind="song"):
                    raise ValueError("boom")

        failed = caplog.records[-1]
        assert failed.getMessage() == "timeline.build.failed"
        assert failed.levelno == logging.ERROR
        assert failed.error == "boom"
        assert failed.error_type == "ValueError"

    def test_custom_level(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with log_operation(logger, "podium.build", log_level=logging.DEBUG):
                pass

        assert {r.levelno for r in caplog.records} == {logging.DEBUG}


class TestLogSlowOperation:
    """Tests for log_slow_operation()."""

    def test_fast_operation_is_silent(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            assert log_slow_operation(logger, "timeline.build", 50, threshold_ms=100) is False

        assert caplog.records == []

    def test_slow_operation_warns(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            logged = log_slow_operation(logger, "timeline.build", 250, threshold_ms=100)

        assert logged is True
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.operation == "timeline.build"
        assert record.duration_ms == 250
