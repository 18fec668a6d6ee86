import logging
import threading
from datetime import datetime, timezone

import pytest

from src.gateway.logger import RequestLogger
from src.models.charge import SendAttempt


def _attempt(operation="authorize", status_code=200, error=None) -> SendAttempt:
    return SendAttempt(
        attempt_id="att_1",
        endpoint="http://127.0.0.1/v1/charges",
        operation=operation,
        status_code=status_code,
        timestamp=datetime.now(timezone.utc),
        response_time_ms=1.0,
        error=error,
    )


class TestRequestLogger:
    """Tests for RequestLogger."""

    @pytest.mark.unit
    def test_filter_by_operation(self, logger):
        logger.log(_attempt("authorize"))
        logger.log(_attempt("capture"))
        assert len(logger.get_attempts()) == 2
        assert [a.operation for a in logger.get_attempts("capture")] == ["capture"]

    @pytest.mark.unit
    def test_failed_attempts(self, logger):
        logger.log(_attempt(status_code=200))
        logger.log(_attempt(status_code=402))
        logger.log(_attempt(status_code=None, error="timeout"))
        failed = logger.get_failed_attempts()
        assert [a.status_code for a in failed] == [402, None]

    @pytest.mark.unit
    def test_clear(self, logger):
        logger.log(_attempt())
        logger.clear()
        assert logger.get_attempts() == []

    @pytest.mark.unit
    def test_concurrent_logging(self, logger):
        threads = [threading.Thread(target=lambda: [logger.log(_attempt()) for _ in range(50)]) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(logger.get_attempts()) == 400

    @pytest.mark.unit
    def test_bounded_history_keeps_newest(self):
        bounded = RequestLogger(max_entries=2)
        for code in (200, 402, 500):
            bounded.log(_attempt(status_code=code))
        assert [a.status_code for a in bounded.get_attempts()] == [402, 500]

    @pytest.mark.unit
    def test_last_attempt(self, logger):
        assert logger.last_attempt() is None
        logger.log(_attempt("authorize"))
        logger.log(_attempt("capture"))
        assert logger.last_attempt().operation == "capture"

    @pytest.mark.unit
    def test_status_counts(self, logger):
        logger.log(_attempt(status_code=200))
        logger.log(_attempt(status_code=200))
        logger.log(_attempt(status_code=None, error="timeout"))
        assert logger.status_counts() == {200: 2, None: 1}

    @pytest.mark.unit
    def test_failures_are_logged_as_warnings(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger="src.gateway.logger"):
            logger.log(_attempt(status_code=200))
            logger.log(_attempt(status_code=402))
            logger.log(_attempt(status_code=None, error="timeout"))
        levels = [r.levelname for r in caplog.records]
        assert levels == ["INFO", "WARNING", "WARNING"]
        assert "timeout" in caplog.records[-1].getMessage()
