"""Unit tests for structured logging setup."""

from __future__ import annotations

from structlog.testing import capture_logs

from core.logging_config import configure_logging, get_logger


def test_get_logger_emits_structured_fields() -> None:
    """Loggers should accept event names with keyword fields."""
    configure_logging("INFO")
    logger = get_logger("tests.logging")

    with capture_logs() as captured:
        logger.warning("sample_event", feed_id="f-a")

    assert captured == [{"event": "sample_event", "feed_id": "f-a", "log_level": "warning"}]


def test_configure_logging_filters_below_level() -> None:
    """Events below the configured level should be dropped."""
    configure_logging("WARNING")
    logger = get_logger("tests.logging")

    with capture_logs() as captured:
        logger.info("quiet_event")

    configure_logging("INFO")
    assert captured == []
