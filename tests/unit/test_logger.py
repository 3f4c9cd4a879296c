"""
Unit tests for logging setup and correlation IDs.
"""

import json
import logging

from app.logger import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    logger,
    set_correlation_id,
)


class TestCorrelationId:
    def test_set_and_clear(self):
        set_correlation_id("abc-123")
        assert get_correlation_id() == "abc-123"

        clear_correlation_id()
        assert get_correlation_id() is None


class TestConfigureLogging:
    def test_json_events_carry_correlation_id(self, capsys):
        configure_logging("INFO", json_logs=True)
        set_correlation_id("req-42")
        try:
            logger.info("reading_generated", profile_id="p1")
        finally:
            clear_correlation_id()

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "reading_generated"
        assert event["profile_id"] == "p1"
        assert event["correlation_id"] == "req-42"
        assert event["level"] == "info"

    def test_level_filters_events(self, capsys):
        configure_logging("WARNING", json_logs=True)

        logger.info("quiet_event")

        assert "quiet_event" not in capsys.readouterr().out

    def test_unknown_level_defaults_to_info(self):
        configure_logging("NOT_A_LEVEL")

        assert logging.getLogger().level == logging.INFO
