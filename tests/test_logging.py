"""Tests for logger setup and decision events."""

from __future__ import annotations

import io
import json
import logging
import sys
from datetime import datetime

from zerotrust_engine.context import Context
from zerotrust_engine.pdp import evaluate_access
from zerotrust_engine.telemetry.audit import DECISION_LOGGER_NAME, build_decision_event, log_decision
from zerotrust_engine.utils.logging import ISO8601Formatter, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_decision_events_written_as_json_lines(self, neutral_context: Context, now: datetime):
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)

        evaluate_access(neutral_context, now=now)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        event = json.loads(lines[0])
        assert list(event)[0] == "time"
        assert event["event"] == "access_decision"
        assert event["decision"] == "allow"
        assert event["resource"] == "/docs/handbook"

    def test_warning_level_suppresses_decisions(self, neutral_context: Context, now: datetime):
        stream = io.StringIO()
        setup_logging("WARNING", stream=stream)

        evaluate_access(neutral_context, now=now)

        assert stream.getvalue() == ""

    def test_repeated_setup_does_not_duplicate(self):
        first = io.StringIO()
        second = io.StringIO()
        setup_logging("INFO", stream=first)
        logger = setup_logging("INFO", stream=second)

        logger.info("hello")

        assert first.getvalue() == ""
        assert len(second.getvalue().splitlines()) == 1


class TestISO8601Formatter:
    """Tests for the JSON line formatter."""

    def _record(self, msg, exc_info=None) -> logging.LogRecord:
        return logging.LogRecord("zerotrust_engine.pdp", logging.WARNING, __file__, 1, msg, None, exc_info)

    def test_plain_message(self):
        payload = json.loads(ISO8601Formatter().format(self._record("Invalid regex")))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "zerotrust_engine.pdp"
        assert payload["message"] == "Invalid regex"
        assert payload["time"].endswith("+00:00")

    def test_stacktrace_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record("failed", exc_info=sys.exc_info())

        payload = json.loads(ISO8601Formatter().format(record))

        assert "RuntimeError: boom" in payload["stacktrace"]


class TestDecisionEvent:
    """Tests for build_decision_event / log_decision."""

    def test_context_summarized_to_identifiers(self):
        event = build_decision_event(
            decision="deny",
            confidence=0.6,
            applied_policies=["high-risk-network-block"],
            required_actions=["deny"],
            trust_score=0.123456,
            expires_at="2025-06-02T12:15:00+00:00",
            context=Context(),
            policies_evaluated=4,
            eval_ms=1.23456,
        )

        assert event.trust_score == 0.1235
        assert event.eval_ms == 1.235
        assert event.user_id is None
        assert event.resource is None

    def test_none_fields_omitted(self):
        stream = io.StringIO()
        logger = logging.getLogger(DECISION_LOGGER_NAME + ".test")
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ISO8601Formatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            event = build_decision_event(
                decision="allow",
                confidence=0.5,
                applied_policies=[],
                required_actions=[],
                trust_score=0.9,
                expires_at="2025-06-02T12:15:00+00:00",
                context=Context(),
                policies_evaluated=0,
                eval_ms=0.1,
            )
            log_decision(event, logger=logger)
        finally:
            logger.removeHandler(handler)

        payload = json.loads(stream.getvalue())
        assert "user_id" not in payload
        assert payload["policies_evaluated"] == 0
