"""Audit events for access decisions."""

from zerotrust_engine.telemetry.audit.decision_logger import (
    DECISION_LOGGER_NAME,
    build_decision_event,
    get_decision_logger,
    log_decision,
)

__all__ = [
    "DECISION_LOGGER_NAME",
    "build_decision_event",
    "get_decision_logger",
    "log_decision",
]
