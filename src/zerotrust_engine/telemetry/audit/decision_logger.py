"""Decision logging for access evaluation.

Each evaluate_access call emits one DecisionEvent on the
"zerotrust_engine.audit.decisions" logger at INFO. The engine only emits;
where events end up (stream, file, collector) is decided by the handlers
the host installs.
"""

import logging

from zerotrust_engine.context import Context
from zerotrust_engine.telemetry.models.decision import DecisionEvent

DECISION_LOGGER_NAME = "zerotrust_engine.audit.decisions"


def get_decision_logger() -> logging.Logger:
    """Return the logger decision events are emitted on."""
    return logging.getLogger(DECISION_LOGGER_NAME)


def build_decision_event(
    *,
    decision: str,
    confidence: float,
    applied_policies: list[str],
    required_actions: list[str],
    trust_score: float,
    expires_at: str,
    context: Context,
    policies_evaluated: int,
    eval_ms: float,
) -> DecisionEvent:
    """Build a DecisionEvent, summarizing the context down to identifiers.

    Returns:
        DecisionEvent ready to log.
    """
    return DecisionEvent(
        decision=decision,
        confidence=confidence,
        applied_policies=applied_policies,
        required_actions=required_actions,
        trust_score=round(trust_score, 4),
        expires_at=expires_at,
        user_id=context.user.id if context.user else None,
        device_id=context.device.id if context.device else None,
        session_id=context.session.id if context.session else None,
        resource=context.request.resource if context.request else None,
        action=context.request.action if context.request else None,
        policies_evaluated=policies_evaluated,
        eval_ms=round(eval_ms, 3),
    )


def log_decision(event: DecisionEvent, logger: logging.Logger | None = None) -> None:
    """Emit a decision event as a dict message.

    Args:
        event: The event to log.
        logger: Target logger (default: the decision logger).
    """
    logger = logger or get_decision_logger()
    if logger.isEnabledFor(logging.INFO):
        logger.info(event.model_dump(mode="json", exclude={"time"}, exclude_none=True))
