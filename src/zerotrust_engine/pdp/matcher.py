"""Condition matching for policy evaluation.

Evaluates a single Condition against a Context, and a whole Policy as the
AND of its conditions.

Matching is total: every comparison yields True or False and nothing raises.
Values are coerced the way the policy format expects, matching how the
surrounding application has always interpreted it:

    text:    None -> "null", undefined -> "undefined", booleans -> "true"/"false",
             whole floats without ".0", lists comma-joined
    numbers: booleans -> 1/0, None -> 0, "" -> 0, unparseable -> NaN

NaN never compares true, so a missing or non-numeric field fails every
numeric operator.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from zerotrust_engine.context import UNDEFINED, Context, get_field_value
from zerotrust_engine.pdp.policy import Condition, ConditionOperator, Policy

__all__ = [
    "PolicyEvaluation",
    "evaluate_condition",
    "evaluate_policy",
    "policy_applies",
    "to_number",
    "to_text",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Coercion
# =============================================================================


def _number_to_text(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_text(value: Any) -> str:
    """Coerce a context or operand value to text."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_to_text(value)
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None or item is UNDEFINED else to_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def to_number(value: Any) -> float:
    """Coerce a context or operand value to a float (NaN if not numeric)."""
    if value is UNDEFINED:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0.0
        try:
            return float(stripped)
        except ValueError:
            return math.nan
    if isinstance(value, datetime):
        return value.timestamp() * 1000
    if isinstance(value, (list, tuple)):
        return to_number(to_text(value))
    return math.nan


def _strict_equals(left: Any, right: Any) -> bool:
    """Type-preserving equality: 1 != True, "1" != 1, 1 == 1.0."""
    if left is UNDEFINED or right is UNDEFINED or left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return type(left) is type(right) and left == right


# =============================================================================
# Operators
# =============================================================================


def _match_equals(actual: Any, expected: Any) -> bool:
    return _strict_equals(actual, expected)


def _match_not_equals(actual: Any, expected: Any) -> bool:
    return not _strict_equals(actual, expected)


def _match_contains(actual: Any, expected: Any) -> bool:
    return to_text(expected) in to_text(actual)


def _match_not_contains(actual: Any, expected: Any) -> bool:
    return to_text(expected) not in to_text(actual)


def _match_greater_than(actual: Any, expected: Any) -> bool:
    return to_number(actual) > to_number(expected)


def _match_less_than(actual: Any, expected: Any) -> bool:
    return to_number(actual) < to_number(expected)


def _match_in_range(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)) or len(expected) != 2:
        logger.debug("in_range operand is not a [min, max] pair: %r", expected)
        return False
    low, high = to_number(expected[0]), to_number(expected[1])
    number = to_number(actual)
    return low <= number <= high


def _match_regex(actual: Any, expected: Any) -> bool:
    pattern = to_text(expected)
    try:
        return re.search(pattern, to_text(actual)) is not None
    except re.error as e:
        logger.warning("Invalid regex pattern %r in policy condition: %s", pattern, e)
        return False


_OPERATORS: dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _match_equals,
    ConditionOperator.NOT_EQUALS: _match_not_equals,
    ConditionOperator.CONTAINS: _match_contains,
    ConditionOperator.NOT_CONTAINS: _match_not_contains,
    ConditionOperator.GREATER_THAN: _match_greater_than,
    ConditionOperator.LESS_THAN: _match_less_than,
    ConditionOperator.IN_RANGE: _match_in_range,
    ConditionOperator.REGEX: _match_regex,
}


# =============================================================================
# Evaluation
# =============================================================================


def evaluate_condition(condition: Condition, context: Context) -> bool:
    """Evaluate a single condition against a context.

    Args:
        condition: Condition to evaluate.
        context: Context snapshot.

    Returns:
        True if the condition holds. Unknown operators return False.
    """
    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.debug("Unknown condition operator %r on field %s", condition.operator, condition.field)
        return False

    actual = get_field_value(context, condition.field)
    return _OPERATORS[operator](actual, condition.value)


def policy_applies(policy: Policy, context: Context) -> bool:
    """Check whether every condition of a policy holds (empty = always)."""
    return all(evaluate_condition(condition, context) for condition in policy.conditions)


@dataclass
class PolicyEvaluation:
    """Outcome of evaluating one policy's conditions.

    Attributes:
        applies: True if all conditions hold.
        reason: Human-readable explanation.
        failed_fields: Fields of the conditions that did not hold.
    """

    applies: bool
    reason: str
    failed_fields: list[str] = field(default_factory=list)


def evaluate_policy(policy: Policy, context: Context) -> PolicyEvaluation:
    """Evaluate a policy's conditions and explain the result.

    All conditions are evaluated (no short-circuit) so the reason can name
    every failing field.

    Args:
        policy: Policy to evaluate.
        context: Context snapshot.

    Returns:
        PolicyEvaluation with applies flag and reason.
    """
    failed = [c.field for c in policy.conditions if not evaluate_condition(c, context)]

    if not failed:
        return PolicyEvaluation(applies=True, reason=f"All conditions met for {policy.category} policy")

    return PolicyEvaluation(
        applies=False,
        reason=f"Conditions not met: {', '.join(failed)}",
        failed_fields=failed,
    )
