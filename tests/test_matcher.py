"""Tests for condition matching and field lookup.

Tests cover:
- Dot-path lookup (aliases, snake_case, undefined paths, explicit nulls)
- Each operator, including coercion edge cases
- Fail-closed behavior (unknown operators, bad operands, invalid regex)
- Policy-level AND semantics
"""

from __future__ import annotations

import math

import pytest

from zerotrust_engine.context import UNDEFINED, Context, UserContext, get_field_value
from zerotrust_engine.pdp import Condition, ConditionOperator, Policy, evaluate_condition, evaluate_policy
from zerotrust_engine.pdp.matcher import policy_applies, to_number, to_text


def cond(field: str, operator: str, value) -> Condition:
    return Condition(field=field, operator=operator, value=value)


# ============================================================================
# Field lookup
# ============================================================================


class TestFieldLookup:
    """Tests for get_field_value."""

    def test_camel_case_alias_path(self, neutral_context: Context):
        assert get_field_value(neutral_context, "device.isManaged") is True

    def test_snake_case_path(self, neutral_context: Context):
        assert get_field_value(neutral_context, "device.is_managed") is True

    def test_explicit_vpn_alias(self, neutral_context: Context):
        assert get_field_value(neutral_context, "network.isVPN") is False

    def test_unknown_path_is_undefined(self, neutral_context: Context):
        assert get_field_value(neutral_context, "user.nonexistent") is UNDEFINED
        assert get_field_value(neutral_context, "nothing.here.at.all") is UNDEFINED

    def test_section_path_is_undefined(self, neutral_context: Context):
        assert get_field_value(neutral_context, "user") is UNDEFINED

    def test_missing_section_is_undefined(self):
        assert get_field_value(Context(), "device.isManaged") is UNDEFINED

    def test_unset_field_is_undefined(self):
        context = Context(user=UserContext(id="u1"))
        assert get_field_value(context, "user.role") is UNDEFINED

    def test_explicit_null_is_none(self):
        context = Context.model_validate({"user": {"role": None}})
        assert get_field_value(context, "user.role") is None


# ============================================================================
# Coercion
# ============================================================================


class TestCoercion:
    """Tests for text and number coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, "true"),
            (None, "null"),
            (UNDEFINED, "undefined"),
            (1.0, "1"),
            (0.5, "0.5"),
            (["a", "b"], "a,b"),
            ({"a": 1}, "[object Object]"),
        ],
    )
    def test_to_text(self, value, expected):
        assert to_text(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(True, 1.0), (None, 0.0), ("", 0.0), (" 0.9 ", 0.9), (3, 3.0)],
    )
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [UNDEFINED, "abc", {"a": 1}])
    def test_to_number_nan(self, value):
        assert math.isnan(to_number(value))


# ============================================================================
# Operators
# ============================================================================


class TestEquals:
    """Tests for equals / not_equals (type-preserving)."""

    def test_equals_string(self, neutral_context: Context):
        assert evaluate_condition(cond("user.role", "equals", "user"), neutral_context)

    def test_equals_bool(self, make_context):
        context = make_context(device={"isManaged": False})
        assert evaluate_condition(cond("device.isManaged", "equals", False), context)

    def test_equals_is_type_preserving(self, make_context):
        context = make_context(device={"isManaged": True})
        assert not evaluate_condition(cond("device.isManaged", "equals", 1), context)
        assert not evaluate_condition(cond("device.isManaged", "equals", "true"), context)

    def test_equals_int_and_float(self, neutral_context: Context):
        # riskScore 0.1 vs 0.1; and integer-valued float vs int
        assert evaluate_condition(cond("user.riskScore", "equals", 0.1), neutral_context)
        context = Context.model_validate({"network": {"threatLevel": 1}})
        assert evaluate_condition(cond("network.threatLevel", "equals", 1), context)

    def test_equals_undefined_is_false(self):
        assert not evaluate_condition(cond("device.isManaged", "equals", False), Context())

    def test_not_equals_undefined_is_true(self):
        assert evaluate_condition(cond("user.role", "not_equals", "admin"), Context())

    def test_not_equals(self, neutral_context: Context):
        assert evaluate_condition(cond("user.role", "not_equals", "admin"), neutral_context)
        assert not evaluate_condition(cond("user.role", "not_equals", "user"), neutral_context)


class TestContains:
    """Tests for contains / not_contains (text substring)."""

    def test_contains_substring(self, neutral_context: Context):
        assert evaluate_condition(cond("request.resource", "contains", "handbook"), neutral_context)

    def test_contains_on_list_field(self, neutral_context: Context):
        # groups ["engineering", "ops"] -> "engineering,ops"
        assert evaluate_condition(cond("user.groups", "contains", "ops"), neutral_context)

    def test_contains_coerces_operand(self, neutral_context: Context):
        assert evaluate_condition(cond("network.ipAddress", "contains", 10), neutral_context)

    def test_not_contains(self, neutral_context: Context):
        assert evaluate_condition(cond("request.resource", "not_contains", "admin"), neutral_context)
        assert not evaluate_condition(cond("request.resource", "not_contains", "docs"), neutral_context)

    def test_contains_on_undefined_uses_text(self):
        assert evaluate_condition(cond("user.role", "contains", "undef"), Context())


class TestNumericComparisons:
    """Tests for greater_than / less_than / in_range."""

    def test_greater_than(self, make_context):
        context = make_context(network={"threatLevel": 0.9})
        assert evaluate_condition(cond("network.threatLevel", "greater_than", 0.8), context)
        assert not evaluate_condition(cond("network.threatLevel", "greater_than", 0.9), context)

    def test_greater_than_coerces_string_operand(self, make_context):
        context = make_context(network={"threatLevel": 0.9})
        assert evaluate_condition(cond("network.threatLevel", "greater_than", "0.8"), context)

    def test_less_than(self, neutral_context: Context):
        assert evaluate_condition(cond("user.riskScore", "less_than", 0.5), neutral_context)

    def test_undefined_fails_both_comparisons(self):
        assert not evaluate_condition(cond("network.threatLevel", "greater_than", 0.8), Context())
        assert not evaluate_condition(cond("network.threatLevel", "less_than", 0.8), Context())

    def test_non_numeric_text_fails(self, neutral_context: Context):
        assert not evaluate_condition(cond("user.role", "greater_than", 0), neutral_context)

    @pytest.mark.parametrize("threat,expected", [(0.2, True), (0.35, True), (0.5, True), (0.51, False), (0.1, False)])
    def test_in_range_inclusive(self, make_context, threat, expected):
        context = make_context(network={"threatLevel": threat})
        assert evaluate_condition(cond("network.threatLevel", "in_range", [0.2, 0.5]), context) is expected

    @pytest.mark.parametrize("operand", [0.5, [0.1], [0.1, 0.2, 0.3], "0.1,0.5", None])
    def test_in_range_malformed_operand_is_false(self, neutral_context: Context, operand):
        assert not evaluate_condition(cond("network.threatLevel", "in_range", operand), neutral_context)


class TestRegex:
    """Tests for regex."""

    def test_regex_match(self, neutral_context: Context):
        assert evaluate_condition(cond("network.ipAddress", "regex", r"^10\."), neutral_context)

    def test_regex_no_match(self, neutral_context: Context):
        assert not evaluate_condition(cond("network.ipAddress", "regex", r"^192\.168\."), neutral_context)

    def test_regex_searches_anywhere(self, neutral_context: Context):
        assert evaluate_condition(cond("request.resource", "regex", "hand"), neutral_context)

    def test_invalid_pattern_is_false(self, neutral_context: Context):
        assert not evaluate_condition(cond("network.ipAddress", "regex", "(unclosed"), neutral_context)


class TestUnknownOperator:
    """Unknown operators fail closed."""

    def test_unknown_operator_is_false(self, neutral_context: Context):
        assert not evaluate_condition(cond("user.role", "starts_with", "us"), neutral_context)

    def test_enum_operator_accepted(self, neutral_context: Context):
        condition = Condition(field="user.role", operator=ConditionOperator.EQUALS, value="user")
        assert condition.operator == "equals"
        assert evaluate_condition(condition, neutral_context)


# ============================================================================
# Policy evaluation
# ============================================================================


def _policy(*conditions: Condition) -> Policy:
    return Policy(id="p", name="P", category="identity", conditions=list(conditions))


class TestPolicyEvaluation:
    """Tests for evaluate_policy and policy_applies."""

    def test_no_conditions_always_applies(self):
        assert policy_applies(_policy(), Context())

    def test_all_conditions_must_hold(self, neutral_context: Context):
        policy = _policy(
            cond("user.role", "equals", "user"),
            cond("device.isManaged", "equals", False),
        )
        assert not policy_applies(policy, neutral_context)

    def test_logical_or_is_not_honored(self, neutral_context: Context):
        policy = _policy(
            cond("user.role", "equals", "user"),
            Condition(field="device.isManaged", operator="equals", value=False, logicalOperator="OR"),
        )
        assert policy.conditions[1].logical_operator == "OR"
        assert not policy_applies(policy, neutral_context)

    def test_reason_when_applies(self, neutral_context: Context):
        evaluation = evaluate_policy(_policy(cond("user.role", "equals", "user")), neutral_context)
        assert evaluation.applies
        assert evaluation.reason == "All conditions met for identity policy"

    def test_reason_lists_failed_fields(self, neutral_context: Context):
        policy = _policy(
            cond("user.role", "equals", "admin"),
            cond("user.mfaEnabled", "equals", True),
            cond("network.threatLevel", "greater_than", 0.8),
        )
        evaluation = evaluate_policy(policy, neutral_context)
        assert not evaluation.applies
        assert evaluation.failed_fields == ["user.role", "network.threatLevel"]
        assert evaluation.reason == "Conditions not met: user.role, network.threatLevel"
