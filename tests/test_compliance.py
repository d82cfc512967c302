"""Tests for continuous compliance checking."""

from __future__ import annotations

from zerotrust_engine.context import Context
from zerotrust_engine.pdp import Action, Condition, Policy, perform_continuous_compliance


def mfa_policy(policy_id: str, name: str, conditions: list[Condition] | None = None, active: bool = True) -> Policy:
    return Policy(
        id=policy_id,
        name=name,
        category="identity",
        conditions=conditions or [],
        actions=[Action(type="require_mfa")],
        active=active,
    )


class TestContinuousCompliance:
    """Tests for perform_continuous_compliance."""

    def test_admin_without_verified_mfa_violates(self, make_context):
        context = make_context(user={"role": "admin"}, session={"mfaVerified": False})

        result = perform_continuous_compliance(context)

        assert not result.compliant
        assert [(v.policy, v.reason) for v in result.violations] == [
            ("Admin MFA Requirement", "MFA required but not verified")
        ]
        assert result.recommended_actions == [Action(type="require_mfa", parameters={"immediate": True})]

    def test_verified_session_is_compliant(self, make_context):
        context = make_context(user={"role": "admin"}, session={"mfaVerified": True})

        result = perform_continuous_compliance(context)

        assert result.compliant
        assert result.violations == []
        assert result.recommended_actions == []

    def test_missing_session_counts_as_unverified(self, make_context):
        context = make_context(user={"role": "admin"}, session=None)

        result = perform_continuous_compliance(context)

        assert not result.compliant

    def test_non_mfa_policies_never_violate(self, make_context):
        # Unmanaged device and network block apply but do not require MFA
        context = make_context(
            device={"isManaged": False},
            network={"threatLevel": 0.95},
            session={"mfaVerified": False},
        )

        result = perform_continuous_compliance(context)

        assert result.compliant

    def test_violations_in_input_order_with_single_recommendation(self, make_context):
        context = make_context(
            user={"role": "admin"},
            application={"dataClassification": "confidential"},
            session={"mfaVerified": False},
        )
        policies = [
            mfa_policy("second", "Second"),
            mfa_policy("first", "First"),
        ]

        result = perform_continuous_compliance(context, policies)

        assert [v.policy for v in result.violations] == ["Second", "First"]
        assert len(result.recommended_actions) == 1

    def test_inactive_policies_ignored(self):
        result = perform_continuous_compliance(Context(), [mfa_policy("off", "Off", active=False)])
        assert result.compliant

    def test_policy_must_apply(self, neutral_context: Context):
        policy = mfa_policy(
            "admins",
            "Admins",
            conditions=[Condition(field="user.role", operator="equals", value="admin")],
        )
        context = neutral_context.model_copy(update={"session": None})

        result = perform_continuous_compliance(context, [policy])

        assert result.compliant

    def test_empty_context_against_seed_policies(self):
        result = perform_continuous_compliance(Context())
        assert result.compliant
