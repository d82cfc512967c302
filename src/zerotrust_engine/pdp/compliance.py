"""Continuous compliance checking.

Re-evaluates active policies against a live context to find sessions that
drifted out of compliance after access was granted: a policy that now
applies (or always applied) requires MFA, but the session never completed
it.

Independent of evaluate_access; meant to be called periodically for an
open session.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from zerotrust_engine.context import Context
from zerotrust_engine.pdp.actions import deduplicate_actions
from zerotrust_engine.pdp.matcher import evaluate_policy
from zerotrust_engine.pdp.policy import Action, ActionType, Policy, create_default_policies

__all__ = [
    "ComplianceResult",
    "ComplianceViolation",
    "perform_continuous_compliance",
]

logger = logging.getLogger(__name__)

MFA_NOT_VERIFIED_REASON = "MFA required but not verified"


class ComplianceViolation(BaseModel):
    """A policy whose requirement the live session does not satisfy.

    Attributes:
        policy: Name of the violated policy.
        reason: What is missing.
    """

    policy: str
    reason: str

    model_config = ConfigDict(frozen=True)


class ComplianceResult(BaseModel):
    """Outcome of a continuous compliance check."""

    compliant: bool
    violations: list[ComplianceViolation] = Field(default_factory=list)
    recommended_actions: list[Action] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


def perform_continuous_compliance(
    context: Context,
    policies: list[Policy] | None = None,
) -> ComplianceResult:
    """Check a live context against the active policies.

    For every active policy whose conditions hold: if it requires MFA but
    the session has not verified MFA, record a violation and recommend an
    immediate MFA challenge.

    Args:
        context: Live context snapshot.
        policies: Policies to check (default: the built-in seed set).

    Returns:
        ComplianceResult; compliant is True iff there are no violations.
    """
    if policies is None:
        policies = create_default_policies()

    mfa_verified = bool(context.session and context.session.mfa_verified)

    violations: list[ComplianceViolation] = []
    recommended: list[Action] = []

    for policy in policies:
        if not policy.active:
            continue
        if not evaluate_policy(policy, context).applies:
            continue

        if policy.has_action(ActionType.REQUIRE_MFA) and not mfa_verified:
            logger.debug("Policy %s requires MFA but session has not verified it", policy.id)
            violations.append(ComplianceViolation(policy=policy.name, reason=MFA_NOT_VERIFIED_REASON))
            recommended.append(Action(type=ActionType.REQUIRE_MFA, parameters={"immediate": True}))

    return ComplianceResult(
        compliant=not violations,
        violations=violations,
        recommended_actions=deduplicate_actions(recommended),
    )
