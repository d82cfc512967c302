"""Access decision engine - evaluate a Context against zero trust policies.

This module turns a context snapshot and a policy collection into an
AccessDecision: allow, deny, or conditional plus the remediation actions
required.

Evaluation flow:
1. Snapshot "now" and compute the trust score
2. Keep active policies whose conditions all hold, highest priority first
3. Merge each policy's actions and escalate: ALLOW < CONDITIONAL < DENY
   (a deny stops evaluation; lower-priority policies are not consulted)
4. If still ALLOW, gate on the trust score (deny / conditional + MFA)
5. Deduplicate actions, compute confidence and the validity window

Design principles:
1. All conditions in a policy use AND logic
2. Decisions only escalate; DENY is absorbing
3. Incomplete context never raises - missing fields fail conditions
4. Stateless: nothing carries over between calls
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

from zerotrust_engine.config import EngineConfig
from zerotrust_engine.constants import LOW_TRUST_SCORE_REASON, STEP_UP_ACTION_TYPES
from zerotrust_engine.context import Context
from zerotrust_engine.exceptions import PolicyEvaluationFailure
from zerotrust_engine.pdp.actions import deduplicate_actions, describe_actions
from zerotrust_engine.pdp.compliance import ComplianceResult, perform_continuous_compliance
from zerotrust_engine.pdp.decision import Decision, escalate
from zerotrust_engine.pdp.matcher import evaluate_policy
from zerotrust_engine.pdp.policy import Action, ActionType, Policy, create_default_policies
from zerotrust_engine.pdp.trust import TrustScore, calculate_trust_score
from zerotrust_engine.telemetry.audit.decision_logger import build_decision_event, log_decision

__all__ = [
    "AccessDecision",
    "AccessDecisionEngine",
    "MatchedPolicy",
    "evaluate_access",
    "policy_outcome",
]

logger = logging.getLogger(__name__)


class AccessDecision(BaseModel):
    """Final verdict for one access request.

    Attributes:
        decision: allow, deny or conditional.
        confidence: Grows with the number of applied policies, capped below 1.
        applied_policies: Ids of the policies that matched, in evaluation order.
        required_actions: Deduplicated remediation actions.
        reasoning: Human-readable trace of how the decision was reached.
        expires_at: End of the decision's validity window.
        conditions: Human-readable requirements; only set when conditional.
        trust_score: The trust score the decision was gated on.
    """

    decision: Decision
    confidence: float = Field(ge=0.0, le=1.0)
    applied_policies: list[str] = Field(default_factory=list)
    required_actions: list[Action] = Field(default_factory=list)
    reasoning: list[str] = Field(default_factory=list)
    expires_at: datetime
    conditions: list[str] | None = None
    trust_score: TrustScore

    model_config = ConfigDict(frozen=True)


@dataclass
class MatchedPolicy:
    """A policy that matched the context.

    Attributes:
        id: Policy identifier.
        name: Policy name.
        priority: Policy priority.
        outcome: The decision this policy alone would push towards.
    """

    id: str
    name: str
    priority: int
    outcome: Decision


def policy_outcome(policy: Policy) -> Decision:
    """The most restrictive decision a single policy's actions call for."""
    if policy.has_action(ActionType.DENY):
        return Decision.DENY
    if policy.has_action(*STEP_UP_ACTION_TYPES):
        return Decision.CONDITIONAL
    return Decision.ALLOW


def _applicable_policies(policies: list[Policy], context: Context) -> list[tuple[Policy, str]]:
    """Active policies whose conditions hold, highest priority first.

    Sorting is stable, so equal priorities keep their input order.

    Returns:
        (policy, reason) pairs.
    """
    matched = []
    for policy in policies:
        if not policy.active:
            continue
        evaluation = evaluate_policy(policy, context)
        if evaluation.applies:
            matched.append((policy, evaluation.reason))
    return sorted(matched, key=lambda item: item[0].priority, reverse=True)


def _decide(
    context: Context,
    policies: list[Policy],
    config: EngineConfig,
    now: datetime,
) -> AccessDecision:
    trust_score = calculate_trust_score(context, config=config, now=now)

    decision = Decision.ALLOW
    applied_policies: list[str] = []
    required_actions: list[Action] = []
    reasoning: list[str] = []

    for policy, reason in _applicable_policies(policies, context):
        applied_policies.append(policy.id)
        reasoning.append(f"Policy '{policy.name}': {reason}")
        required_actions.extend(policy.actions)

        decision = escalate(decision, policy_outcome(policy))
        logger.debug("Policy %s applied (priority %d), decision now %s", policy.id, policy.priority, decision.value)

        if decision.is_final:
            break

    if decision is Decision.ALLOW:
        thresholds = config.thresholds
        if trust_score.overall < thresholds.deny:
            decision = Decision.DENY
            reasoning.append(f"Trust score too low: {trust_score.overall:.2f}")
        elif trust_score.overall < thresholds.conditional:
            decision = Decision.CONDITIONAL
            reasoning.append(f"Trust score requires additional verification: {trust_score.overall:.2f}")
            required_actions.append(
                Action(type=ActionType.REQUIRE_MFA, parameters={"reason": LOW_TRUST_SCORE_REASON})
            )

    required_actions = deduplicate_actions(required_actions)
    confidence = min(
        config.base_confidence + config.confidence_step * len(applied_policies),
        config.max_confidence,
    )

    return AccessDecision(
        decision=decision,
        confidence=confidence,
        applied_policies=applied_policies,
        required_actions=required_actions,
        reasoning=reasoning,
        expires_at=now + timedelta(seconds=config.decision_ttl_seconds),
        conditions=describe_actions(required_actions) if decision is Decision.CONDITIONAL else None,
        trust_score=trust_score,
    )


def evaluate_access(
    context: Context,
    policies: list[Policy] | None = None,
    config: EngineConfig | None = None,
    now: datetime | None = None,
) -> AccessDecision:
    """Evaluate an access request against zero trust policies.

    Deterministic for identical inputs (and "now"); keeps no state.

    Args:
        context: Context snapshot for the request.
        policies: Policies to evaluate (default: the built-in seed set).
        config: Engine configuration (default: EngineConfig()).
        now: Evaluation time, read once (default: current UTC time).

    Returns:
        AccessDecision for the request.

    Raises:
        PolicyEvaluationFailure: If evaluation fails unexpectedly. Callers
            must treat this as a deny.
    """
    started = time.perf_counter()
    config = config or EngineConfig()
    now = now or datetime.now(timezone.utc)
    if policies is None:
        policies = create_default_policies()

    try:
        result = _decide(context, policies, config, now)
    except Exception as e:
        # Cannot trust a decision if evaluation crashes
        raise PolicyEvaluationFailure(
            f"Access evaluation failed unexpectedly: {type(e).__name__}: {e}. "
            "Treat the request as denied."
        ) from e

    log_decision(
        build_decision_event(
            decision=result.decision.value,
            confidence=result.confidence,
            applied_policies=result.applied_policies,
            required_actions=[action.type for action in result.required_actions],
            trust_score=result.trust_score.overall,
            expires_at=result.expires_at.isoformat(),
            context=context,
            policies_evaluated=sum(1 for p in policies if p.active),
            eval_ms=(time.perf_counter() - started) * 1000,
        )
    )
    return result


class AccessDecisionEngine:
    """Access decision engine bound to a policy set and configuration.

    Convenience wrapper over evaluate_access, calculate_trust_score and
    perform_continuous_compliance for callers that evaluate many requests
    against the same policies.

    Attributes:
        policies: The policies to evaluate against.
        config: Engine configuration.
    """

    def __init__(
        self,
        policies: list[Policy] | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            policies: Policy set (default: the built-in seed set).
            config: Engine configuration (default: EngineConfig()).
        """
        self.policies = policies if policies is not None else create_default_policies()
        self.config = config or EngineConfig()

    def evaluate(self, context: Context, now: datetime | None = None) -> AccessDecision:
        """Evaluate a request context. See evaluate_access."""
        return evaluate_access(context, self.policies, config=self.config, now=now)

    def trust_score(self, context: Context, now: datetime | None = None) -> TrustScore:
        """Compute the trust score for a context."""
        return calculate_trust_score(context, config=self.config, now=now)

    def check_compliance(self, context: Context) -> ComplianceResult:
        """Run the continuous compliance check for a live context."""
        return perform_continuous_compliance(context, self.policies)

    def get_matching_policies(self, context: Context) -> list[MatchedPolicy]:
        """Get all active policies that match the context, highest priority first.

        Unlike evaluate(), this does not stop at a deny; it lists every match.

        Args:
            context: Context to match against.

        Returns:
            List of MatchedPolicy, one per applicable policy.
        """
        return [
            MatchedPolicy(
                id=policy.id,
                name=policy.name,
                priority=policy.priority,
                outcome=policy_outcome(policy),
            )
            for policy, _ in _applicable_policies(self.policies, context)
        ]
