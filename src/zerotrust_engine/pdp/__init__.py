"""Policy Decision Point (PDP) - zero trust access evaluation.

This module evaluates policies against a Context to produce decisions.
Following NIST SP 800-207 Zero Trust Architecture:

- context/: The snapshot assembled by collaborators (PIPs)
- pdp/ (this module): Scores trust and evaluates policies against context
- enforcement of the decision is the caller's job (PEP)

The PDP is intentionally stateless and side-effect free, apart from
emitting a decision log record.

Structure:
    decision.py       - Decision enum (ALLOW/CONDITIONAL/DENY) and escalation
    policy.py         - Policy models (Policy, Condition, Action, PolicySet)
    matcher.py        - Condition evaluation and value coercion
    trust.py          - Trust score calculation
    actions.py        - Action deduplication and descriptions
    engine.py         - evaluate_access and AccessDecisionEngine
    compliance.py     - Continuous compliance checking

Policy file I/O is in utils/policy/policy_helpers.py.
"""

from zerotrust_engine.pdp.actions import deduplicate_actions, describe_actions
from zerotrust_engine.pdp.compliance import (
    ComplianceResult,
    ComplianceViolation,
    perform_continuous_compliance,
)
from zerotrust_engine.pdp.decision import Decision, escalate
from zerotrust_engine.pdp.engine import (
    AccessDecision,
    AccessDecisionEngine,
    MatchedPolicy,
    evaluate_access,
)
from zerotrust_engine.pdp.matcher import PolicyEvaluation, evaluate_condition, evaluate_policy, policy_applies
from zerotrust_engine.pdp.policy import (
    Action,
    ActionType,
    Condition,
    ConditionOperator,
    Policy,
    PolicyCategory,
    PolicySet,
    create_default_policies,
    create_policy,
)
from zerotrust_engine.pdp.trust import TrustFactor, TrustScore, calculate_trust_score

# NOTE: Policy I/O functions (load_policies, etc.) are in utils.policy
# to avoid circular imports. Import them directly:
#   from zerotrust_engine.utils.policy import load_policies

__all__ = [
    # Decision
    "Decision",
    "escalate",
    # Engine
    "AccessDecision",
    "AccessDecisionEngine",
    "MatchedPolicy",
    "evaluate_access",
    # Trust
    "TrustFactor",
    "TrustScore",
    "calculate_trust_score",
    # Compliance
    "ComplianceResult",
    "ComplianceViolation",
    "perform_continuous_compliance",
    # Matching
    "PolicyEvaluation",
    "evaluate_condition",
    "evaluate_policy",
    "policy_applies",
    # Actions
    "deduplicate_actions",
    "describe_actions",
    # Policy models
    "Action",
    "ActionType",
    "Condition",
    "ConditionOperator",
    "Policy",
    "PolicyCategory",
    "PolicySet",
    "create_default_policies",
    "create_policy",
]
