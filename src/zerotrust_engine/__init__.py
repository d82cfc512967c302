"""zerotrust-engine: Zero trust access decision engine.

Computes a continuous trust score and an allow / deny / conditional access
decision from a context snapshot and a set of declarative policies.

Example:
    from zerotrust_engine import Context, evaluate_access

    decision = evaluate_access(Context.model_validate(snapshot))
    if decision.decision == "conditional":
        print(decision.conditions)
"""

__version__ = "0.1.0"

from zerotrust_engine.config import EngineConfig
from zerotrust_engine.context import Context
from zerotrust_engine.exceptions import PolicyEvaluationFailure, ZeroTrustEngineError
from zerotrust_engine.pdp import (
    AccessDecision,
    AccessDecisionEngine,
    Action,
    ComplianceResult,
    Condition,
    Decision,
    Policy,
    TrustScore,
    calculate_trust_score,
    create_default_policies,
    create_policy,
    evaluate_access,
    perform_continuous_compliance,
)

__all__ = [
    "__version__",
    "AccessDecision",
    "AccessDecisionEngine",
    "Action",
    "ComplianceResult",
    "Condition",
    "Context",
    "Decision",
    "EngineConfig",
    "Policy",
    "PolicyEvaluationFailure",
    "TrustScore",
    "ZeroTrustEngineError",
    "calculate_trust_score",
    "create_default_policies",
    "create_policy",
    "evaluate_access",
    "perform_continuous_compliance",
]
