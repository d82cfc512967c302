"""Exceptions for zerotrust-engine.

The evaluation engine itself is total: incomplete context, unknown operators
and unknown action types never raise. These exceptions cover the remaining
failure modes around it.
"""

from __future__ import annotations

__all__ = [
    "ZeroTrustEngineError",
    "PolicyEvaluationFailure",
]


class ZeroTrustEngineError(Exception):
    """Base class for all zerotrust-engine errors."""


class PolicyEvaluationFailure(ZeroTrustEngineError):
    """Evaluation crashed unexpectedly.

    Raised when an internal error escapes policy evaluation. A decision
    cannot be trusted after such a failure, so callers must treat it as a
    deny.
    """
