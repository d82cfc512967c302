"""Decision outcomes and their severity ordering.

Decisions form a three-state lattice ordered by restrictiveness:

    ALLOW < CONDITIONAL < DENY

Merging two outcomes always keeps the more restrictive one. DENY is
absorbing and CONDITIONAL can only move up to DENY, never back to ALLOW.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["Decision", "escalate"]


class Decision(str, Enum):
    """Access decision outcome.

    Values match the serialized form ("allow", "deny", "conditional").
    """

    ALLOW = "allow"
    CONDITIONAL = "conditional"
    DENY = "deny"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @property
    def is_final(self) -> bool:
        """True if nothing can change this outcome any further."""
        return self is Decision.DENY


_SEVERITY: dict[Decision, int] = {
    Decision.ALLOW: 0,
    Decision.CONDITIONAL: 1,
    Decision.DENY: 2,
}


def escalate(current: Decision, candidate: Decision) -> Decision:
    """Merge two outcomes, keeping the more restrictive.

    Args:
        current: Outcome so far.
        candidate: Outcome contributed by the next policy or gate.

    Returns:
        Whichever of the two has the higher severity.
    """
    return candidate if candidate.severity > current.severity else current
