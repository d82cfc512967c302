"""Decision event model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DecisionEvent(BaseModel):
    """
    One access decision log entry.

    Records the outcome of a single evaluate_access call: the verdict, which
    policies matched, what remediation was required, and a summary of the
    context (ids only, not the full snapshot).
    """

    # --- core ---
    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )
    event: Literal["access_decision"] = "access_decision"

    # --- decision outcome ---
    decision: Literal["allow", "deny", "conditional"]
    confidence: float
    applied_policies: list[str] = Field(default_factory=list)
    required_actions: list[str] = Field(default_factory=list)  # action types only
    trust_score: float
    expires_at: str

    # --- context summary ---
    user_id: str | None = None
    device_id: str | None = None
    session_id: str | None = None
    resource: str | None = None
    action: str | None = None

    # --- policy ---
    policies_evaluated: int  # active policies considered

    # --- performance ---
    eval_ms: float

    model_config = ConfigDict(extra="forbid")
