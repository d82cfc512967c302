"""Policy models for zero trust access evaluation.

This module defines the policy schema used by the decision engine.

Policy structure:
    PolicySet
    ├── version: Schema version for migrations
    └── policies: List[Policy]
        └── Policy
            ├── id / name / description
            ├── category: device | network | identity | application | data | location
            ├── conditions: List[Condition] (AND logic, empty = always applies)
            ├── actions: List[Action]
            ├── priority: Higher evaluated first
            └── active: Inactive policies are never evaluated

Design principles:
1. All conditions in a policy use AND logic (logical_operator is stored, not honored)
2. Unknown operators and action types validate, so they can fail closed
   (operators) or pass through verbatim (actions) at evaluation time
3. Policies are frozen; edits happen outside the engine
"""

from __future__ import annotations

import secrets
import string
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Self

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from zerotrust_engine.constants import DEFAULT_POLICY_PRIORITY

__all__ = [
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

PolicyCategory = Literal["device", "network", "identity", "application", "data", "location"]


class ConditionOperator(str, Enum):
    """Operators a condition can apply to a context field."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IN_RANGE = "in_range"
    REGEX = "regex"


class ActionType(str, Enum):
    """Action types with built-in meaning to the engine."""

    ALLOW = "allow"
    DENY = "deny"
    REQUIRE_MFA = "require_mfa"
    REQUIRE_APPROVAL = "require_approval"
    LIMIT_ACCESS = "limit_access"
    MONITOR = "monitor"
    STEP_UP_AUTH = "step_up_auth"


def _enum_to_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


# Known values arrive as enum members, unknown ones as plain strings
VocabularyStr = Annotated[str, BeforeValidator(_enum_to_value)]


class Condition(BaseModel):
    """A single predicate over a context field.

    Attributes:
        field: Dot-delimited path into the context (e.g. "device.isManaged").
        operator: One of ConditionOperator; any other string never matches.
        value: Operand. Numeric for greater_than/less_than, a [min, max]
            pair for in_range, a pattern for regex.
        logical_operator: Stored for compatibility; conditions are always AND-ed.
    """

    field: str
    operator: VocabularyStr
    value: Any = None
    logical_operator: Literal["AND", "OR"] | None = Field(default=None, alias="logicalOperator")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Action(BaseModel):
    """A remediation or decision-influencing directive.

    Attributes:
        type: One of ActionType, or any other string (passed through).
        parameters: Free-form payload for the remediation consumer.
    """

    type: VocabularyStr
    parameters: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class Policy(BaseModel):
    """A declarative zero trust policy.

    Attributes:
        id: Unique identifier.
        name: Human-readable name (used in reasoning and violations).
        description: Optional longer description.
        category: Policy category.
        conditions: Conditions, all of which must hold (empty = always applies).
        actions: Actions required when the policy applies.
        priority: Higher priorities are evaluated first.
        active: Inactive policies are skipped.
        created_at: Creation time, if known.
        updated_at: Last modification time, if known.
    """

    id: str
    name: str
    description: str | None = None
    category: PolicyCategory = Field(validation_alias=AliasChoices("category", "policyType", "policy_type"))
    conditions: list[Condition] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    priority: int = DEFAULT_POLICY_PRIORITY
    active: bool = Field(default=True, validation_alias=AliasChoices("active", "isActive", "is_active"))
    created_at: datetime | None = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: datetime | None = Field(default=None, validation_alias=AliasChoices("updated_at", "updatedAt"))

    model_config = ConfigDict(frozen=True)

    def has_action(self, *types: str) -> bool:
        """Check whether any action of this policy is one of the given types."""
        return any(action.type in types for action in self.actions)


class PolicySet(BaseModel):
    """A versioned collection of policies, as stored in a policy file.

    Attributes:
        version: Schema version for migrations.
        policies: The policies; ids must be unique.
    """

    version: str = "1"
    policies: list[Policy] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def unique_ids(self) -> Self:
        """Validate that no two policies share an id."""
        seen: set[str] = set()
        duplicates = []
        for policy in self.policies:
            if policy.id in seen:
                duplicates.append(policy.id)
            seen.add(policy.id)
        if duplicates:
            raise ValueError(f"Duplicate policy ids: {', '.join(sorted(set(duplicates)))}")
        return self


_ID_ALPHABET = string.ascii_lowercase + string.digits


def _generate_policy_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"policy-{int(time.time() * 1000)}-{suffix}"


def create_policy(
    name: str,
    category: PolicyCategory,
    conditions: list[Condition],
    actions: list[Action],
    priority: int = DEFAULT_POLICY_PRIORITY,
) -> Policy:
    """Create a new active policy with a generated id.

    Args:
        name: Human-readable name.
        category: Policy category.
        conditions: Conditions (AND logic).
        actions: Actions required when the policy applies.
        priority: Evaluation priority (default: 50).

    Returns:
        Policy with id "policy-<epoch-ms>-<9 chars>" and creation timestamps set.
    """
    now = datetime.now(timezone.utc)
    return Policy(
        id=_generate_policy_id(),
        name=name,
        category=category,
        conditions=conditions,
        actions=actions,
        priority=priority,
        active=True,
        created_at=now,
        updated_at=now,
    )


def create_default_policies() -> list[Policy]:
    """Create the built-in seed policy set.

    Returns:
        Four illustrative policies: admin MFA, unmanaged device restriction,
        high-threat network block, and confidential data step-up.
    """
    return [
        Policy(
            id="admin-mfa-required",
            name="Admin MFA Requirement",
            category="identity",
            conditions=[Condition(field="user.role", operator=ConditionOperator.EQUALS, value="admin")],
            actions=[Action(type=ActionType.REQUIRE_MFA, parameters={"methods": ["totp", "biometric"]})],
            priority=100,
        ),
        Policy(
            id="unmanaged-device-restriction",
            name="Unmanaged Device Restrictions",
            category="device",
            conditions=[Condition(field="device.isManaged", operator=ConditionOperator.EQUALS, value=False)],
            actions=[
                Action(type=ActionType.LIMIT_ACCESS, parameters={"permissions": ["read-only"]}),
                Action(type=ActionType.REQUIRE_APPROVAL, parameters={"approvers": ["security-team"]}),
            ],
            priority=90,
        ),
        Policy(
            id="high-risk-network-block",
            name="High Risk Network Block",
            category="network",
            conditions=[
                Condition(field="network.threatLevel", operator=ConditionOperator.GREATER_THAN, value=0.8)
            ],
            actions=[Action(type=ActionType.DENY)],
            priority=95,
        ),
        Policy(
            id="confidential-data-access",
            name="Confidential Data Access Control",
            category="data",
            conditions=[
                Condition(
                    field="application.dataClassification",
                    operator=ConditionOperator.EQUALS,
                    value="confidential",
                )
            ],
            actions=[
                Action(type=ActionType.REQUIRE_MFA),
                Action(type=ActionType.STEP_UP_AUTH, parameters={"methods": ["biometric"]}),
                Action(type=ActionType.MONITOR, parameters={"level": "high"}),
            ],
            priority=85,
        ),
    ]
