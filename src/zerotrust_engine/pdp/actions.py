"""Helpers over lists of policy actions."""

from __future__ import annotations

import json

from zerotrust_engine.constants import ACTION_DESCRIPTIONS
from zerotrust_engine.pdp.policy import Action

__all__ = [
    "action_key",
    "deduplicate_actions",
    "describe_action",
    "describe_actions",
]


def action_key(action: Action) -> tuple[str, str]:
    """Identity of an action for deduplication: (type, canonical parameters JSON).

    Missing parameters count as {}; keys are sorted so equal maps collapse.
    """
    parameters = json.dumps(action.parameters or {}, sort_keys=True, default=str)
    return action.type, parameters


def deduplicate_actions(actions: list[Action]) -> list[Action]:
    """Drop repeated actions, keeping the first occurrence and input order."""
    seen: set[tuple[str, str]] = set()
    unique: list[Action] = []
    for action in actions:
        key = action_key(action)
        if key in seen:
            continue
        seen.add(key)
        unique.append(action)
    return unique


def describe_action(action: Action) -> str:
    """Human-readable requirement for one action; unknown types get a generic phrase."""
    return ACTION_DESCRIPTIONS.get(action.type, f"{action.type} required")


def describe_actions(actions: list[Action]) -> list[str]:
    """Human-readable requirements for a list of actions, in order."""
    return [describe_action(action) for action in actions]
