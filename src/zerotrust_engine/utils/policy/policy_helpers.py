"""Policy loader - read policy collections from JSON files.

A policy file holds either a bare list of policies or a versioned
object:

    {"version": "1", "policies": [ {...}, {...} ]}

Policies are read-only to the engine; editing and persisting them belongs
to the administrative tooling around it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from zerotrust_engine.pdp.policy import Policy, PolicySet
from zerotrust_engine.utils.file_helpers import (
    format_validation_errors,
    get_app_dir,
    load_json_file,
    require_file_exists,
)

__all__ = [
    "get_policy_path",
    "load_policies",
    "load_policy_set",
    "policy_exists",
]


def get_policy_path() -> Path:
    """Get the default policy file path.

    Returns:
        Path to policies.json in the OS config directory.
    """
    return get_app_dir() / "policies.json"


def load_policy_set(path: Path | None = None) -> PolicySet:
    """Load a policy collection from file.

    Args:
        path: Path to the policy file. If None, uses default location.

    Returns:
        PolicySet loaded from file.

    Raises:
        FileNotFoundError: If policy file does not exist.
        ValueError: If policy file contains invalid JSON or schema.
    """
    policy_path = path or get_policy_path()
    require_file_exists(policy_path, file_type="policy")

    data = load_json_file(policy_path, file_type="policy")
    if isinstance(data, list):
        data = {"policies": data}

    try:
        return PolicySet.model_validate(data)
    except ValidationError as e:
        raise ValueError(
            f"Invalid policy configuration in {policy_path}:\n"
            + format_validation_errors(e)
            + "\n\nEdit the policy file or run 'zerotrust-engine policy defaults' for a template."
        ) from e


def load_policies(path: Path | None = None) -> list[Policy]:
    """Load just the list of policies from a policy file. See load_policy_set."""
    return load_policy_set(path).policies


def policy_exists(path: Path | None = None) -> bool:
    """Check if policy file exists.

    Args:
        path: Path to check. If None, uses default location.

    Returns:
        True if policy file exists.
    """
    policy_path = path or get_policy_path()
    return policy_path.exists()
