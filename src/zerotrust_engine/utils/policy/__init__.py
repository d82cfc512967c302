"""Policy file I/O."""

from zerotrust_engine.utils.policy.policy_helpers import (
    get_policy_path,
    load_policies,
    load_policy_set,
    policy_exists,
)

__all__ = [
    "get_policy_path",
    "load_policies",
    "load_policy_set",
    "policy_exists",
]
