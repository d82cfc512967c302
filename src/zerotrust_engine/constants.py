"""Application-wide constants for zerotrust-engine.

Constants that define engine behavior.
For user-configurable settings per deployment, see config.py.
"""

import os

from platformdirs import user_config_dir

# ============================================================================
# Configuration Location
# ============================================================================

# OS-specific config directory for engine configuration.
#
# Platform-specific paths:
# - macOS: ~/Library/Application Support/zerotrust-engine/
# - Linux: ~/.config/zerotrust-engine/
# - Windows: %APPDATA%\zerotrust-engine\
CONFIG_DIR: str = os.path.realpath(user_config_dir("zerotrust-engine"))

CONFIG_FILENAME: str = "config.json"

# ============================================================================
# Trust Score Thresholds
# ============================================================================

# Overall trust below this is denied outright when no policy denied first
DEFAULT_DENY_THRESHOLD: float = 0.3

# Overall trust below this (and at or above deny) needs step-up (MFA)
DEFAULT_CONDITIONAL_THRESHOLD: float = 0.6

# Reported alongside the others; the decision never consults it
DEFAULT_ALLOW_THRESHOLD: float = 0.8

# ============================================================================
# Trust Score Weights
# ============================================================================

# Weights of the four sub-scores in the overall score (sum to 1.0)
DEFAULT_USER_WEIGHT: float = 0.25
DEFAULT_DEVICE_WEIGHT: float = 0.30
DEFAULT_NETWORK_WEIGHT: float = 0.25
DEFAULT_CONTEXT_WEIGHT: float = 0.20

# Explainability text attached to each factor of a TrustScore
FACTOR_REASONS: dict[str, str] = {
    "user": "Based on role, MFA status, and risk score",
    "device": "Based on management status, compliance, and trust score",
    "network": "Based on location, VPN status, and threat level",
    "context": "Based on session, timing, and request patterns",
}

FACTOR_NAMES: dict[str, str] = {
    "user": "User Identity",
    "device": "Device Trust",
    "network": "Network Security",
    "context": "Contextual Factors",
}

# ============================================================================
# Sub-score Heuristics
# ============================================================================

USER_BASE_SCORE: float = 0.5
DEVICE_BASE_SCORE: float = 0.3  # Unrecognized device
NETWORK_BASE_SCORE: float = 0.5
CONTEXT_BASE_SCORE: float = 0.5

# Login recency (days)
RECENT_LOGIN_DAYS: float = 1.0
STALE_LOGIN_DAYS: float = 30.0

# Device recency (hours)
RECENT_DEVICE_HOURS: float = 24.0
STALE_DEVICE_HOURS: float = 168.0  # 1 week

# Business hours, inclusive on both ends
BUSINESS_HOURS_START: int = 9
BUSINESS_HOURS_END: int = 17

# ============================================================================
# Decision
# ============================================================================

# Fixed validity window for an AccessDecision (seconds)
DEFAULT_DECISION_TTL_SECONDS: int = 15 * 60

# Validation range for the validity window (seconds)
MIN_DECISION_TTL_SECONDS: int = 1
MAX_DECISION_TTL_SECONDS: int = 24 * 60 * 60

# confidence = min(base + step * applied_policies, max)
DEFAULT_BASE_CONFIDENCE: float = 0.5
DEFAULT_CONFIDENCE_STEP: float = 0.1
DEFAULT_MAX_CONFIDENCE: float = 0.9

# Action types that make a decision conditional
STEP_UP_ACTION_TYPES: frozenset[str] = frozenset(
    {
        "require_mfa",
        "require_approval",
        "step_up_auth",
    }
)

# Human-readable phrase per action type, for conditional decisions
ACTION_DESCRIPTIONS: dict[str, str] = {
    "require_mfa": "Multi-factor authentication required",
    "require_approval": "Manager approval required",
    "step_up_auth": "Additional authentication required",
    "limit_access": "Limited access permissions",
    "monitor": "Enhanced monitoring enabled",
}

# Parameter tag on the synthetic MFA action added for low trust scores
LOW_TRUST_SCORE_REASON: str = "low_trust_score"

# ============================================================================
# Policies
# ============================================================================

# Priority given to policies built with create_policy() when none is passed
DEFAULT_POLICY_PRIORITY: int = 50
