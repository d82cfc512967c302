"""Trust score calculation.

Computes four independent sub-scores from a Context and combines them into
an overall score:

    Dimension   Weight  Inputs
    user        0.25    role, MFA enrollment, identity risk, login recency
    device      0.30    management, compliance, stored trust, last seen
    network     0.25    corporate network, VPN, threat level
    context     0.20    session MFA/elevation, business hours,
                        data classification, request risk

Each sub-score starts from a base value, is adjusted by the heuristics
below, and is clamped to [0, 1]. The overall score is the weighted mean.
Missing inputs contribute no adjustment.

Pure and deterministic given the same context and "now".
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from zerotrust_engine.config import EngineConfig
from zerotrust_engine.constants import (
    BUSINESS_HOURS_END,
    BUSINESS_HOURS_START,
    CONTEXT_BASE_SCORE,
    DEVICE_BASE_SCORE,
    FACTOR_NAMES,
    FACTOR_REASONS,
    NETWORK_BASE_SCORE,
    RECENT_DEVICE_HOURS,
    RECENT_LOGIN_DAYS,
    STALE_DEVICE_HOURS,
    STALE_LOGIN_DAYS,
    USER_BASE_SCORE,
)
from zerotrust_engine.context import (
    ApplicationContext,
    Context,
    DeviceContext,
    NetworkContext,
    RequestContext,
    SessionContext,
    UserContext,
)

__all__ = [
    "TrustFactor",
    "TrustScore",
    "calculate_context_trust",
    "calculate_device_trust",
    "calculate_network_trust",
    "calculate_trust_score",
    "calculate_user_trust",
]


class TrustFactor(BaseModel):
    """One dimension of a trust score, for explainability.

    Attributes:
        name: Display name of the dimension.
        score: Sub-score in [0, 1].
        weight: Weight in the overall score.
        reason: Fixed description of what the dimension considers.
    """

    name: str
    score: float
    weight: float
    reason: str

    model_config = ConfigDict(frozen=True)


class TrustScore(BaseModel):
    """Composite trust score for one evaluation.

    Ephemeral: recomputed per evaluation, never persisted by the engine.
    """

    overall: float = Field(ge=0.0, le=1.0)
    user: float = Field(ge=0.0, le=1.0)
    device: float = Field(ge=0.0, le=1.0)
    network: float = Field(ge=0.0, le=1.0)
    context: float = Field(ge=0.0, le=1.0)
    last_updated: datetime
    factors: list[TrustFactor] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


def _clamp(score: float) -> float:
    if math.isnan(score):
        return 0.0
    return max(0.0, min(1.0, score))


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _hours_since(then: datetime, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(then)).total_seconds() / 3600


def calculate_user_trust(user: UserContext, now: datetime) -> float:
    score = USER_BASE_SCORE

    # "user" earns more than "admin"
    if user.role == "admin":
        score += 0.1
    if user.role == "user":
        score += 0.2

    if user.mfa_enabled:
        score += 0.2

    if user.risk_score is not None:
        score += (1 - user.risk_score) * 0.3

    if user.last_login is not None:
        days_since_login = _hours_since(user.last_login, now) / 24
        if days_since_login < RECENT_LOGIN_DAYS:
            score += 0.1
        elif days_since_login > STALE_LOGIN_DAYS:
            score -= 0.1

    return _clamp(score)


def calculate_device_trust(device: DeviceContext, now: datetime) -> float:
    score = DEVICE_BASE_SCORE

    if device.is_managed:
        score += 0.4
    if device.is_compliant:
        score += 0.3

    if device.trust_score is not None:
        score = (score + device.trust_score) / 2

    if device.last_seen is not None:
        hours_since_seen = _hours_since(device.last_seen, now)
        if hours_since_seen < RECENT_DEVICE_HOURS:
            score += 0.1
        elif hours_since_seen > STALE_DEVICE_HOURS:
            score -= 0.1

    return _clamp(score)


def calculate_network_trust(network: NetworkContext) -> float:
    score = NETWORK_BASE_SCORE

    if network.is_corporate:
        score += 0.3
    if network.is_vpn and network.is_corporate:
        score += 0.1
    if network.is_vpn and not network.is_corporate:
        score -= 0.2

    if network.threat_level is not None:
        score -= network.threat_level * 0.4

    return _clamp(score)


def calculate_context_trust(
    session: SessionContext,
    request: RequestContext,
    application: ApplicationContext,
) -> float:
    score = CONTEXT_BASE_SCORE

    if session.mfa_verified:
        score += 0.2
    if session.is_elevated:
        score += 0.1

    # Business hours in the request's own clock
    if request.timestamp is not None and BUSINESS_HOURS_START <= request.timestamp.hour <= BUSINESS_HOURS_END:
        score += 0.1

    if application.data_classification == "public":
        score += 0.1
    elif application.data_classification == "restricted":
        score -= 0.1

    if request.risk_score is not None:
        score -= request.risk_score * 0.2

    return _clamp(score)


def calculate_trust_score(
    context: Context,
    config: EngineConfig | None = None,
    now: datetime | None = None,
) -> TrustScore:
    """Calculate the composite trust score for a context.

    Args:
        context: Context snapshot.
        config: Engine configuration (weights). Defaults to EngineConfig().
        now: Evaluation time. Defaults to the current UTC time.

    Returns:
        TrustScore with the four sub-scores, the weighted overall score,
        and one factor per dimension.
    """
    config = config or EngineConfig()
    now = now or datetime.now(timezone.utc)
    weights = config.weights

    sub_scores = {
        "user": calculate_user_trust(context.user or UserContext(), now),
        "device": calculate_device_trust(context.device or DeviceContext(), now),
        "network": calculate_network_trust(context.network or NetworkContext()),
        "context": calculate_context_trust(
            context.session or SessionContext(),
            context.request or RequestContext(),
            context.application or ApplicationContext(),
        ),
    }

    factors = [
        TrustFactor(
            name=FACTOR_NAMES[dimension],
            score=score,
            weight=getattr(weights, dimension),
            reason=FACTOR_REASONS[dimension],
        )
        for dimension, score in sub_scores.items()
    ]

    overall = sum(f.score * f.weight for f in factors) / weights.total

    return TrustScore(
        overall=_clamp(overall),
        last_updated=now,
        factors=factors,
        **sub_scores,
    )
