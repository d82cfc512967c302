"""Engine configuration for zerotrust-engine.

Defines configuration models for trust thresholds, scoring weights, the
decision validity window and logging. Every section has defaults, so an
empty JSON object is a valid configuration.

Example usage:
    # Load from config file
    config = EngineConfig.load_from_file(config_path)

    # Use defaults
    config = EngineConfig()
"""

from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from zerotrust_engine.constants import (
    CONFIG_FILENAME,
    DEFAULT_ALLOW_THRESHOLD,
    DEFAULT_BASE_CONFIDENCE,
    DEFAULT_CONDITIONAL_THRESHOLD,
    DEFAULT_CONFIDENCE_STEP,
    DEFAULT_CONTEXT_WEIGHT,
    DEFAULT_DECISION_TTL_SECONDS,
    DEFAULT_DENY_THRESHOLD,
    DEFAULT_DEVICE_WEIGHT,
    DEFAULT_MAX_CONFIDENCE,
    DEFAULT_NETWORK_WEIGHT,
    DEFAULT_USER_WEIGHT,
    MAX_DECISION_TTL_SECONDS,
    MIN_DECISION_TTL_SECONDS,
)
from zerotrust_engine.utils.file_helpers import get_app_dir, load_validated_json, require_file_exists

# =============================================================================
# Trust Scoring
# =============================================================================


class TrustThresholds(BaseModel):
    """Overall trust score bands used to gate an otherwise-allowed request.

    Attributes:
        deny: Scores below this are denied.
        conditional: Scores below this (and not denied) require MFA.
        allow: Informational upper band; not consulted by the decision.
    """

    deny: float = Field(default=DEFAULT_DENY_THRESHOLD, ge=0.0, le=1.0)
    conditional: float = Field(default=DEFAULT_CONDITIONAL_THRESHOLD, ge=0.0, le=1.0)
    allow: float = Field(default=DEFAULT_ALLOW_THRESHOLD, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def ordered_bands(self) -> Self:
        """Validate that the deny band sits below the conditional band."""
        if self.deny > self.conditional:
            raise ValueError(
                f"deny threshold ({self.deny}) must not exceed conditional threshold ({self.conditional})"
            )
        return self


class ScoringWeights(BaseModel):
    """Weights of the four trust sub-scores.

    The overall score is the weighted mean, so weights need not sum to 1.0,
    but at least one must be positive.
    """

    user: float = Field(default=DEFAULT_USER_WEIGHT, ge=0.0)
    device: float = Field(default=DEFAULT_DEVICE_WEIGHT, ge=0.0)
    network: float = Field(default=DEFAULT_NETWORK_WEIGHT, ge=0.0)
    context: float = Field(default=DEFAULT_CONTEXT_WEIGHT, ge=0.0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def positive_total(self) -> Self:
        """Validate that the weights do not all vanish."""
        if self.total <= 0:
            raise ValueError("At least one scoring weight must be positive.")
        return self

    @property
    def total(self) -> float:
        return self.user + self.device + self.network + self.context


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    The engine persists nothing; log records go to whatever handlers the
    caller installs (see utils/logging/logger_setup.py).

    Attributes:
        log_level: Level for the zerotrust_engine logger hierarchy.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING"] = "INFO"

    model_config = ConfigDict(frozen=True)


class EngineConfig(BaseModel):
    """Main configuration for the access decision engine.

    Attributes:
        thresholds: Trust score bands for gating allow decisions.
        weights: Sub-score weights for the overall trust score.
        decision_ttl_seconds: Validity window of each AccessDecision.
        base_confidence: Confidence with no applied policies.
        confidence_step: Confidence added per applied policy.
        max_confidence: Cap on confidence.
        logging: Logging configuration.
    """

    thresholds: TrustThresholds = Field(default_factory=TrustThresholds)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    decision_ttl_seconds: int = Field(
        default=DEFAULT_DECISION_TTL_SECONDS,
        ge=MIN_DECISION_TTL_SECONDS,
        le=MAX_DECISION_TTL_SECONDS,
    )
    base_confidence: float = Field(default=DEFAULT_BASE_CONFIDENCE, ge=0.0, le=1.0)
    confidence_step: float = Field(default=DEFAULT_CONFIDENCE_STEP, ge=0.0, le=1.0)
    max_confidence: float = Field(default=DEFAULT_MAX_CONFIDENCE, ge=0.0, le=1.0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "EngineConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config file.

        Returns:
            EngineConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid or has out-of-range values.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(
            config_path,
            cls,
            file_type="config",
            recovery_hint="Fix the listed fields or delete the file to use defaults.",
            encoding="utf-8",
        )


def get_config_path() -> Path:
    """Get the default config file path in the OS config directory."""
    return get_app_dir() / CONFIG_FILENAME
