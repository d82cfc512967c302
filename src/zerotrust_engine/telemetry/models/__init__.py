"""Pydantic models for logged events."""

from zerotrust_engine.telemetry.models.decision import DecisionEvent

__all__ = ["DecisionEvent"]
