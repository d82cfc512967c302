"""Telemetry: structured events emitted by the engine."""
