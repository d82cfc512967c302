"""Shared fixtures for zerotrust-engine tests.

All scoring depends on "now", so tests evaluate at a fixed instant (NOW)
and build contexts relative to it.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from zerotrust_engine.context import Context
from zerotrust_engine.pdp import Policy, create_default_policies

# Monday 2025-06-02, 12:00 UTC (inside business hours)
NOW = datetime(2025, 6, 2, 12, 0, tzinfo=timezone.utc)


def build_context_data(now: datetime = NOW, **overrides: dict[str, Any]) -> dict[str, Any]:
    """Build a high-trust context snapshot (camelCase, as collaborators send it).

    With the seed policies nothing applies and the overall trust is ~0.90.
    Keyword arguments override fields per section, e.g.
    build_context_data(user={"role": "admin"}). A section override of None
    removes the section.
    """
    data: dict[str, Any] = {
        "user": {
            "id": "user-1",
            "role": "user",
            "groups": ["engineering", "ops"],
            "riskScore": 0.1,
            "lastLogin": (now - timedelta(hours=2)).isoformat(),
            "mfaEnabled": True,
        },
        "device": {
            "id": "device-1",
            "type": "laptop",
            "os": "macOS",
            "isManaged": True,
            "isCompliant": True,
            "trustScore": 0.9,
            "lastSeen": (now - timedelta(hours=1)).isoformat(),
        },
        "network": {
            "ipAddress": "10.0.0.5",
            "location": "office",
            "isVPN": False,
            "isCorporate": True,
            "threatLevel": 0.1,
        },
        "application": {
            "id": "app-1",
            "name": "wiki",
            "dataClassification": "internal",
            "requiresApproval": False,
        },
        "session": {
            "id": "session-1",
            "startTime": (now - timedelta(hours=1)).isoformat(),
            "lastActivity": (now - timedelta(minutes=5)).isoformat(),
            "isElevated": False,
            "mfaVerified": True,
        },
        "request": {
            "resource": "/docs/handbook",
            "action": "read",
            "timestamp": now.isoformat(),
            "riskScore": 0.1,
        },
    }
    data = copy.deepcopy(data)
    for section, fields in overrides.items():
        if fields is None:
            data.pop(section, None)
        else:
            data[section].update(fields)
    return data


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return NOW


@pytest.fixture
def make_context_data() -> Callable[..., dict[str, Any]]:
    """Factory for raw context snapshots (see build_context_data)."""
    return build_context_data


@pytest.fixture
def make_context() -> Callable[..., Context]:
    """Factory for contexts derived from the high-trust baseline."""

    def _make(**overrides: dict[str, Any]) -> Context:
        return Context.model_validate(build_context_data(**overrides))

    return _make


@pytest.fixture
def neutral_context(make_context: Callable[..., Context]) -> Context:
    """High-trust context that no seed policy applies to."""
    return make_context()


@pytest.fixture
def low_trust_context() -> Context:
    """Context scoring below the deny threshold (overall ~0.155)."""
    return Context.model_validate(
        {
            "user": {
                "role": "guest",
                "mfaEnabled": False,
                "riskScore": 1.0,
                "lastLogin": (NOW - timedelta(days=60)).isoformat(),
            },
            "device": {
                "isManaged": False,
                "isCompliant": False,
                "trustScore": 0.0,
                "lastSeen": (NOW - timedelta(days=30)).isoformat(),
            },
            "network": {"isVPN": True, "isCorporate": False, "threatLevel": 1.0},
            "application": {"dataClassification": "restricted"},
            "session": {"mfaVerified": False, "isElevated": False},
            "request": {"timestamp": NOW.replace(hour=3).isoformat(), "riskScore": 1.0},
        }
    )


@pytest.fixture
def medium_trust_context() -> Context:
    """Context scoring between the deny and conditional thresholds (overall ~0.4375)."""
    return Context.model_validate(
        {
            "user": {"role": "guest", "mfaEnabled": False, "riskScore": 0.5},
            "device": {"isManaged": False, "isCompliant": False, "trustScore": 0.5},
            "network": {"isVPN": False, "isCorporate": False, "threatLevel": 0.5},
            "application": {"dataClassification": "internal"},
            "request": {"timestamp": NOW.replace(hour=20).isoformat(), "riskScore": 0.5},
        }
    )


@pytest.fixture
def seed_policies() -> list[Policy]:
    """The built-in seed policy set."""
    return create_default_policies()


@pytest.fixture(autouse=True)
def reset_engine_logging():
    """Undo handlers installed by setup_logging() (e.g. via the CLI)."""
    yield
    logger = logging.getLogger("zerotrust_engine")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
