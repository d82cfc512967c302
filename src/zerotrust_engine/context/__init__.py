"""Context snapshot for access decisions.

The context is assembled by collaborators outside the engine (session,
device, network and risk subsystems) and handed to the PDP read-only.

Structure:
    context.py  - Context and its six section models
    fields.py   - Dot-path accessor map used by the condition matcher
    loader.py   - Load a context snapshot from a JSON file
"""

from zerotrust_engine.context.context import (
    ApplicationContext,
    Context,
    DataClassification,
    DeviceContext,
    NetworkContext,
    RequestContext,
    SessionContext,
    UserContext,
)
from zerotrust_engine.context.fields import FIELD_ACCESSORS, UNDEFINED, get_field_value
from zerotrust_engine.context.loader import load_context

__all__ = [
    # Models
    "Context",
    "UserContext",
    "DeviceContext",
    "NetworkContext",
    "ApplicationContext",
    "SessionContext",
    "RequestContext",
    "DataClassification",
    # Field lookup
    "FIELD_ACCESSORS",
    "UNDEFINED",
    "get_field_value",
    # I/O
    "load_context",
]
