"""Context snapshot models.

A Context is the read-only snapshot an external collaborator assembles for
one evaluation: who is asking (user), from what (device), over what
(network), for which application, within which session, and the request
itself.

Every field is optional. Collaborators routinely send partial snapshots and
the engine degrades gracefully: a missing field is "undefined" to the
condition matcher and contributes nothing to trust scoring.

Attributes use snake_case; camelCase aliases (isManaged, threatLevel, ...)
are accepted so snapshots assembled by the surrounding application validate
unchanged.

Malformed values never reject the snapshot. A field that fails validation
(e.g. dataClassification "secret", isManaged "maybe") is dropped and reads
as undefined, exactly like a field that was never sent. A section that is
not an object is dropped the same way.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ModelWrapValidatorHandler, ValidationError, model_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "ApplicationContext",
    "Context",
    "DataClassification",
    "DeviceContext",
    "NetworkContext",
    "RequestContext",
    "SessionContext",
    "UserContext",
]

logger = logging.getLogger(__name__)

DataClassification = Literal["public", "internal", "confidential", "restricted"]


class _LenientModel(BaseModel):
    """Frozen model that drops malformed fields instead of rejecting the input."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def _input_keys(cls, names: set[str]) -> set[str]:
        """Expand field names or aliases to every key the field may arrive under."""
        keys = set(names)
        for name, field_info in cls.model_fields.items():
            if name in names or field_info.alias in names:
                keys.add(name)
                if field_info.alias:
                    keys.add(field_info.alias)
        return keys

    @model_validator(mode="wrap")
    @classmethod
    def drop_malformed_fields(cls, data: Any, handler: ModelWrapValidatorHandler[Self]) -> Self:
        """Validate, retrying once without the fields that failed."""
        try:
            return handler(data)
        except ValidationError as e:
            if not isinstance(data, dict):
                raise
            failed = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            if not failed:
                raise
            dropped = cls._input_keys(failed)
            logger.debug("Dropping malformed %s fields: %s", cls.__name__, ", ".join(sorted(failed)))
            return handler({key: value for key, value in data.items() if key not in dropped})


class _ContextSection(_LenientModel):
    """Base for context sections: frozen, camelCase aliases, populate by name."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class UserContext(_ContextSection):
    """Identity attributes of the requesting user.

    Attributes:
        id: User identifier.
        role: Role name ("admin", "user", ...).
        groups: Group memberships.
        risk_score: Identity risk in [0, 1], higher is riskier.
        last_login: Time of the previous login.
        mfa_enabled: Whether the user has MFA enrolled.
    """

    id: str | None = None
    role: str | None = None
    groups: list[str] | None = None
    risk_score: float | None = None
    last_login: datetime | None = None
    mfa_enabled: bool | None = None


class DeviceContext(_ContextSection):
    """Posture of the device the request comes from.

    Attributes:
        id: Device identifier.
        type: Device type ("laptop", "mobile", ...).
        os: Operating system.
        is_managed: Enrolled in device management.
        is_compliant: Passes compliance checks.
        trust_score: Stored device trust in [0, 1].
        last_seen: Last time the device was seen.
    """

    id: str | None = None
    type: str | None = None
    os: str | None = None
    is_managed: bool | None = None
    is_compliant: bool | None = None
    trust_score: float | None = None
    last_seen: datetime | None = None


class NetworkContext(_ContextSection):
    """Network origin of the request.

    Attributes:
        ip_address: Client IP address.
        location: Resolved location label.
        is_vpn: Connected through a VPN.
        is_corporate: Originates from the corporate network.
        threat_level: Network threat in [0, 1].
    """

    ip_address: str | None = None
    location: str | None = None
    is_vpn: bool | None = Field(default=None, alias="isVPN")
    is_corporate: bool | None = None
    threat_level: float | None = None


class ApplicationContext(_ContextSection):
    """Target application of the request."""

    id: str | None = None
    name: str | None = None
    data_classification: DataClassification | None = None
    requires_approval: bool | None = None


class SessionContext(_ContextSection):
    """Session the request belongs to."""

    id: str | None = None
    start_time: datetime | None = None
    last_activity: datetime | None = None
    is_elevated: bool | None = None
    mfa_verified: bool | None = None


class RequestContext(_ContextSection):
    """The request itself.

    Attributes:
        resource: Requested resource.
        action: Requested action on the resource.
        timestamp: When the request was made (its hour drives the
            business-hours factor).
        risk_score: Request risk in [0, 1].
    """

    resource: str | None = None
    action: str | None = None
    timestamp: datetime | None = None
    risk_score: float | None = None


class Context(_LenientModel):
    """Read-only snapshot assembled per evaluation.

    Sections may be omitted entirely; omitted (or non-object) sections
    resolve every field beneath them to "undefined".
    """

    user: UserContext | None = None
    device: DeviceContext | None = None
    network: NetworkContext | None = None
    application: ApplicationContext | None = None
    session: SessionContext | None = None
    request: RequestContext | None = None

    model_config = ConfigDict(frozen=True)
