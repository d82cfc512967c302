"""Field-path lookup into a Context.

Conditions address context data with dot-delimited paths such as
"device.isManaged". Rather than walking attributes by reflection, every
valid path is registered once in a typed accessor map (path -> extractor).
Both the camelCase alias and the snake_case attribute name are registered,
so "device.isManaged" and "device.is_managed" resolve identically.

Paths that are not in the map, sections that were omitted, and fields that
were never provided all resolve to UNDEFINED. Lookup never raises.
"""

from __future__ import annotations

from typing import Any, Callable, Final

from pydantic import BaseModel

from zerotrust_engine.context.context import Context

__all__ = [
    "FIELD_ACCESSORS",
    "UNDEFINED",
    "FieldAccessor",
    "get_field_value",
]


class _Undefined:
    """Marker for a path that resolves to nothing.

    Distinct from None: a field explicitly sent as null resolves to None,
    a field that was never sent resolves to UNDEFINED.
    """

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Final = _Undefined()

FieldAccessor = Callable[[Context], Any]


def _make_accessor(section: str, attr: str) -> FieldAccessor:
    """Build an extractor for one section attribute."""

    def accessor(context: Context) -> Any:
        part: BaseModel | None = getattr(context, section)
        if part is None or attr not in part.model_fields_set:
            return UNDEFINED
        return getattr(part, attr)

    return accessor


def _build_accessor_map() -> dict[str, FieldAccessor]:
    accessors: dict[str, FieldAccessor] = {}
    for section, section_field in Context.model_fields.items():
        # Section annotation is "<Model> | None"; pick the model out of it
        section_model = next(
            arg for arg in section_field.annotation.__args__ if isinstance(arg, type) and issubclass(arg, BaseModel)
        )
        for attr, attr_field in section_model.model_fields.items():
            accessor = _make_accessor(section, attr)
            accessors[f"{section}.{attr}"] = accessor
            if attr_field.alias and attr_field.alias != attr:
                accessors[f"{section}.{attr_field.alias}"] = accessor
    return accessors


FIELD_ACCESSORS: Final[dict[str, FieldAccessor]] = _build_accessor_map()


def get_field_value(context: Context, path: str) -> Any:
    """Resolve a dot-delimited path against a context.

    Args:
        context: Context snapshot.
        path: Dot-delimited field path (e.g. "network.threatLevel").

    Returns:
        The field value, None if it was sent as null, or UNDEFINED.
    """
    accessor = FIELD_ACCESSORS.get(path)
    if accessor is None:
        return UNDEFINED
    return accessor(context)
