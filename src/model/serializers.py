"""Conversion between model dataclasses and the admin API's JSON payloads.

Field names on the wire come from the ``wire`` metadata of each dataclass
field (``custom_fields`` travels as ``custFields``). Unknown payload keys are
collected into the ``extra`` field on the way in and merged back on the way
out, so nothing the server sends is lost by a load/save round trip.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from model.document import Entry

T = TypeVar("T")

# Dataclass field that collects unknown payload keys
EXTRA_FIELD = "extra"


def _wire_name(f) -> str:
    return f.metadata.get("wire", f.name)


def to_wire(obj: Any) -> Any:
    """Recursively serialize a model object to JSON-compatible data."""
    if isinstance(obj, Entry):
        return {k: to_wire(v) for k, v in obj.data.items()}

    if is_dataclass(obj) and not isinstance(obj, type):
        result: dict[str, Any] = {}
        extra = getattr(obj, EXTRA_FIELD, None)
        if isinstance(extra, dict):
            result.update(extra)
        for f in fields(obj):
            if f.name == EXTRA_FIELD:
                continue
            result[_wire_name(f)] = to_wire(getattr(obj, f.name))
        return result

    if isinstance(obj, (list, tuple)):
        return [to_wire(v) for v in obj]
    if isinstance(obj, dict):
        return {k: to_wire(v) for k, v in obj.items()}
    return obj


def from_wire(cls: type[T], data: dict[str, Any] | None) -> T:
    """Build a model dataclass from an API payload.

    Missing keys fall back to the dataclass defaults; ``None`` values for
    list fields become empty lists.

    Raises:
        ValueError: The payload does not have the shape of the model
    """
    if not is_dataclass(cls):
        raise ValueError(f"Cannot deserialize {cls}")
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Expected an object for {cls.__name__}, got {type(data).__name__}")
    data = dict(data or {})
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    known: set[str] = set()
    has_extra = False

    for f in fields(cls):
        if f.name == EXTRA_FIELD:
            has_extra = True
            continue
        wire = _wire_name(f)
        known.add(wire)
        if wire not in data:
            continue
        kwargs[f.name] = _from_wire_value(data[wire], hints.get(f.name))

    if has_extra:
        kwargs[EXTRA_FIELD] = {k: v for k, v in data.items() if k not in known}
    return cls(**kwargs)


def _from_wire_value(value: Any, field_type: Any) -> Any:
    """Deserialize a value based on its type hint."""
    origin = get_origin(field_type)
    args = get_args(field_type)

    if origin is list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError(f"Expected a list, got {type(value).__name__}")
        item_type = args[0] if args else Any
        if item_type is Entry:
            return [entry_from_wire(v) for v in value]
        if is_dataclass(item_type):
            return [from_wire(item_type, v) for v in value]
        return list(value)

    if field_type is str:
        return "" if value is None else str(value)

    if is_dataclass(field_type):
        return from_wire(field_type, value)

    return value


def entry_from_wire(value: Any) -> Entry:
    """Wrap one raw list item in an Entry with a fresh key."""
    if not isinstance(value, dict):
        raise ValueError(f"List entry must be an object, got {type(value).__name__}")
    return Entry(data=dict(value))
