"""Wire primitives shared by every DSL module.

Builders in this package are dataclasses. Their fields describe the
JSON they produce: a field left at ``None`` is omitted, a field with a
``key`` in its metadata is emitted under that name, and fields marked
``outer`` belong beside the field name in a field-based query rather
than inside it.

The decode helpers turn loosely-typed response JSON into checked
values, raising :class:`DecodeError` with the dotted path of the
offending field.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar, Union

from esdsl.exceptions import DecodeError, UsageError

T = TypeVar("T")

JsonVal = Union[int, float, str, bool]
"""A scalar JSON value; ``int`` and ``float`` stay distinct."""

OneOrMany = Union[T, list[T]]
"""A field accepting either a single value or a list of values."""


def to_json(value: Any) -> Any:
    """Convert a DSL value into plain JSON-compatible data.

    Objects exposing ``to_json()`` serialize themselves, enums become
    their value, and containers are converted recursively.
    """
    if value is None:
        return None
    method = getattr(value, "to_json", None)
    if callable(method):
        return method()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    return value


def dumps(value: Any) -> str:
    """Serialize a DSL value to compact UTF-8 JSON text."""
    return json.dumps(to_json(value), separators=(",", ":"), ensure_ascii=False)


def opt(key: str | None = None, *, outer: bool = False) -> Any:
    """Declare an optional wire field on a builder dataclass.

    Args:
        key: JSON key, when it differs from the attribute name.
        outer: Emit beside the field name of a field-based query.
    """
    return dataclasses.field(default=None, metadata={"key": key, "outer": outer})


def required(key: str | None = None, *, outer: bool = False, skip: bool = False) -> Any:
    """Declare a mandatory builder attribute (a constructor argument)."""
    return dataclasses.field(metadata={"key": key, "outer": outer, "skip": skip})


def internal(default: Any = None) -> Any:
    """Declare a builder attribute that generic serialization skips."""
    return dataclasses.field(default=default, metadata={"skip": True})


def option(name: str) -> Callable[..., Any]:
    """Create a fluent ``with_<name>`` setter for a builder attribute."""

    def setter(self: T, value: Any) -> T:
        setattr(self, name, value)
        return self

    setter.__name__ = f"with_{name}"
    setter.__doc__ = f"Set ``{name}`` and return the builder."
    return setter


def serialize_fields(obj: Any, *, outer: bool | None = None) -> dict[str, Any]:
    """Emit the set wire fields of a builder dataclass in declaration order.

    Args:
        obj: Builder dataclass instance.
        outer: ``True`` for outer fields only, ``False`` for inner only,
            ``None`` for all of them.
    """
    body: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        if f.metadata.get("skip"):
            continue
        if outer is not None and bool(f.metadata.get("outer")) != outer:
            continue
        value = getattr(obj, f.name)
        if value is None:
            continue
        key = f.metadata.get("key") or f.name.rstrip("_")
        body[key] = to_json(value)
    return body


def field_based(field: str, inner: Any, outer: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the ``{"<field>": <inner>, <outer...>}`` shape.

    The inner body is keyed by the field name, and every outer option
    becomes a sibling entry of that key.

    Raises:
        UsageError: If an outer option has the same name as the field.
    """
    body = {field: to_json(inner)}
    for key, value in (outer or {}).items():
        if key == field:
            raise UsageError(f"Field name '{field}' collides with an option of the same name")
        body[key] = value
    return body


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}


def _describe(kind: type | tuple[type, ...]) -> str:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    return " or ".join(_TYPE_NAMES.get(k, k.__name__) for k in kinds)


def check(value: Any, kind: type | tuple[type, ...], where: str) -> Any:
    """Check that a decoded JSON value has the expected type.

    ``float`` accepts JSON integers; ``int`` and ``float`` never accept
    booleans.
    """
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds:
        raise DecodeError(where, _describe(kind), "got boolean")
    if isinstance(value, kinds):
        return value
    if float in kinds and isinstance(value, int):
        return value
    raise DecodeError(where, _describe(kind), f"got {_TYPE_NAMES.get(type(value), type(value).__name__)}")


def require(data: Any, key: str, kind: type | tuple[type, ...], path: str = "") -> Any:
    """Fetch a required key from a JSON object and check its type."""
    where = f"{path}.{key}" if path else key
    if not isinstance(data, dict):
        raise DecodeError(path or "<root>", "object", f"got {type(data).__name__}")
    if key not in data:
        raise DecodeError(where, _describe(kind), "missing")
    return check(data[key], kind, where)


def optional(data: Any, key: str, kind: type | tuple[type, ...], path: str = "") -> Any:
    """Fetch an optional key from a JSON object; absent and null give None."""
    if not isinstance(data, dict):
        raise DecodeError(path or "<root>", "object", f"got {type(data).__name__}")
    value = data.get(key)
    if value is None:
        return None
    return check(value, kind, f"{path}.{key}" if path else key)


def decode_source(source: dict[str, Any], source_type: Callable[[dict[str, Any]], Any] | None, path: str) -> Any:
    """Turn a ``_source`` object into a document, or keep it as a dict.

    ``source_type`` is any callable taking the object, such as a
    dataclass ``from_dict`` classmethod.
    """
    if source_type is None:
        return source
    try:
        return source_type(source)
    except (TypeError, ValueError, KeyError) as e:
        name = getattr(source_type, "__qualname__", repr(source_type))
        raise DecodeError(path, name, str(e)) from e
