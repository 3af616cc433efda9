"""Shared pieces of every operation: URL helpers, query-string options and common results."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import urlencode

from esdsl.wire import require

T = TypeVar("T")


def format_multi(parts: Iterable[str]) -> str:
    """Join index or type names with commas; no names means ``_all``."""
    parts = list(parts)
    if not parts:
        return "_all"
    return ",".join(parts)


def format_indexes_and_types(indexes: Iterable[str], types: Iterable[str]) -> str:
    """Build the ``indexes[/types]`` path segment; no types omits the segment."""
    types = list(types)
    if not types:
        return format_multi(indexes)
    return f"{format_multi(indexes)}/{format_multi(types)}"


def format_value(value: Any) -> str:
    """Render an option value the way the server expects it in a URL."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value)
    to_uri_string = getattr(value, "to_uri_string", None)
    if callable(to_uri_string):
        return to_uri_string()
    return str(value)


def format_query_string(options: Options | Iterable[tuple[str, Any]]) -> str:
    """Build ``?k=v&...`` from options, or an empty string when there are none."""
    pairs = [(key, format_value(value)) for key, value in options]
    if not pairs:
        return ""
    return "?" + urlencode(pairs, safe=",:*")


class Options:
    """Ordered query-string options of one operation.

    Setting an option again replaces its earlier value in place.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self):
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)

    def copy(self) -> Options:
        options = Options()
        options._values = dict(self._values)
        return options

    def to_query_string(self) -> str:
        return format_query_string(self)


def url_option(key: str) -> Callable[..., Any]:
    """Create a fluent setter that stores a query-string option.

    The operation must keep its options in ``self.options``.
    """

    def setter(self: T, value: Any) -> T:
        self.options.set(key, value)  # type: ignore[attr-defined]
        return self

    setter.__name__ = f"with_{key.lstrip('_')}"
    setter.__doc__ = f"Set the ``{key}`` URL option and return the operation."
    return setter


class VersionType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    EXTERNAL_GT = "external_gt"
    EXTERNAL_GTE = "external_gte"
    FORCE = "force"


class Consistency(str, Enum):
    """Number of active shard copies a write requires."""

    ONE = "one"
    QUORUM = "quorum"
    ALL = "all"


class OpType(str, Enum):
    INDEX = "index"
    CREATE = "create"


class DefaultOperator(str, Enum):
    AND = "AND"
    OR = "OR"


@dataclass
class ShardCountResult:
    """Shard totals reported under ``_shards``."""

    total: int
    successful: int
    failed: int

    @classmethod
    def from_json(cls, data: Any, path: str = "_shards") -> ShardCountResult:
        return cls(
            total=require(data, "total", int, path),
            successful=require(data, "successful", int, path),
            failed=require(data, "failed", int, path),
        )


@dataclass
class GenericResult:
    acknowledged: bool

    @classmethod
    def from_json(cls, data: Any) -> GenericResult:
        return cls(require(data, "acknowledged", bool))
