"""Aggregation tree: builders, the built sum type and the named container."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from esdsl.aggregations.results import AggregationResult
from esdsl.exceptions import UsageError
from esdsl.wire import JsonVal, opt, serialize_fields


@dataclass
class Script:
    """A script given inline, by file name or by stored id."""

    inline: str | None = opt()
    file: str | None = opt()
    id: str | None = opt()
    lang: str | None = opt()
    params: dict[str, JsonVal] | None = opt()

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


class OrderKey(str, Enum):
    """Built-in bucket sort keys."""

    COUNT = "_count"
    KEY = "_key"
    TERM = "_term"


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    """Bucket ordering by a built-in key or a sub-aggregation path."""

    key: OrderKey | str
    direction: Direction = Direction.DESC

    @classmethod
    def asc(cls, key: OrderKey | str) -> Order:
        return cls(key, Direction.ASC)

    @classmethod
    def desc(cls, key: OrderKey | str) -> Order:
        return cls(key, Direction.DESC)

    def to_json(self) -> dict[str, str]:
        key = self.key.value if isinstance(self.key, OrderKey) else self.key
        return {key: Direction(self.direction).value}


class AggregationBuilder:
    """Base class of aggregation builders.

    Subclasses name their wire kind in ``KIND`` and produce their result
    type through ``RESULT``.
    """

    KIND: ClassVar[str] = ""
    RESULT: ClassVar[Any] = None

    def _body(self) -> Any:
        return serialize_fields(self)

    def to_json(self) -> dict[str, Any]:
        return self.build().to_json()

    def children(self) -> Aggregations | None:
        return None

    def decode(self, name: str, data: Any, path: str) -> AggregationResult:
        return self.RESULT.from_json(name, data, path)

    def build(self) -> Aggregation:
        return Aggregation(copy.deepcopy(self))


class MetricAggregation(AggregationBuilder):
    """Aggregation computing values over the documents in scope."""


class BucketAggregation(AggregationBuilder):
    """Aggregation grouping documents into buckets.

    Each bucket may carry child aggregations, emitted under ``aggs``.
    """

    aggs: Aggregations | None

    def with_aggs(self, aggs: Aggregations | Mapping[str, Any]) -> Any:
        self.aggs = aggs if isinstance(aggs, Aggregations) else Aggregations(aggs)
        return self

    def children(self) -> Aggregations | None:
        return self.aggs

    def decode(self, name: str, data: Any, path: str) -> AggregationResult:
        return self.RESULT.from_json(name, data, path, self.aggs)


@dataclass(frozen=True)
class Aggregation:
    """A built aggregation: one metric, or one bucket with optional children."""

    inner: AggregationBuilder

    @property
    def kind(self) -> str:
        return self.inner.KIND

    @property
    def is_bucket(self) -> bool:
        return isinstance(self.inner, BucketAggregation)

    @property
    def children(self) -> Aggregations | None:
        return self.inner.children()

    def decode(self, name: str, data: Any, path: str) -> AggregationResult:
        return self.inner.decode(name, data, path)

    def to_json(self) -> dict[str, Any]:
        entry: dict[str, Any] = {self.kind: self.inner._body()}
        children = self.children
        if children:
            entry["aggs"] = children.to_json()
        return entry


class Aggregations:
    """Named aggregations in insertion order.

    Builders are built on insertion. Names are unique within a container.

    Example::

        aggs = Aggregations({"by_tag": build_terms("tag").with_size(5)})
        aggs.add("max_price", build_max("price"))
    """

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self._entries: dict[str, Aggregation] = {}
        for name, aggregation in (entries or {}).items():
            self.add(name, aggregation)

    def add(self, name: str, aggregation: Aggregation | AggregationBuilder) -> Aggregations:
        """Insert a named aggregation.

        Raises:
            UsageError: If the name is already taken.
        """
        if name in self._entries:
            raise UsageError(f"Duplicate aggregation name: {name}")
        if isinstance(aggregation, AggregationBuilder):
            aggregation = aggregation.build()
        if not isinstance(aggregation, Aggregation):
            raise UsageError(f"Not an aggregation: {aggregation!r}")
        self._entries[name] = aggregation
        return self

    def items(self) -> Iterator[tuple[str, Aggregation]]:
        return iter(self._entries.items())

    def __getitem__(self, name: str) -> Aggregation:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Aggregations) and other._entries == self._entries

    def __repr__(self) -> str:
        return f"Aggregations({self._entries!r})"

    def to_json(self) -> dict[str, Any]:
        return {name: aggregation.to_json() for name, aggregation in self._entries.items()}


def field_or_script(field: str | None, script: Script | str | None) -> None:
    """Check that a field- or script-sourced aggregation has a source.

    Raises:
        UsageError: If neither a field nor a script was given.
    """
    if field is None and script is None:
        raise UsageError("Aggregation needs a field or a script")

