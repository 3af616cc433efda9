"""Fetch a single document by id."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from esdsl.exceptions import DecodeError
from esdsl.operations.common import Options, url_option
from esdsl.wire import decode_source, optional, require

if TYPE_CHECKING:
    from esdsl.client import Client

T = TypeVar("T")


@dataclass
class GetResult:
    """A fetched document; ``found`` is false when the server answered 404."""

    index: str
    doc_type: str
    id: str
    found: bool
    version: int | None = None
    source: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, data: Any) -> GetResult:
        return cls(
            index=require(data, "_index", str),
            doc_type=require(data, "_type", str),
            id=require(data, "_id", str),
            found=require(data, "found", bool),
            version=optional(data, "_version", int),
            source=optional(data, "_source", dict),
        )

    def source_as(self, source_type: Callable[[dict[str, Any]], T]) -> T:
        """Build a typed document from ``_source`` with ``source_type(source)``.

        Raises:
            DecodeError: If the document has no source.
        """
        if self.source is None:
            raise DecodeError("_source", "object", "missing")
        return decode_source(self.source, source_type, "_source")


class GetOperation:
    def __init__(self, client: Client, index: str, id: str) -> None:
        self.client = client
        self.index = index
        self.id = id
        self.doc_type: str | None = None
        self.options = Options()

    def with_doc_type(self, doc_type: str) -> GetOperation:
        self.doc_type = doc_type
        return self

    def with_all_types(self) -> GetOperation:
        self.doc_type = None
        return self

    def with_fields(self, fields: list[str]) -> GetOperation:
        self.options.set("fields", fields)
        return self

    with_realtime = url_option("realtime")
    with_source = url_option("_source")
    with_routing = url_option("routing")
    with_preference = url_option("preference")
    with_refresh = url_option("refresh")
    with_version = url_option("version")

    def send(self) -> GetResult:
        path = f"/{self.index}/{self.doc_type or '_all'}/{self.id}{self.options.to_query_string()}"
        _, payload = self.client.request("GET", path, ok=(200, 404))
        return GetResult.from_json(payload)
