"""Server version information (``GET /``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from esdsl.wire import optional, require

if TYPE_CHECKING:
    from esdsl.client import Client


@dataclass
class Version:
    number: str
    build_hash: str | None = None
    build_timestamp: str | None = None
    build_snapshot: bool | None = None
    lucene_version: str | None = None

    @classmethod
    def from_json(cls, data: Any, path: str = "version") -> Version:
        return cls(
            number=require(data, "number", str, path),
            build_hash=optional(data, "build_hash", str, path),
            build_timestamp=optional(data, "build_timestamp", str, path),
            build_snapshot=optional(data, "build_snapshot", bool, path),
            lucene_version=optional(data, "lucene_version", str, path),
        )


@dataclass
class VersionResult:
    name: str
    cluster_name: str
    version: Version
    tagline: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> VersionResult:
        return cls(
            name=require(data, "name", str),
            cluster_name=require(data, "cluster_name", str),
            version=Version.from_json(require(data, "version", dict)),
            tagline=optional(data, "tagline", str),
        )


class VersionOperation:
    def __init__(self, client: Client) -> None:
        self.client = client

    def send(self) -> VersionResult:
        _, payload = self.client.request("GET", "/")
        return VersionResult.from_json(payload)
