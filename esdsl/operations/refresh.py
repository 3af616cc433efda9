"""Refresh indexes so recent changes become searchable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from esdsl.operations.common import ShardCountResult, format_multi
from esdsl.wire import require

if TYPE_CHECKING:
    from esdsl.client import Client


@dataclass
class RefreshResult:
    shards: ShardCountResult

    @classmethod
    def from_json(cls, data: Any) -> RefreshResult:
        return cls(ShardCountResult.from_json(require(data, "_shards", dict)))


class RefreshOperation:
    def __init__(self, client: Client) -> None:
        self.client = client
        self.indexes: list[str] = []

    def with_indexes(self, indexes: list[str]) -> RefreshOperation:
        self.indexes = list(indexes)
        return self

    def send(self) -> RefreshResult:
        _, payload = self.client.request("POST", f"/{format_multi(self.indexes)}/_refresh", ok=(200,))
        return RefreshResult.from_json(payload)
