"""Run text through an analyzer and return the resulting tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from esdsl.operations.common import Options, url_option
from esdsl.wire import check, require

if TYPE_CHECKING:
    from esdsl.client import Client


@dataclass
class Token:
    token: str
    token_type: str
    position: int
    start_offset: int
    end_offset: int

    @classmethod
    def from_json(cls, data: Any, path: str) -> Token:
        return cls(
            token=require(data, "token", str, path),
            token_type=require(data, "type", str, path),
            position=require(data, "position", int, path),
            start_offset=require(data, "start_offset", int, path),
            end_offset=require(data, "end_offset", int, path),
        )


@dataclass
class AnalyzeResult:
    tokens: list[Token]

    @classmethod
    def from_json(cls, data: Any) -> AnalyzeResult:
        tokens = require(data, "tokens", list)
        return cls([Token.from_json(check(t, dict, f"tokens[{i}]"), f"tokens[{i}]") for i, t in enumerate(tokens)])


class AnalyzeOperation:
    """Analyze text, optionally with the analyzers of an index."""

    def __init__(self, client: Client, text: str) -> None:
        self.client = client
        self.text = text
        self.index: str | None = None
        self.options = Options()

    def with_index(self, index: str) -> AnalyzeOperation:
        self.index = index
        return self

    with_analyzer = url_option("analyzer")

    def send(self) -> AnalyzeResult:
        prefix = f"/{self.index}" if self.index else ""
        path = f"{prefix}/_analyze{self.options.to_query_string()}"
        _, payload = self.client.request("GET", path, self.text, ok=(200,))
        return AnalyzeResult.from_json(payload)
