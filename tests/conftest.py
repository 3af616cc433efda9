"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from esdsl.client import Client

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeTransport:
    """Transport that records requests and answers from a queue of responses."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.responses: deque[tuple[int, Any]] = deque()

    def respond(self, status: int, body: Any = None) -> FakeTransport:
        self.responses.append((status, body))
        return self

    def do_op(self, method: str, path: str, body: Any | None = None) -> tuple[int, Any | None]:
        self.calls.append((method, path, body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {path}")
        return self.responses.popleft()

    def calls_to(self, method: str) -> list[tuple[str, str, Any]]:
        return [call for call in self.calls if call[0] == method]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> Client:
    """Client wired to the recording transport."""
    return Client("http://localhost:9200", transport=transport)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[server]
url = "https://search.example.com:9243/es"
timeout = 12.5

[search]
default_index = "books"
scroll = "2m"
page_size = 50
""")
    return config_path


def _hit(id: str, source: dict[str, Any] | None = None, index: str = "books") -> dict[str, Any]:
    """Build one raw hit as the server returns it."""
    data: dict[str, Any] = {"_index": index, "_type": "book", "_id": id, "_score": 1.0}
    if source is not None:
        data["_source"] = source
    return data


def _search_response(
    hits: list[dict[str, Any]],
    total: int | None = None,
    scroll_id: str | None = None,
    aggregations: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a raw search response around ``hits``."""
    data: dict[str, Any] = {
        "took": 3,
        "timed_out": False,
        "_shards": {"total": 5, "successful": 5, "failed": 0},
        "hits": {"total": len(hits) if total is None else total, "max_score": 1.0, "hits": hits},
    }
    if scroll_id is not None:
        data["_scroll_id"] = scroll_id
    if aggregations is not None:
        data["aggregations"] = aggregations
    return data


@pytest.fixture
def make_hit():
    return _hit


@pytest.fixture
def make_response():
    return _search_response
