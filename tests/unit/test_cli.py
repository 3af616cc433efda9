"""CLI tests for the server commands, run against a recording transport."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from esdsl.cli import Context, cli
from esdsl.client import Client
from esdsl.exceptions import TransportError

SHARDS = {"total": 2, "successful": 2, "failed": 0}


@pytest.fixture
def app_ctx(client: Client) -> Context:
    """Context whose client talks to the recording transport."""
    ctx = Context()
    ctx.client = client
    return ctx


def _invoke(app_ctx: Context, temp_dir: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["-q", "--config", str(temp_dir / "missing.toml"), *args], obj=app_ctx)


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


class TestVersionCommand:
    def test_prints_version(self, app_ctx, temp_dir, transport) -> None:
        transport.respond(200, {"name": "n1", "cluster_name": "local", "version": {"number": "1.7.3"}})

        result = _invoke(app_ctx, temp_dir, "version")

        assert result.exit_code == 0
        assert "1.7.3" in result.output

    def test_unreachable_server(self, temp_dir) -> None:
        failing = MagicMock()
        failing.do_op.side_effect = TransportError("GET", "/", "Connection refused")
        ctx = Context()
        ctx.client = Client("http://localhost:9200", transport=failing)

        result = _invoke(ctx, temp_dir, "version")

        assert result.exit_code == 1


class TestSearchCommand:
    def test_json_output(self, app_ctx, temp_dir, transport, make_response, make_hit) -> None:
        transport.respond(200, make_response([make_hit("1", {"title": "Dune"}), make_hit("2")]))

        result = _invoke(app_ctx, temp_dir, "search", "-i", "books", "-s", "year:desc", "-n", "5", "--json", "dune")

        assert result.exit_code == 0
        assert transport.calls == [("GET", "/books/_search?q=dune&size=5&sort=year:desc", None)]
        assert _json_lines(result.output) == [
            {"_index": "books", "_type": "book", "_id": "1", "_score": 1.0, "_source": {"title": "Dune"}},
            {"_index": "books", "_type": "book", "_id": "2", "_score": 1.0},
        ]

    def test_default_size_from_config(self, app_ctx, temp_dir, transport, make_response) -> None:
        transport.respond(200, make_response([]))

        result = _invoke(app_ctx, temp_dir, "search")

        assert result.exit_code == 0
        assert transport.calls[0][1] == "/_all/_search?size=100"
        assert "No hits." in result.output

    def test_table_output(self, app_ctx, temp_dir, transport, make_response, make_hit) -> None:
        transport.respond(200, make_response([make_hit("42", {"title": "Dune"})]))

        result = _invoke(app_ctx, temp_dir, "search", "-i", "books")

        assert result.exit_code == 0
        assert "1 hits in 3 ms" in result.output
        assert "42" in result.output

    def test_bad_sort(self, app_ctx, temp_dir, transport) -> None:
        result = _invoke(app_ctx, temp_dir, "search", "--sort", "year:sideways")

        assert result.exit_code == 1
        assert transport.calls == []

    def test_server_error(self, app_ctx, temp_dir, transport) -> None:
        transport.respond(400, {"error": "SearchParseException"})

        result = _invoke(app_ctx, temp_dir, "search", "title:(")

        assert result.exit_code == 1


class TestCountCommand:
    def test_prints_count(self, app_ctx, temp_dir, transport) -> None:
        transport.respond(200, {"count": 42, "_shards": SHARDS})

        result = _invoke(app_ctx, temp_dir, "count", "-i", "books", "year:1965")

        assert result.exit_code == 0
        assert transport.calls == [("GET", "/books/_count?q=year:1965", None)]
        assert "42" in result.output


class TestScanCommand:
    def test_streams_all_hits_and_closes(self, app_ctx, temp_dir, transport, make_response, make_hit) -> None:
        transport.respond(200, make_response([make_hit("1"), make_hit("2")], total=3, scroll_id="s0"))
        transport.respond(200, make_response([make_hit("3")], total=3, scroll_id="s1"))
        transport.respond(200, make_response([], total=3, scroll_id="s2"))
        transport.respond(200, {"succeeded": True})

        result = _invoke(app_ctx, temp_dir, "scan", "--size", "2", "--scroll", "30s")

        assert result.exit_code == 0
        assert [line["_id"] for line in _json_lines(result.output)] == ["1", "2", "3"]
        method, path, body = transport.calls[0]
        assert (method, path) == ("POST", "/_all/_search?scroll=30s")
        assert body == {"query": {"match_all": {}}, "size": 2, "sort": ["_doc"]}
        assert transport.calls_to("DELETE") == [("DELETE", "/_search/scroll?scroll_id=s2", None)]

    def test_failed_page_still_closes(self, app_ctx, temp_dir, transport, make_response, make_hit) -> None:
        transport.respond(200, make_response([make_hit("1")], total=2, scroll_id="s0"))
        transport.respond(500, {"error": "boom"})
        transport.respond(200, {"succeeded": True})

        result = _invoke(app_ctx, temp_dir, "scan", "tag:x")

        assert result.exit_code == 1
        assert len(transport.calls_to("DELETE")) == 1


class TestRefreshCommand:
    def test_refresh(self, app_ctx, temp_dir, transport) -> None:
        transport.respond(200, {"_shards": SHARDS})

        result = _invoke(app_ctx, temp_dir, "refresh", "books", "films")

        assert result.exit_code == 0
        assert transport.calls == [("POST", "/books,films/_refresh", None)]
