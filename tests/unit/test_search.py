"""Unit tests for search requests, sorting, highlighting and responses."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from esdsl.aggregations import Aggregations, build_min, build_terms
from esdsl.exceptions import DecodeError, ServerError, UsageError
from esdsl.query import build_match_all, build_term
from esdsl.search import (
    Highlight,
    Missing,
    ScriptSort,
    SearchBody,
    SearchResult,
    SearchType,
    Setting,
    SettingType,
    Sort,
    SortField,
    SortMode,
    SortOrder,
    Source,
    build_geo_distance_sort,
)
from esdsl.units import DistanceUnit, Duration


@dataclass
class Book:
    title: str
    year: int

    @classmethod
    def from_dict(cls, data: dict) -> Book:
        return cls(data["title"], data["year"])


class TestSearchBody:
    def test_match_all_without_source(self) -> None:
        body = SearchBody(query=build_match_all().build(), source=Source.off())
        assert body.to_json() == {"query": {"match_all": {}}, "_source": False}

    def test_empty_body(self) -> None:
        assert SearchBody().to_json() == {}

    def test_empty_sort_and_source_are_left_out(self) -> None:
        assert SearchBody(sort=Sort(), source=Source()).to_json() == {}

    def test_empty_include_list_is_kept(self) -> None:
        assert SearchBody(source=Source(include=[])).to_json() == {"_source": {"include": []}}

    def test_all_fields(self) -> None:
        body = SearchBody(
            query=build_term("tag", "x").build(),
            timeout=Duration.seconds(2),
            from_=10,
            size=5,
            min_score=0.5,
            sort=Sort.field("year", SortOrder.DESC),
            source=Source.includes("title"),
            aggs=Aggregations({"m": build_min("year")}),
            version=True,
        )
        assert body.to_json() == {
            "query": {"term": {"tag": {"value": "x"}}},
            "timeout": "2s",
            "from": 10,
            "size": 5,
            "min_score": 0.5,
            "sort": [{"year": {"order": "desc"}}],
            "_source": {"include": ["title"]},
            "aggs": {"m": {"min": {"field": "year"}}},
            "version": True,
        }

    def test_empty_aggs_are_omitted(self) -> None:
        assert SearchBody(aggs=Aggregations()).to_json() == {}


class TestSort:
    def test_plain_field_is_a_string(self) -> None:
        assert Sort.field("_doc").to_json() == ["_doc"]

    def test_field_options(self) -> None:
        sort = Sort([SortField("price").with_order(SortOrder.ASC).with_mode(SortMode.AVG).with_missing(Missing.LAST)])
        assert sort.to_json() == [{"price": {"order": "asc", "mode": "avg", "missing": "_last"}}]

    def test_geo_distance_sort(self) -> None:
        sort = build_geo_distance_sort("loc", (1.0, 2.0)).with_unit(DistanceUnit.KILOMETER)
        assert sort.to_json() == {"_geo_distance": {"loc": {"lat": 1.0, "lon": 2.0}, "unit": "km"}}

    def test_geo_distance_sort_many_locations(self) -> None:
        sort = build_geo_distance_sort("loc", [(1.0, 2.0), "u33d"])
        assert sort.to_json() == {"_geo_distance": {"loc": [{"lat": 1.0, "lon": 2.0}, "u33d"]}}

    def test_script_sort_includes_order(self) -> None:
        sort = ScriptSort("doc['a'].value * f", "number").add_param("f", 2).with_order(SortOrder.DESC)
        assert sort.to_json() == {
            "_script": {"script": "doc['a'].value * f", "type": "number", "params": {"f": 2}, "order": "desc"}
        }

    def test_uri_string(self) -> None:
        sort = Sort.field_orders([("year", SortOrder.DESC), ("_score", None)])
        assert sort.to_uri_string() == "year:desc,_score"

    def test_parse(self) -> None:
        assert Sort.parse("year:desc, title") == Sort.field_orders([("year", SortOrder.DESC), ("title", None)])

    def test_parse_rejects_bad_order(self) -> None:
        with pytest.raises(UsageError):
            Sort.parse("year:down")

    def test_uri_string_rejects_script_sort(self) -> None:
        with pytest.raises(UsageError):
            Sort([ScriptSort("1", "number")]).to_uri_string()


class TestHighlightAndSource:
    def test_highlight(self) -> None:
        highlight = (
            Highlight()
            .add_setting("title")
            .add_setting("body", Setting().with_type(SettingType.FVH).with_fragment_size(50))
            .with_pre_tags(["<em>"])
            .with_post_tags(["</em>"])
        )
        assert highlight.to_json() == {
            "pre_tags": ["<em>"],
            "post_tags": ["</em>"],
            "fields": {"title": {}, "body": {"type": "fvh", "fragment_size": 50}},
        }

    def test_empty_highlight_keeps_fields(self) -> None:
        assert Highlight().to_json() == {"fields": {}}

    @pytest.mark.parametrize(
        "source, expected",
        [
            (Source.off(), False),
            (Source.includes("a", "b"), {"include": ["a", "b"]}),
            (Source.excludes("c"), {"exclude": ["c"]}),
            (Source.filter(["a"], ["a.secret"]), {"include": ["a"], "exclude": ["a.secret"]}),
        ],
    )
    def test_source_shapes(self, source: Source, expected) -> None:
        assert source.to_json() == expected


class TestSearchResult:
    def test_decode_hits(self, make_response, make_hit) -> None:
        payload = make_response([make_hit("1", {"title": "Dune", "year": 1965})])
        payload["hits"]["hits"][0]["highlight"] = {"title": ["<em>Dune</em>"]}
        result = SearchResult.from_json(payload)

        assert result.took == 3
        assert result.shards.successful == 5
        assert result.hits.total == 1
        hit = result.hits.hits[0]
        assert (hit.index, hit.doc_type, hit.id) == ("books", "book", "1")
        assert hit.source == {"title": "Dune", "year": 1965}
        assert hit.highlight == {"title": ["<em>Dune</em>"]}

    def test_typed_documents(self, make_response, make_hit) -> None:
        payload = make_response([make_hit("1", {"title": "Dune", "year": 1965}), make_hit("2")])
        result = SearchResult.from_json(payload, source_type=Book.from_dict)
        assert result.hits.documents() == [Book("Dune", 1965)]

    def test_source_type_failure_is_decode_error(self, make_response, make_hit) -> None:
        payload = make_response([make_hit("1", {"name": "x"})])
        with pytest.raises(DecodeError) as exc:
            SearchResult.from_json(payload, source_type=Book.from_dict)
        assert exc.value.field == "hits.hits[0]._source"

    def test_missing_hits_field(self, make_response) -> None:
        payload = make_response([])
        del payload["hits"]["total"]
        with pytest.raises(DecodeError) as exc:
            SearchResult.from_json(payload)
        assert exc.value.field == "hits.total"

    def test_aggs_without_request_are_empty(self, make_response) -> None:
        result = SearchResult.from_json(make_response([], aggregations={"x": {"value": 1}}))
        assert len(result.aggs) == 0

    def test_requested_aggs_missing_from_response(self, make_response) -> None:
        result = SearchResult.from_json(make_response([]), Aggregations({"m": build_min("x")}))
        with pytest.raises(DecodeError):
            result.aggs


class TestSearchOperations:
    def test_uri_search(self, client, transport, make_response) -> None:
        transport.respond(200, make_response([]))
        (
            client.search_uri()
            .with_indexes(["books", "films"])
            .with_types(["item"])
            .with_query("title:dune")
            .with_sort(Sort.field("year", SortOrder.DESC))
            .with_size(5)
            .send()
        )
        assert transport.calls == [
            ("GET", "/books,films/item/_search?q=title:dune&sort=year:desc&size=5", None)
        ]

    def test_uri_search_all_indexes(self, client, transport, make_response) -> None:
        transport.respond(200, make_response([]))
        client.search_uri().send()
        assert transport.calls[0][1] == "/_all/_search"

    def test_query_search_decodes_aggs(self, client, transport, make_response) -> None:
        payload = make_response(
            [], aggregations={"term_test": {"buckets": [{"key": "a", "doc_count": 2}]}}
        )
        transport.respond(200, payload)
        result = (
            client.search_query()
            .with_indexes(["books"])
            .with_query(build_match_all())
            .with_aggs({"term_test": build_terms("blah").with_size(5)})
            .with_size(0)
            .with_search_type(SearchType.QUERY_THEN_FETCH)
            .send()
        )

        method, path, body = transport.calls[0]
        assert (method, path) == ("POST", "/books/_search?search_type=query_then_fetch")
        assert body == {
            "query": {"match_all": {}},
            "size": 0,
            "aggs": {"term_test": {"terms": {"field": "blah", "size": 5}}},
        }
        assert result.aggs["term_test"].as_terms().buckets[0].doc_count == 2

    def test_server_error(self, client, transport) -> None:
        transport.respond(400, {"error": "SearchPhaseExecutionException"})
        with pytest.raises(ServerError) as exc:
            client.search_query().send()
        assert exc.value.status == 400
        assert exc.value.kind == "server"


class TestCount:
    def test_count_uri(self, client, transport) -> None:
        transport.respond(200, {"count": 42, "_shards": {"total": 1, "successful": 1, "failed": 0}})
        result = client.count_uri().with_indexes(["books"]).with_query("year:1965").with_lenient(True).send()

        assert result.count == 42
        assert transport.calls == [("GET", "/books/_count?q=year:1965&lenient=true", None)]

    def test_count_query(self, client, transport) -> None:
        transport.respond(200, {"count": 3, "_shards": {"total": 1, "successful": 1, "failed": 0}})
        result = client.count_query().with_query(build_term("tag", "x")).send()

        assert result.count == 3
        assert transport.calls == [("POST", "/_all/_count", {"query": {"term": {"tag": {"value": "x"}}}})]
