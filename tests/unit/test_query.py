"""Unit tests for the query DSL."""

from __future__ import annotations

import pytest

from esdsl.exceptions import UsageError
from esdsl.query import (
    build_bool,
    build_constant_score,
    build_match_all,
    build_term,
)
from esdsl.query.compound import (
    BoostMode,
    NoMatch,
    build_boosting,
    build_dis_max,
    build_function_score,
    build_indices,
)
from esdsl.query.full_text import (
    MatchType,
    SimpleQueryStringFlag,
    build_common,
    build_match,
    build_multi_match,
    build_query_string,
    build_simple_query_string,
)
from esdsl.query.functions import (
    Modifier,
    ScoreMode,
    build_exp,
    build_field_value_factor,
    build_gauss,
    build_linear,
    build_random_score,
    build_script_score,
    build_weight,
)
from esdsl.query.geo import (
    build_geo_bounding_box,
    build_geo_distance,
    build_geo_polygon,
    build_geo_shape,
    build_geohash_cell,
)
from esdsl.query.joining import JoinScoreMode, build_has_child, build_has_parent, build_nested
from esdsl.query.specialized import Doc, build_more_like_this
from esdsl.query.term import (
    RegexpFlag,
    TermsLookup,
    build_exists,
    build_fuzzy,
    build_ids,
    build_prefix,
    build_range,
    build_regexp,
    build_terms,
    build_type,
    build_wildcard,
)
from esdsl.units import Distance, DistanceUnit, Fuzziness, GeoBoxCorners, GeoBoxVertices, GeoPoint, MinimumShouldMatch


class TestSingleKey:
    @pytest.mark.parametrize(
        "query, kind",
        [
            (build_match_all(), "match_all"),
            (build_match("title", "lord"), "match"),
            (build_multi_match(["title", "body"], "ring"), "multi_match"),
            (build_common("body", "the ring"), "common"),
            (build_query_string("a AND b"), "query_string"),
            (build_simple_query_string("a + b"), "simple_query_string"),
            (build_term("tag", "x"), "term"),
            (build_terms("tag").with_values(["x", "y"]), "terms"),
            (build_range("year").with_gte(1950), "range"),
            (build_exists("title"), "exists"),
            (build_regexp("tag", "x.*"), "regexp"),
            (build_fuzzy("title", "rnig"), "fuzzy"),
            (build_ids(["1", "2"]), "ids"),
            (build_bool(), "bool"),
            (build_constant_score(build_term("a", 1).build()), "constant_score"),
            (build_function_score(), "function_score"),
            (build_nested("comments", build_match_all().build()), "nested"),
            (build_geo_distance("loc", (1.0, 2.0), "5km"), "geo_distance"),
            (build_more_like_this().with_like_text("hobbits"), "more_like_this"),
            (build_prefix("user", "ki"), "prefix"),
            (build_wildcard("user", "ki*y"), "wildcard"),
            (build_type("book"), "type"),
            (build_dis_max([build_match_all().build()]), "dis_max"),
            (build_boosting().with_positive(build_match_all().build()), "boosting"),
            (build_indices(["a"], build_match_all().build()), "indices"),
            (build_geo_shape("area").with_geojson({"type": "point", "coordinates": [1.0, 2.0]}), "geo_shape"),
            (
                build_geo_bounding_box("loc", GeoBoxCorners(GeoPoint(40.0, -74.0), GeoPoint(39.0, -73.0))),
                "geo_bounding_box",
            ),
            (build_geo_polygon("loc", [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]), "geo_polygon"),
            (build_geohash_cell("loc", (1.0, 2.0)), "geohash_cell"),
            (build_has_child("comment", build_match_all().build()), "has_child"),
            (build_has_parent("blog", build_match_all().build()), "has_parent"),
        ],
    )
    def test_serializes_to_one_key_named_after_kind(self, query, kind: str) -> None:
        built = query.build()
        data = built.to_json()
        assert list(data) == [kind]
        assert built.kind == kind

    def test_unset_options_are_omitted(self) -> None:
        assert build_match("title", "ring").to_json() == {"match": {"title": {"query": "ring"}}}
        assert build_match_all().to_json() == {"match_all": {}}


class TestBuild:
    def test_build_snapshots_the_builder(self) -> None:
        builder = build_term("tag", "python")
        built = builder.build()
        builder.with_boost(2.0)

        assert built.to_json() == {"term": {"tag": {"value": "python"}}}
        assert builder.to_json() == {"term": {"tag": {"value": "python", "boost": 2.0}}}

    def test_built_query_is_immutable(self) -> None:
        built = build_match_all().build()
        with pytest.raises(AttributeError):
            built.inner = None  # type: ignore[misc]


class TestCompound:
    def test_bool_with_term_and_range(self) -> None:
        query = build_bool().with_must(
            [
                build_term("field_a", "value").build(),
                build_range("field_b").with_gte(5).with_lt(10).build(),
            ]
        )
        assert query.build().to_json() == {
            "bool": {
                "must": [
                    {"term": {"field_a": {"value": "value"}}},
                    {"range": {"field_b": {"gte": 5, "lt": 10}}},
                ]
            }
        }

    def test_boosting(self) -> None:
        query = (
            build_boosting()
            .with_positive(build_term("tag", "space").build())
            .with_negative(build_term("tag", "pulp").build())
            .with_negative_boost(0.2)
        )
        assert query.to_json() == {
            "boosting": {
                "positive": {"term": {"tag": {"value": "space"}}},
                "negative": {"term": {"tag": {"value": "pulp"}}},
                "negative_boost": 0.2,
            }
        }

    def test_bool_single_clause_is_not_wrapped_in_list(self) -> None:
        query = build_bool().with_filter(build_exists("title").build())
        assert query.to_json() == {"bool": {"filter": {"exists": {"field": "title"}}}}

    def test_bool_minimum_should_match(self) -> None:
        query = build_bool().with_should([build_match_all().build()]).with_minimum_should_match(
            MinimumShouldMatch.percentage(75)
        )
        assert query.to_json()["bool"]["minimum_should_match"] == "75%"

    def test_constant_score_emits_filter(self) -> None:
        query = build_constant_score(build_term("a", 1).build()).with_boost(1.5)
        assert query.to_json() == {
            "constant_score": {"filter": {"term": {"a": {"value": 1}}}, "boost": 1.5}
        }

    def test_dis_max(self) -> None:
        query = build_dis_max([build_term("a", 1).build(), build_term("b", 2).build()]).with_tie_breaker(0.3)
        assert query.to_json() == {
            "dis_max": {
                "queries": [{"term": {"a": {"value": 1}}}, {"term": {"b": {"value": 2}}}],
                "tie_breaker": 0.3,
            }
        }

    def test_indices_with_no_match(self) -> None:
        query = build_indices(["a", "b"], build_match_all().build()).with_no_match_query(NoMatch.NONE)
        assert query.to_json() == {
            "indices": {"indices": ["a", "b"], "query": {"match_all": {}}, "no_match_query": "none"}
        }

    def test_function_score_always_lists_functions(self) -> None:
        assert build_function_score().to_json() == {"function_score": {"functions": []}}

    def test_function_score_with_functions(self) -> None:
        query = (
            build_function_score()
            .with_query(build_match_all().build())
            .add_function(build_weight(2.0).with_filter(build_term("tag", "x").build()).build())
            .add_function(build_random_score(42).build())
            .with_score_mode(ScoreMode.SUM)
            .with_boost_mode(BoostMode.REPLACE)
        )
        assert query.to_json() == {
            "function_score": {
                "functions": [
                    {"weight": 2.0, "filter": {"term": {"tag": {"value": "x"}}}},
                    {"random_score": {"seed": 42}},
                ],
                "query": {"match_all": {}},
                "score_mode": "sum",
                "boost_mode": "replace",
            }
        }


class TestFunctions:
    def test_gauss_decay_on_location(self) -> None:
        function = build_gauss("my_field", GeoPoint(42.0, 24.0)).with_scale(Distance(3, DistanceUnit.KILOMETER))
        assert function.build().to_json() == {
            "gauss": {"my_field": {"origin": {"lat": 42.0, "lon": 24.0}, "scale": "3km"}}
        }

    def test_gauss_tuple_origin_becomes_point(self) -> None:
        function = build_gauss("my_field", (42.0, 24.0)).with_scale(Distance(3, DistanceUnit.KILOMETER))
        assert function.build().to_json() == {
            "gauss": {"my_field": {"origin": {"lat": 42.0, "lon": 24.0}, "scale": "3km"}}
        }

    def test_exp_list_origin_becomes_point(self) -> None:
        function = build_exp("pin", [13.4, 52.5]).with_scale("2km")
        assert function.to_json() == {"exp": {"pin": {"origin": {"lat": 13.4, "lon": 52.5}, "scale": "2km"}}}

    def test_linear_numeric_origin_is_kept(self) -> None:
        function = build_linear("price", 100).with_scale(20)
        assert function.to_json() == {"linear": {"price": {"origin": 100, "scale": 20}}}

    def test_field_value_factor(self) -> None:
        function = build_field_value_factor("likes").with_factor(1.2).with_modifier(Modifier.SQRT).with_missing(1)
        assert function.to_json() == {
            "field_value_factor": {"field": "likes", "factor": 1.2, "modifier": "sqrt", "missing": 1}
        }

    def test_decay_multi_value_mode_sits_beside_field(self) -> None:
        from esdsl.query.functions import MultiValueMode

        function = build_gauss("date", "2024-01-01").with_scale(10).with_multi_value_mode(MultiValueMode.AVG)
        assert function.to_json() == {
            "gauss": {"date": {"origin": "2024-01-01", "scale": 10}, "multi_value_mode": "avg"}
        }

    def test_script_score_always_has_params(self) -> None:
        assert build_script_score("_score * 2").to_json() == {
            "script_score": {"inline": "_score * 2", "params": {}}
        }

    def test_script_score_with_weight(self) -> None:
        function = build_script_score("doc['x'].value * f").add_param("f", 1.5).with_weight(3)
        assert function.to_json() == {
            "script_score": {"inline": "doc['x'].value * f", "params": {"f": 1.5}},
            "weight": 3,
        }


class TestFullText:
    def test_match_options(self) -> None:
        query = build_match("title", "lord rings").with_type(MatchType.PHRASE).with_fuzziness(Fuzziness.auto())
        assert query.to_json() == {
            "match": {"title": {"query": "lord rings", "type": "phrase", "fuzziness": "auto"}}
        }

    def test_simple_query_string_flags(self) -> None:
        query = build_simple_query_string("a -b").with_flags(SimpleQueryStringFlag.AND, SimpleQueryStringFlag.NOT)
        assert query.to_json() == {"simple_query_string": {"query": "a -b", "flags": "AND|NOT"}}

    def test_common_low_high_minimum_should_match(self) -> None:
        query = build_common("body", "nelly the elephant").with_minimum_should_match(
            MinimumShouldMatch.low_high(2, MinimumShouldMatch.percentage(30))
        )
        assert query.to_json() == {
            "common": {
                "body": {
                    "query": "nelly the elephant",
                    "minimum_should_match": {"low_freq": 2, "high_freq": "30%"},
                }
            }
        }


class TestTermLevel:
    def test_terms_values(self) -> None:
        assert build_terms("tag").with_values(["a", "b"]).to_json() == {"terms": {"tag": ["a", "b"]}}

    def test_terms_single_value_becomes_list(self) -> None:
        assert build_terms("tag").with_values("a").to_json() == {"terms": {"tag": ["a"]}}

    def test_terms_lookup_replaces_values(self) -> None:
        query = build_terms("user").with_values(["x"]).with_lookup(TermsLookup("2", "followers", index="users"))
        assert query.to_json() == {"terms": {"user": {"id": "2", "path": "followers", "index": "users"}}}

    def test_prefix_with_boost(self) -> None:
        assert build_prefix("user", "ki").with_boost(2.0).to_json() == {
            "prefix": {"user": {"value": "ki", "boost": 2.0}}
        }

    def test_wildcard(self) -> None:
        assert build_wildcard("user", "ki*y").to_json() == {"wildcard": {"user": {"value": "ki*y"}}}

    def test_type(self) -> None:
        assert build_type("book").to_json() == {"type": {"value": "book"}}

    def test_regexp_flags(self) -> None:
        query = build_regexp("tag", "a.*").with_flags(RegexpFlag.INTERSECTION, RegexpFlag.COMPLEMENT)
        assert query.to_json() == {"regexp": {"tag": {"value": "a.*", "flags": "INTERSECTION|COMPLEMENT"}}}

    def test_ids_with_type(self) -> None:
        assert build_ids(["1"]).with_type("book").to_json() == {"ids": {"values": ["1"], "type": "book"}}

    def test_range_legacy_bounds(self) -> None:
        query = build_range("age").with_from(10).with_include_lower(False)
        assert query.build().to_json() == {"range": {"age": {"from": 10, "include_lower": False}}}

    def test_range_mixing_bound_styles_is_rejected(self) -> None:
        with pytest.raises(UsageError):
            build_range("age").with_from(10).with_gte(5).build()
        with pytest.raises(UsageError):
            build_range("age").with_to(10).with_lt(20).build()

    def test_range_mixed_sides_are_allowed(self) -> None:
        query = build_range("age").with_from(10).with_lt(20).build()
        assert query.to_json() == {"range": {"age": {"lt": 20, "from": 10}}}


class TestGeo:
    def test_geo_distance_outer_options(self) -> None:
        query = build_geo_distance("loc", (40.0, -70.0), "12km").with_coerce(True)
        assert query.to_json() == {
            "geo_distance": {"loc": {"lat": 40.0, "lon": -70.0}, "distance": "12km", "coerce": True}
        }

    def test_geo_distance_geohash_location(self) -> None:
        query = build_geo_distance("loc", "drm3btev3e86", Distance(1.5, DistanceUnit.MILE))
        assert query.to_json() == {"geo_distance": {"loc": "drm3btev3e86", "distance": "1.5mi"}}

    def test_bounding_box_corners(self) -> None:
        box = GeoBoxCorners(GeoPoint(40.73, -74.1), GeoPoint(40.01, -71.12))
        assert build_geo_bounding_box("pin", box).to_json() == {
            "geo_bounding_box": {
                "pin": {
                    "top_left": {"lat": 40.73, "lon": -74.1},
                    "bottom_right": {"lat": 40.01, "lon": -71.12},
                }
            }
        }

    def test_bounding_box_vertices(self) -> None:
        box = GeoBoxVertices(top=40.73, left=-74.1, bottom=40.01, right=-71.12)
        assert build_geo_bounding_box("pin", box).to_json() == {
            "geo_bounding_box": {"pin": {"top": 40.73, "left": -74.1, "bottom": 40.01, "right": -71.12}}
        }

    def test_polygon(self) -> None:
        query = build_geo_polygon("pin", [(40.0, -70.0), (30.0, -80.0), "drn5x1g8cu2y"])
        assert query.to_json() == {
            "geo_polygon": {
                "pin": {
                    "points": [{"lat": 40.0, "lon": -70.0}, {"lat": 30.0, "lon": -80.0}, "drn5x1g8cu2y"]
                }
            }
        }

    def test_geohash_cell_outer_options(self) -> None:
        query = build_geohash_cell("pin", (13.4, 52.5)).with_precision(3).with_neighbors(True)
        assert query.to_json() == {
            "geohash_cell": {"pin": {"lat": 13.4, "lon": 52.5}, "precision": 3, "neighbors": True}
        }

    def test_geo_shape_geojson(self) -> None:
        geometry = {"type": "envelope", "coordinates": [[13.0, 53.0], [14.0, 52.0]]}
        query = build_geo_shape("area").with_geojson(geometry).with_ignore_malformed(True)
        assert query.to_json() == {"geo_shape": {"area": {"shape": geometry}, "ignore_malformed": True}}


class TestJoining:
    def test_nested_score_mode(self) -> None:
        query = build_nested("comments", build_match("comments.text", "great").build()).with_score_mode(
            JoinScoreMode.AVG
        )
        assert query.to_json() == {
            "nested": {
                "path": "comments",
                "query": {"match": {"comments.text": {"query": "great"}}},
                "score_mode": "avg",
            }
        }

    def test_has_child_uses_type_key(self) -> None:
        query = build_has_child("comment", build_match_all().build()).with_min_children(2)
        assert query.to_json() == {
            "has_child": {"type": "comment", "query": {"match_all": {}}, "min_children": 2}
        }

    def test_has_parent(self) -> None:
        query = build_has_parent("blog", build_term("tag", "x").build())
        assert query.to_json() == {
            "has_parent": {"parent_type": "blog", "query": {"term": {"tag": {"value": "x"}}}}
        }


class TestMoreLikeThis:
    def test_docs(self) -> None:
        query = build_more_like_this().with_fields(["title"]).with_docs(
            [Doc.id_only("books", "book", "1"), Doc.from_doc("books", "book", {"title": "x"})]
        )
        assert query.to_json() == {
            "more_like_this": {
                "fields": ["title"],
                "docs": [
                    {"_index": "books", "_type": "book", "_id": "1"},
                    {"_index": "books", "_type": "book", "doc": {"title": "x"}},
                ],
            }
        }
