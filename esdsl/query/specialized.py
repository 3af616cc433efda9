"""Specialized queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from esdsl.query.common import QueryBuilder
from esdsl.units import MinimumShouldMatch
from esdsl.wire import opt, option, required, serialize_fields


@dataclass
class Doc:
    """A document to find similar documents to, stored or given inline."""

    index: str = required("_index")
    doc_type: str = required("_type")
    doc: dict[str, Any] | None = opt()
    id: str | None = opt("_id")

    @classmethod
    def from_doc(cls, index: str, doc_type: str, doc: dict[str, Any]) -> Doc:
        return cls(index, doc_type, doc=doc)

    @classmethod
    def id_only(cls, index: str, doc_type: str, id: str) -> Doc:
        return cls(index, doc_type, id=id)

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


@dataclass
class MoreLikeThisQuery(QueryBuilder):
    """Documents similar to some text or to other documents."""

    KIND: ClassVar[str] = "more_like_this"

    fields: list[str] | None = opt()
    like_text: str | None = opt()
    ids: list[str] | None = opt()
    docs: list[Doc] | None = opt()
    max_query_terms: int | None = opt()
    min_term_freq: int | None = opt()
    min_doc_freq: int | None = opt()
    max_doc_freq: int | None = opt()
    min_word_length: int | None = opt()
    max_word_length: int | None = opt()
    stop_words: list[str] | None = opt()
    analyzer: str | None = opt()
    minimum_should_match: MinimumShouldMatch | int | None = opt()
    boost_terms: float | None = opt()
    include: bool | None = opt()
    boost: float | None = opt()

    with_fields = option("fields")
    with_like_text = option("like_text")
    with_ids = option("ids")
    with_docs = option("docs")
    with_max_query_terms = option("max_query_terms")
    with_min_term_freq = option("min_term_freq")
    with_min_doc_freq = option("min_doc_freq")
    with_max_doc_freq = option("max_doc_freq")
    with_min_word_length = option("min_word_length")
    with_max_word_length = option("max_word_length")
    with_stop_words = option("stop_words")
    with_analyzer = option("analyzer")
    with_minimum_should_match = option("minimum_should_match")
    with_boost_terms = option("boost_terms")
    with_include = option("include")
    with_boost = option("boost")


def build_more_like_this() -> MoreLikeThisQuery:
    return MoreLikeThisQuery()
