"""Highlighting and ``_source`` filtering for search requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from esdsl.wire import internal, opt, option, serialize_fields

HighlightResult = dict[str, list[str]]
"""Highlighted fragments of a hit, keyed by field name."""


class Encoder(str, Enum):
    DEFAULT = "default"
    HTML = "html"


class SettingType(str, Enum):
    """Highlighter implementation."""

    PLAIN = "plain"
    FVH = "fvh"
    POSTINGS = "postings"


class IndexOptions(str, Enum):
    OFFSETS = "offsets"


class TermVector(str, Enum):
    WITH_POSITIONS_OFFSETS = "with_positions_offsets"
    BOUNDARY_CHARS = "boundary_chars"
    BOUNDARY_MAX_SCAN = "boundary_max_scan"


@dataclass
class Setting:
    """Highlight settings of one field."""

    setting_type: SettingType | None = opt("type")
    index_options: IndexOptions | None = opt()
    term_vector: TermVector | None = opt()
    force_source: bool | None = opt()
    fragment_size: int | None = opt()
    number_of_fragments: int | None = opt()
    no_match_size: int | None = opt()
    matched_fields: list[str] | None = opt()

    with_type = option("setting_type")
    with_index_options = option("index_options")
    with_term_vector = option("term_vector")
    with_force_source = option("force_source")
    with_fragment_size = option("fragment_size")
    with_number_of_fragments = option("number_of_fragments")
    with_no_match_size = option("no_match_size")
    with_matched_fields = option("matched_fields")

    def to_json(self) -> dict[str, Any]:
        return serialize_fields(self)


@dataclass
class Highlight:
    """Fields to highlight and the tags wrapped around matches.

    Example::

        highlight = Highlight().add_setting("title", Setting().with_type(SettingType.PLAIN))
    """

    fields: dict[str, Setting] | None = internal()
    pre_tags: list[str] | None = opt()
    post_tags: list[str] | None = opt()
    encoder: Encoder | None = opt()

    with_pre_tags = option("pre_tags")
    with_post_tags = option("post_tags")
    with_encoder = option("encoder")

    def add_setting(self, name: str, setting: Setting | None = None) -> Highlight:
        if self.fields is None:
            self.fields = {}
        self.fields[name] = setting if setting is not None else Setting()
        return self

    def to_json(self) -> dict[str, Any]:
        body = serialize_fields(self)
        body["fields"] = {name: setting.to_json() for name, setting in (self.fields or {}).items()}
        return body


class Source:
    """The ``_source`` filter of a search: off, or include/exclude patterns."""

    def __init__(self, include: list[str] | None = None, exclude: list[str] | None = None, enabled: bool = True):
        self.include = include
        self.exclude = exclude
        self.enabled = enabled

    @classmethod
    def off(cls) -> Source:
        return cls(enabled=False)

    @classmethod
    def includes(cls, *fields: str) -> Source:
        return cls(include=list(fields))

    @classmethod
    def excludes(cls, *fields: str) -> Source:
        return cls(exclude=list(fields))

    @classmethod
    def filter(cls, include: list[str], exclude: list[str]) -> Source:
        return cls(include=include, exclude=exclude)

    def to_json(self) -> bool | dict[str, list[str]]:
        if not self.enabled:
            return False
        body = {}
        if self.include is not None:
            body["include"] = list(self.include)
        if self.exclude is not None:
            body["exclude"] = list(self.exclude)
        return body

    def to_uri_string(self) -> str:
        """Render for the ``_source`` URI parameter."""
        if not self.enabled:
            return "false"
        return ",".join(self.include or [])

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Source) and other.to_json() == self.to_json()

    def __repr__(self) -> str:
        return f"Source({self.to_json()!r})"
