"""Search requests, responses, sorting, highlighting and scroll cursors."""

from esdsl.search.count import CountQueryOperation, CountResult, CountURIOperation
from esdsl.search.highlight import (
    Encoder,
    Highlight,
    HighlightResult,
    IndexOptions,
    Setting,
    SettingType,
    Source,
    TermVector,
)
from esdsl.search.request import SearchBody, SearchQueryOperation, SearchType, SearchURIOperation
from esdsl.search.response import Hit, SearchHitsResult, SearchResult
from esdsl.search.scroll import CursorState, HitIterator, ScanResult
from esdsl.search.sort import (
    GeoDistanceSort,
    Missing,
    ScriptSort,
    Sort,
    SortField,
    SortMode,
    SortOrder,
    build_geo_distance_sort,
)

__all__ = [
    "CountQueryOperation",
    "CountResult",
    "CountURIOperation",
    "CursorState",
    "Encoder",
    "GeoDistanceSort",
    "Highlight",
    "HighlightResult",
    "Hit",
    "HitIterator",
    "IndexOptions",
    "Missing",
    "ScanResult",
    "ScriptSort",
    "SearchBody",
    "SearchHitsResult",
    "SearchQueryOperation",
    "SearchResult",
    "SearchType",
    "SearchURIOperation",
    "Setting",
    "SettingType",
    "Sort",
    "SortField",
    "SortMode",
    "SortOrder",
    "Source",
    "TermVector",
    "build_geo_distance_sort",
]
