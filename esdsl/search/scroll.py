"""Scroll cursor over result sets larger than one page.

A :class:`ScanResult` holds a server-side scroll context from the moment
it is opened until it is closed. There are two ways to consume it:

* Explicitly, calling :meth:`ScanResult.scroll` until the page comes back
  empty and then :meth:`ScanResult.close`. The caller must close the
  cursor; using it as a context manager does that on every exit path.
* Through :meth:`ScanResult.iter`, a :class:`HitIterator` that owns the
  cursor and closes it once iteration ends or fails, and also when the
  iterator is closed or collected before that. Close failures at that
  point are logged rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from esdsl.aggregations.results import AggregationsResult
from esdsl.exceptions import EsError, UsageError
from esdsl.operations.common import ShardCountResult, format_query_string
from esdsl.search.response import Hit, SearchHitsResult, SearchResult, SourceType
from esdsl.units import Duration
from esdsl.wire import require

if TYPE_CHECKING:
    from esdsl.client import Client

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CursorState(str, Enum):
    OPEN = "open"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class ScanResult(Generic[T]):
    """An open scroll cursor and its most recent page of hits.

    Args:
        client: Client the cursor was opened with; used when ``scroll`` and
            ``close`` are called without one.
        scroll_id: Server handle of the scroll context.
        duration: Keep-alive sent with every advance.
        first: The response of the opening search.
        source_type: Optional callable building documents from ``_source``.
    """

    def __init__(
        self,
        client: Client,
        scroll_id: str,
        duration: Duration,
        first: SearchResult[T],
        source_type: SourceType | None = None,
    ) -> None:
        self.client = client
        self.scroll_id = scroll_id
        self.duration = duration
        self.took = first.took
        self.timed_out = first.timed_out
        self.shards: ShardCountResult = first.shards
        self.hits: SearchHitsResult[T] = first.hits
        self.first = first
        self.source_type = source_type
        self.state = CursorState.OPEN
        self.advances = 0

    @classmethod
    def open(
        cls,
        client: Client,
        payload: Any,
        duration: Duration,
        source_type: SourceType | None = None,
        aggs: Any = None,
    ) -> ScanResult[Any]:
        """Wrap the response of a search sent with a ``scroll`` parameter.

        The scroll context is released again when the first page cannot
        be decoded.

        Raises:
            DecodeError: If the response carries no ``_scroll_id`` or its
                hits cannot be decoded.
        """
        scroll_id = require(payload, "_scroll_id", str)
        try:
            first = SearchResult.from_json(payload, aggs, source_type)
        except EsError:
            query = format_query_string([("scroll_id", scroll_id)])
            try:
                client.request("DELETE", f"/_search/scroll{query}", ok=(200, 404))
            except EsError as e:
                logger.warning("Failed to close scroll cursor %s: %s", scroll_id, e)
            raise
        logger.info("Opened scroll cursor (%d hits in total)", first.hits.total)
        return cls(client, scroll_id, duration, first, source_type)

    @property
    def total(self) -> int:
        return self.hits.total

    @property
    def aggs(self) -> AggregationsResult:
        """Aggregations of the opening search."""
        return self.first.aggs

    def scroll(self, client: Client | None = None, duration: Duration | None = None) -> SearchHitsResult[T]:
        """Fetch the next page, replacing the current one.

        An empty page marks the cursor exhausted; scrolling an exhausted
        cursor returns the empty page without contacting the server.

        Raises:
            UsageError: If the cursor is closed.
        """
        if self.state is CursorState.CLOSED:
            raise UsageError("Scroll cursor is closed")
        if self.state is CursorState.EXHAUSTED:
            return self.hits
        client = client or self.client
        if duration is not None:
            self.duration = duration

        body = {"scroll": str(self.duration), "scroll_id": self.scroll_id}
        _, payload = client.request("POST", "/_search/scroll", body, ok=(200,))
        self.advances += 1
        # Every response may carry a fresh id.
        self.scroll_id = require(payload, "_scroll_id", str)
        page = SearchResult.from_json(payload, None, self.source_type)
        self.took = page.took
        self.timed_out = page.timed_out
        self.shards = page.shards
        self.hits = page.hits
        if not page.hits.hits:
            self.state = CursorState.EXHAUSTED
            logger.debug("Scroll cursor exhausted after %d advances", self.advances)
        return self.hits

    def close(self, client: Client | None = None) -> None:
        """Release the server-side scroll context.

        Closing twice is a no-op. A 404 (context already expired) counts
        as success.
        """
        if self.state is CursorState.CLOSED:
            return
        self.state = CursorState.CLOSED
        client = client or self.client
        query = format_query_string([("scroll_id", self.scroll_id)])
        client.request("DELETE", f"/_search/scroll{query}", ok=(200, 404))
        logger.info("Closed scroll cursor after %d advances", self.advances)

    def _close_quietly(self, client: Client | None = None) -> None:
        try:
            self.close(client)
        except EsError as e:
            logger.warning("Failed to close scroll cursor %s: %s", self.scroll_id, e)

    def iter(self, client: Client | None = None) -> HitIterator[T]:
        """Iterate every remaining hit, fetching pages on demand.

        The iterator owns the cursor: it is closed when the hits run out,
        when the iterator is closed or collected (started or not), and when
        an advance fails.
        """
        return HitIterator(self, client)

    def __iter__(self) -> Iterator[Hit[T]]:
        return self.iter()

    def __enter__(self) -> ScanResult[T]:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None:
            self.close()
        else:
            self._close_quietly()


class HitIterator(Generic[T]):
    """Hits of a scroll cursor, page after page.

    Args:
        cursor: The cursor to drain and close.
        client: Client used for advances and the final close.
    """

    def __init__(self, cursor: ScanResult[T], client: Client | None = None) -> None:
        self.cursor = cursor
        self.client = client
        self._page = iter(cursor.hits.hits)
        self._done = False

    def __iter__(self) -> HitIterator[T]:
        return self

    def __next__(self) -> Hit[T]:
        while not self._done:
            hit = next(self._page, None)
            if hit is not None:
                return hit
            if self.cursor.state is not CursorState.OPEN:
                self.close()
                break
            try:
                self.cursor.scroll(self.client)
            except BaseException:
                self.close()
                raise
            self._page = iter(self.cursor.hits.hits)
        raise StopIteration

    def close(self) -> None:
        """Stop iterating and release the cursor; close failures are logged."""
        if self._done:
            return
        self._done = True
        self.cursor._close_quietly(self.client)

    def __del__(self) -> None:
        self.close()
