"""Create or update an index's settings and mappings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from esdsl.exceptions import ServerError
from esdsl.operations.common import GenericResult

if TYPE_CHECKING:
    from esdsl.client import Client

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Custom token filters and analyzers, keyed by name."""

    filter: dict[str, Any] = field(default_factory=dict)
    analyzer: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {"filter": self.filter, "analyzer": self.analyzer}


@dataclass
class Settings:
    number_of_shards: int
    analysis: Analysis = field(default_factory=Analysis)

    def to_json(self) -> dict[str, Any]:
        return {"number_of_shards": self.number_of_shards, "analysis": self.analysis.to_json()}


class MappingOperation:
    """Apply settings and/or mappings to an index.

    With settings only, the index is created with them and the call waits
    for yellow health. With mappings, the index is closed, updated and
    reopened. With neither, nothing is sent.
    """

    def __init__(self, client: Client, index: str) -> None:
        self.client = client
        self.index = index
        self.mappings: dict[str, Any] | None = None
        self.settings: Settings | None = None

    def with_mappings(self, mappings: dict[str, Any]) -> MappingOperation:
        self.mappings = mappings
        return self

    def with_settings(self, settings: Settings) -> MappingOperation:
        self.settings = settings
        return self

    def send(self) -> GenericResult | None:
        """Apply the changes.

        Returns:
            The acknowledgement of the last put, or None when nothing was set.
        """
        if self.mappings is None and self.settings is None:
            return None

        path = f"/{self.index}"
        if self.mappings is None:
            _, payload = self.client.request("PUT", path, {"settings": self.settings.to_json()})
            self.client.wait_for_status("yellow", "5s")
            return GenericResult.from_json(payload)

        logger.info("Closing index %s to update its mappings", self.index)
        try:
            self.client.close_index(self.index)
        except ServerError as e:
            if e.status != 404:
                raise
            logger.debug("Index %s does not exist yet; creating it", self.index)
        body: dict[str, Any] = {"mappings": self.mappings}
        if self.settings is not None:
            body["settings"] = self.settings.to_json()
        try:
            _, payload = self.client.request("PUT", path, body)
        finally:
            self.client.open_index(self.index)
        return GenericResult.from_json(payload)
