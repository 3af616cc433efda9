"""esdsl: typed client and query DSL for a REST+JSON document search server."""

__version__ = "0.1.0"
