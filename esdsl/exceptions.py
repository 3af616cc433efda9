"""Exception hierarchy for esdsl."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class EsError(Exception):
    """Base exception for all esdsl errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all esdsl errors with a single
    except clause. ``kind`` is a stable discriminant for callers
    that dispatch on the error category rather than the class.
    """

    kind = "error"


# Transport Errors
class TransportError(EsError):
    """The transport failed before a response was received."""

    kind = "transport"

    def __init__(self, method: str, path: str, detail: str) -> None:
        self.method = method
        self.path = path
        self.detail = detail
        super().__init__(f"{method} {path} failed: {detail}")


# Server Errors
class ServerError(EsError):
    """Response status outside the success set for the operation."""

    kind = "server"

    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self.body = body
        super().__init__(f"Unexpected status {status}: {_short(body)}")


# Decode Errors
class DecodeError(EsError):
    """Response body could not be parsed into the expected shape."""

    kind = "decode"

    def __init__(self, field: str, expected: str, detail: str | None = None) -> None:
        self.field = field
        self.expected = expected
        self.detail = detail
        message = f"Cannot decode '{field}': expected {expected}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


# Semantic Errors
class SemanticError(EsError):
    """Decoded result cannot be projected to the requested view."""

    kind = "semantic"


class AggregationNotFoundError(SemanticError):
    """No aggregation with the requested name in the result."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Aggregation not found: {name}")


class AggregationKindError(SemanticError):
    """Aggregation result is of a different kind than requested."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"Aggregation '{name}' is '{actual}', not '{expected}'")


# Usage Errors
class UsageError(EsError):
    """Caller supplied arguments that are locally detectable as impossible."""

    kind = "usage"


class InvalidUrlError(UsageError):
    """Base URL cannot be used to reach a server."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid base URL '{url}': {reason}")


# Configuration Errors
class ConfigError(EsError):
    """Configuration-related errors."""

    kind = "config"


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


def _short(body: Any, limit: int = 200) -> str:
    text = str(body)
    if len(text) > limit:
        return text[:limit] + "..."
    return text
