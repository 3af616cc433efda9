"""Configuration management for esdsl."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import tomli_w

from esdsl.exceptions import (
    ConfigParseError,
    ConfigValidationError,
    UsageError,
)
from esdsl.units import Duration

DEFAULT_URL = "http://localhost:9200"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "esdsl" / "config.toml"


@dataclass
class Config:
    """Client and command-line configuration.

    Attributes:
        url: Base URL of the server. May carry ``user:password@`` and a
            path prefix.
        timeout: Request timeout in seconds, or None to wait forever.
        verify_tls: Whether to verify the server certificate for https.
        default_index: Index searched by the CLI when none is given.
        scroll: Keep-alive of scroll cursors opened by the CLI.
        page_size: Hits per page for CLI searches and scans.
        config_path: Path where config was loaded from (None if defaults).
    """

    url: str = DEFAULT_URL
    timeout: float | None = None
    verify_tls: bool = True
    default_index: str | None = None
    scroll: str = "1m"
    page_size: int = 100
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        parts = urlsplit(self.url)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ConfigValidationError("server.url", self.url, "must be an http(s) URL with a host")

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigValidationError("server.timeout", self.timeout, "must be positive")

        try:
            Duration.parse(self.scroll)
        except UsageError as e:
            raise ConfigValidationError("search.scroll", self.scroll, str(e)) from e

        if self.page_size <= 0:
            raise ConfigValidationError("search.page_size", self.page_size, "must be positive")

        if parts.scheme == "http" and parts.password:
            warnings.append(f"Credentials for {parts.hostname} are sent over plain http")

        if not self.verify_tls and parts.scheme == "https":
            warnings.append("TLS certificate verification is disabled")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: esdsl init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [server] section
    server = data.get("server", {})
    if "url" in server:
        value = server["url"]
        if not isinstance(value, str):
            raise ConfigValidationError("server.url", value, "must be a string")
        config.url = value

    if "timeout" in server:
        value = server["timeout"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError("server.timeout", value, "must be a number of seconds")
        config.timeout = float(value)

    if "verify_tls" in server:
        value = server["verify_tls"]
        if not isinstance(value, bool):
            raise ConfigValidationError("server.verify_tls", value, "must be a boolean")
        config.verify_tls = value

    # Parse [search] section
    search = data.get("search", {})
    if "default_index" in search:
        value = search["default_index"]
        if not isinstance(value, str):
            raise ConfigValidationError("search.default_index", value, "must be a string")
        config.default_index = value

    if "scroll" in search:
        value = search["scroll"]
        if not isinstance(value, str):
            raise ConfigValidationError("search.scroll", value, "must be a duration such as '1m'")
        config.scroll = value

    if "page_size" in search:
        value = search["page_size"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError("search.page_size", value, "must be an integer")
        config.page_size = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "server": {
            "url": config.url,
            "verify_tls": config.verify_tls,
        },
        "search": {
            "scroll": config.scroll,
            "page_size": config.page_size,
        },
    }

    if config.timeout is not None:
        data["server"]["timeout"] = config.timeout

    if config.default_index is not None:
        data["search"]["default_index"] = config.default_index

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
