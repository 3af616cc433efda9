"""Command-line interface for esdsl."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.logging import RichHandler

from esdsl import __version__
from esdsl.client import Client
from esdsl.config import Config, load_config
from esdsl.exceptions import EsError
from esdsl.utils.output import (
    error,
    error_console,
    set_color,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.client: Client | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    def resolve_indexes(self, indexes: tuple[str, ...] | list[str]) -> list[str]:
        """Return the given indexes, or the configured default index when there are none."""
        if indexes:
            return list(indexes)
        if self.config is not None and self.config.default_index:
            return [self.config.default_index]
        return []

    def get_client(self) -> Client:
        """Return the client, creating it from the configuration on first use."""
        if self.client is None:
            self.client = Client.from_config(self.config or Config())
        return self.client


pass_context = click.make_pass_decorator(Context, ensure=True)


def _configure_logging(debug: bool) -> None:
    if not debug:
        return
    handler = RichHandler(console=error_console, show_path=False)
    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[handler], force=True)
    # urllib3 logs every connection at debug
    logging.getLogger("urllib3").setLevel(logging.INFO)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/esdsl/config.toml)",
)
@click.option(
    "--url",
    "-u",
    default=None,
    help="Base URL of the server (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output and request logging (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="esdsl")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    url: str | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """esdsl: Query a search server from the command line.

    Configuration is loaded from ~/.config/esdsl/config.toml by default.
    Use --config to specify an alternative configuration file, or --url
    to point at a different server.

    Examples:

        # Show the server version
        esdsl version

        # Search an index with a query string
        esdsl search --index books "author:tolkien"
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    _configure_logging(debug)

    # Color is disabled by --no-color or the NO_COLOR env
    if no_color or os.environ.get("NO_COLOR") is not None:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        if url is not None:
            loaded_config.url = url
            warnings += loaded_config.validate()
        app_ctx.config = loaded_config

        if not quiet:
            for warn in warnings:
                warning(warn)

    except EsError as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from esdsl.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
