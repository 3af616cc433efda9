"""Show the version of the connected server."""

from __future__ import annotations

import click

from esdsl.cli import Context, pass_context
from esdsl.exceptions import EsError, TransportError
from esdsl.utils.output import console, error, verbose


@click.command("version")
@pass_context
def cli(ctx: Context) -> None:
    """Print the version number reported by the server."""
    try:
        result = ctx.get_client().version_info()
    except TransportError as e:
        error(str(e), hint="Check the server URL with --url or in the config file")
        raise SystemExit(1)
    except EsError as e:
        error(str(e))
        raise SystemExit(1)

    verbose(f"Cluster {result.cluster_name}, node {result.name}")
    console.print(result.version.number, highlight=False)
