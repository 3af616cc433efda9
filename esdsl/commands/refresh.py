"""Refresh indexes so recent writes become searchable."""

from __future__ import annotations

import click

from esdsl.cli import Context, pass_context
from esdsl.exceptions import EsError
from esdsl.utils.output import error, success, warning


@click.command("refresh")
@click.argument("indexes", nargs=-1)
@pass_context
def cli(ctx: Context, indexes: tuple[str, ...]) -> None:
    """Refresh INDEXES, or every index when none is given."""
    try:
        result = ctx.get_client().refresh().with_indexes(list(indexes)).send()
    except EsError as e:
        error(str(e))
        raise SystemExit(1)

    shards = result.shards
    if shards.failed:
        warning(f"{shards.failed} of {shards.total} shards failed to refresh")
    if not ctx.quiet:
        success(f"Refreshed {shards.successful} of {shards.total} shards")
