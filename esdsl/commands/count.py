"""Count documents matching a query string."""

from __future__ import annotations

import click

from esdsl.cli import Context, pass_context
from esdsl.exceptions import EsError
from esdsl.utils.output import console, error


@click.command("count")
@click.argument("query", required=False)
@click.option("--index", "-i", multiple=True, help="Index to count in (repeatable)")
@click.option("--type", "-t", "doc_type", multiple=True, help="Document type to count (repeatable)")
@pass_context
def cli(ctx: Context, query: str | None, index: tuple[str, ...], doc_type: tuple[str, ...]) -> None:
    """Print how many documents match QUERY (all documents without one)."""
    try:
        operation = (
            ctx.get_client()
            .count_uri()
            .with_indexes(ctx.resolve_indexes(index))
            .with_types(list(doc_type))
        )
        if query:
            operation.with_query(query)
        result = operation.send()
    except EsError as e:
        error(str(e))
        raise SystemExit(1)

    console.print(result.count, highlight=False)
