"""Stream every hit of a query as JSON lines."""

from __future__ import annotations

import click

from esdsl.cli import Context, pass_context
from esdsl.exceptions import EsError
from esdsl.query.common import build_match_all
from esdsl.query.full_text import build_query_string
from esdsl.utils.output import debug, error, hit_to_json, print_json_line, verbose


@click.command("scan")
@click.argument("query", required=False)
@click.option("--index", "-i", multiple=True, help="Index to scan (repeatable)")
@click.option("--type", "-t", "doc_type", multiple=True, help="Document type to scan (repeatable)")
@click.option("--scroll", default=None, help="Cursor keep-alive between pages, e.g. '1m'")
@click.option("--size", "-n", type=int, default=None, help="Hits fetched per page")
@pass_context
def cli(
    ctx: Context,
    query: str | None,
    index: tuple[str, ...],
    doc_type: tuple[str, ...],
    scroll: str | None,
    size: int | None,
) -> None:
    """Print every document matching QUERY, one JSON object per line.

    The scroll cursor is released on the server when the output ends,
    also when it is interrupted.

    Examples:

    \b
      esdsl scan --index books > books.jsonl
      esdsl scan -i logs "level:error" --scroll 5m -n 500
    """
    config = ctx.config
    scroll = scroll or (config.scroll if config is not None else "1m")
    size = size or (config.page_size if config is not None else 100)
    built = build_query_string(query).build() if query else build_match_all().build()

    count = 0
    try:
        cursor = (
            ctx.get_client()
            .search_query()
            .with_indexes(ctx.resolve_indexes(index))
            .with_types(list(doc_type))
            .with_query(built)
            .with_size(size)
            .scroll(scroll)
        )
        debug(f"Opened cursor over {cursor.total} hits, keep-alive {scroll}")
        for hit in cursor.iter():
            print_json_line(hit_to_json(hit))
            count += 1
    except EsError as e:
        error(str(e))
        raise SystemExit(1)

    verbose(f"Scanned {count} documents")
