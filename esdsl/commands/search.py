"""Search indexes with a query string."""

from __future__ import annotations

import click

from esdsl.cli import Context, pass_context
from esdsl.exceptions import EsError
from esdsl.search.response import SearchResult
from esdsl.search.sort import Sort
from esdsl.utils.output import (
    console,
    create_table,
    error,
    hit_to_json,
    info,
    print_json_line,
    summarize_source,
)


def _print_table(result: SearchResult) -> None:
    table = create_table(title=f"{result.hits.total} hits in {result.took} ms")
    table.add_column("Index", style="hit.index")
    table.add_column("ID", style="hit.id")
    table.add_column("Score", style="hit.score", justify="right")
    table.add_column("Source", overflow="fold")
    for hit in result.hits.hits:
        score = f"{hit.score:.3f}" if hit.score is not None else ""
        table.add_row(hit.index, hit.id, score, summarize_source(hit.source))
    console.print(table)


@click.command("search")
@click.argument("query", required=False)
@click.option("--index", "-i", multiple=True, help="Index to search (repeatable; default: all or config)")
@click.option("--type", "-t", "doc_type", multiple=True, help="Document type to search (repeatable)")
@click.option("--size", "-n", type=int, default=None, help="Number of hits to return")
@click.option("--from", "from_", type=int, default=None, help="Offset of the first hit")
@click.option("--sort", "-s", default=None, help="Sort as field:order pairs, e.g. 'date:desc,_score'")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print hits as JSON lines")
@pass_context
def cli(
    ctx: Context,
    query: str | None,
    index: tuple[str, ...],
    doc_type: tuple[str, ...],
    size: int | None,
    from_: int | None,
    sort: str | None,
    as_json: bool,
) -> None:
    """Search with a query string; without QUERY every document matches.

    Examples:

    \b
      esdsl search --index books "author:tolkien"
      esdsl search -i books -s year:desc -n 5 --json
    """
    try:
        operation = (
            ctx.get_client()
            .search_uri()
            .with_indexes(ctx.resolve_indexes(index))
            .with_types(list(doc_type))
        )
        if query:
            operation.with_query(query)
        if size is None and ctx.config is not None:
            size = ctx.config.page_size
        if size is not None:
            operation.with_size(size)
        if from_ is not None:
            operation.with_from(from_)
        if sort:
            operation.with_sort(Sort.parse(sort))
        result = operation.send()
    except EsError as e:
        error(str(e))
        raise SystemExit(1)

    if as_json:
        for hit in result.hits.hits:
            print_json_line(hit_to_json(hit))
        return

    if not result.hits.hits:
        info("No hits.")
        return
    _print_table(result)
