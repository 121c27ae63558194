"""Compile query options into request parameters without sending them."""

from __future__ import annotations

import click
from rich.text import Text

from strapi_client.cli import Context, pass_context
from strapi_client.commands._query_options import build_query, query_options
from strapi_client.utils.output import console, create_table, info


@click.command("query")
@query_options
@click.option(
    "--raw",
    is_flag=True,
    default=False,
    help="Print the percent-encoded query string instead of a table",
)
@pass_context
def cli(
    ctx: Context,
    filters: tuple[str, ...],
    match_any: bool,
    sorts: tuple[str, ...],
    page: int | None,
    page_size: int | None,
    populates: tuple[str, ...],
    fields: tuple[str, ...],
    raw: bool,
) -> None:
    """Show the query parameters the given options compile to.

    Nothing is sent to the server.

    Examples:

    \b
      # Deep filter with a populated relation
      strapi-client query -f author.name:eq:Alice -p author

    \b
      # Encoded query string, ready to paste into a URL
      strapi-client query -f id:in:1,2,3 -s title:desc --raw
    """
    query = build_query(filters, match_any, sorts, page, page_size, populates, fields)

    if raw:
        click.echo(query.to_query_string())
        return

    params = query.build()
    if not params:
        if not ctx.quiet:
            info("Query is empty.")
        return

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Parameter", style="query.key", no_wrap=True)
    table.add_column("Value", style="query.value")
    for key, value in params:
        table.add_row(Text(key), Text(value))
    console.print(table)
