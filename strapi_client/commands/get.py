"""Fetch records from an endpoint and print them."""

from __future__ import annotations

import click

from strapi_client.cli import Context, pass_context
from strapi_client.commands._query_options import build_query, query_options
from strapi_client.exceptions import ServerError, StrapiError
from strapi_client.models import HTTPMethod, StrapiRequest, StrapiResponse
from strapi_client.utils.output import error, info, print_json, verbose

EXIT_REQUEST_ERROR = 1
EXIT_AUTH_ERROR = 2


def _summary(response: StrapiResponse) -> str:
    data = response.data
    count = len(data) if isinstance(data, list) else (0 if data is None else 1)
    line = f"{count} record{'s' if count != 1 else ''}"
    pagination = response.meta.pagination if response.meta else None
    if pagination is not None:
        line += (
            f" (page {pagination.page}/{pagination.page_count},"
            f" {pagination.page_size} per page, {pagination.total} total)"
        )
    return line


@click.command("get")
@click.argument("endpoint")
@query_options
@click.option(
    "--summary",
    is_flag=True,
    default=False,
    help="Only print the record count and pagination",
)
@pass_context
def cli(
    ctx: Context,
    endpoint: str,
    filters: tuple[str, ...],
    match_any: bool,
    sorts: tuple[str, ...],
    page: int | None,
    page_size: int | None,
    populates: tuple[str, ...],
    fields: tuple[str, ...],
    summary: bool,
) -> None:
    """GET ENDPOINT (e.g. /articles or /articles/1) and print the records.

    Examples:

    \b
      # Published articles with their author, newest first
      strapi-client get /articles -f status:eq:published -s publishedAt:desc -p author

    \b
      # Second page of 25 records
      strapi-client get /articles --page 2 --page-size 25

    \b
      # Count only
      strapi-client get /articles --summary
    """
    query = build_query(filters, match_any, sorts, page, page_size, populates, fields)
    request = StrapiRequest(endpoint, HTTPMethod.GET, query=query)
    query_string = query.to_query_string()
    verbose(f"GET {endpoint}" + (f"?{query_string}" if query_string else ""))

    try:
        response = ctx.client().execute(request)
    except ServerError as e:
        hint = None
        if e.status in (401, 403):
            hint = "Pass --token, set [auth] token in the config, or run: strapi-client auth"
        error(str(e), hint=hint)
        raise SystemExit(EXIT_AUTH_ERROR if hint else EXIT_REQUEST_ERROR)
    except StrapiError as e:
        error(str(e))
        raise SystemExit(EXIT_REQUEST_ERROR)

    if summary:
        info(_summary(response))
        return

    print_json(response.data)
    if not ctx.quiet:
        info(_summary(response))
