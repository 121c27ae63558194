"""Query options shared by the query and get commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from strapi_client.exceptions import ValidationError
from strapi_client.query import (
    FilterBuilder,
    FilterOperator,
    SortDirection,
    StrapiFilter,
    StrapiQuery,
)
from strapi_client.query.filters import split_field

F = TypeVar("F", bound=Callable[..., Any])

_LIST_OPERATORS = (FilterOperator.in_, FilterOperator.notIn)


def parse_filter(text: str) -> StrapiFilter:
    """Parse ``FIELD:OP:VALUE`` into a filter.

    ``FIELD`` may be dotted (``author.name``). For ``in`` and ``notIn``
    the value is a comma-separated list. The value itself may contain
    colons.

    Raises:
        click.BadParameter: If the text cannot be parsed.
    """
    parts = text.split(":", 2)
    if len(parts) != 3:
        raise click.BadParameter(f"{text!r} is not FIELD:OP:VALUE", param_hint="--filter")
    field_ref, op_text, raw_value = parts

    try:
        op = FilterOperator.parse(op_text)
    except ValueError as e:
        choices = ", ".join(o.value.lstrip("$") for o in FilterOperator)
        raise click.BadParameter(f"{e} (choose from {choices})", param_hint="--filter") from e

    value: str | tuple[str, ...]
    if op in _LIST_OPERATORS:
        value = tuple(item.strip() for item in raw_value.split(",") if item.strip())
    else:
        value = raw_value

    try:
        return StrapiFilter(path=split_field(field_ref), operator=op, value=value)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--filter") from e


def parse_sort(text: str) -> tuple[str, SortDirection]:
    """Parse ``FIELD`` or ``FIELD:asc|desc``."""
    field_name, _, direction = text.partition(":")
    if not field_name:
        raise click.BadParameter(f"{text!r} has no field name", param_hint="--sort")
    try:
        return field_name, SortDirection(direction.lower() or "asc")
    except ValueError as e:
        raise click.BadParameter(
            f"{direction!r} is not a sort direction (asc or desc)", param_hint="--sort"
        ) from e


def query_options(func: F) -> F:
    """Attach the query-building options to a command."""
    options = [
        click.option(
            "--filter",
            "-f",
            "filters",
            multiple=True,
            metavar="FIELD:OP:VALUE",
            help="Filter condition, e.g. title:eq:Hello or id:in:1,2,3 (repeatable)",
        ),
        click.option(
            "--any",
            "match_any",
            is_flag=True,
            default=False,
            help="Match any filter ($or) instead of all ($and)",
        ),
        click.option(
            "--sort",
            "-s",
            "sorts",
            multiple=True,
            metavar="FIELD[:asc|desc]",
            help="Sort field (repeatable, applied in order)",
        ),
        click.option("--page", type=int, default=None, help="Page number (requires --page-size)"),
        click.option(
            "--page-size", type=int, default=None, help="Records per page (requires --page)"
        ),
        click.option(
            "--populate",
            "-p",
            "populates",
            multiple=True,
            metavar="NAME",
            help="Relation to populate; '*' populates all (repeatable)",
        ),
        click.option(
            "--field",
            "fields",
            multiple=True,
            metavar="NAME",
            help="Only return this field (repeatable)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_query(
    filters: tuple[str, ...] = (),
    match_any: bool = False,
    sorts: tuple[str, ...] = (),
    page: int | None = None,
    page_size: int | None = None,
    populates: tuple[str, ...] = (),
    fields: tuple[str, ...] = (),
) -> StrapiQuery:
    """Turn parsed command-line options into a StrapiQuery."""
    query = StrapiQuery()

    parsed = [parse_filter(text) for text in filters]
    if parsed:

        def add_conditions(builder: FilterBuilder) -> None:
            for flt in parsed:
                builder.condition(flt)

        if match_any and len(parsed) > 1:
            query = query.filters(lambda f: f.or_(add_conditions))
        else:
            query = query.filters(add_conditions)

    for text in sorts:
        field_name, direction = parse_sort(text)
        query = query.sort(field_name, direction)

    if (page is None) != (page_size is None):
        raise click.UsageError("--page and --page-size must be given together")
    if page is not None and page_size is not None:
        query = query.page(page, page_size)

    for name in populates:
        query = query.populate_all() if name == "*" else query.populate(name)

    if fields:
        query = query.fields(*fields)
    return query
