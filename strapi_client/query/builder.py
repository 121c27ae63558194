"""Immutable query builder producing the final query parameter list.

Example::

    query = (
        StrapiQuery()
        .filters(lambda f: f.equals("status", "published"))
        .sort("createdAt", SortDirection.desc)
        .page(1, 10)
        .populate("author", lambda p: p.fields("name"))
    )
    query.build()
    # [('filters[status][$eq]', 'published'), ('sort[0]', 'createdAt:desc'),
    #  ('pagination[page]', '1'), ('pagination[pageSize]', '10'),
    #  ('populate[author][fields][0]', 'name')]

Every method returns a new StrapiQuery; a base query can be shared and
extended from several places without copying.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from urllib.parse import urlencode

from strapi_client.query.filter_encoder import QueryParams, encode_filters, encode_flat_filters
from strapi_client.query.filters import FilterBuilder, FilterNode, StrapiFilter, wrap_block_nodes
from strapi_client.query.operators import SortDirection
from strapi_client.query.populate import (
    PopulateAll,
    PopulateBuilder,
    PopulateName,
    PopulateNode,
    build_relation,
)
from strapi_client.query.populate_encoder import encode_populate


@dataclass(frozen=True)
class Pagination:
    """Page number and size, sent verbatim (no range validation)."""

    page: int | None = None
    page_size: int | None = None


@dataclass(frozen=True)
class StrapiQuery:
    """Filters, sorting, pagination, populate and field selection for one request."""

    legacy_filters: tuple[StrapiFilter, ...] = ()
    filter_tree: tuple[FilterNode, ...] = ()
    sorts: tuple[tuple[str, SortDirection], ...] = ()
    pagination: Pagination = Pagination()
    populate_nodes: tuple[PopulateNode, ...] = ()
    selected_fields: tuple[str, ...] = ()

    def filter(self, flt: StrapiFilter) -> StrapiQuery:
        """Append a flat filter (list values repeat the same key)."""
        return replace(self, legacy_filters=self.legacy_filters + (flt,))

    def filters(self, block: Callable[[FilterBuilder], object]) -> StrapiQuery:
        """Append a filter tree built by ``block``.

        Several top-level nodes created in one block are wrapped in a single
        ``$and`` here, so each ``filters`` call contributes exactly one node.
        """
        builder = FilterBuilder()
        block(builder)
        return replace(self, filter_tree=self.filter_tree + (wrap_block_nodes(builder.nodes),))

    def sort(self, field: str, direction: SortDirection = SortDirection.asc) -> StrapiQuery:
        return replace(self, sorts=self.sorts + ((field, SortDirection(direction)),))

    def page(self, page: int, size: int) -> StrapiQuery:
        return replace(self, pagination=Pagination(page=page, page_size=size))

    def populate(
        self,
        name: str,
        block: Callable[[PopulateBuilder], object] | None = None,
    ) -> StrapiQuery:
        """Populate relation ``name``.

        Without ``block`` this is the flat form (``populate[i]=name``).
        With a block, even an empty one, it becomes a relation directive
        (``populate[name]=*`` or ``populate[name][fields][0]=...``).
        """
        node: PopulateNode
        if block is None:
            node = PopulateName(name)
        else:
            node = build_relation(name, block)
        return replace(self, populate_nodes=self.populate_nodes + (node,))

    def populate_all(self) -> StrapiQuery:
        """Populate every relation one level deep (``populate=*``)."""
        return replace(self, populate_nodes=self.populate_nodes + (PopulateAll(),))

    def fields(self, *names: str) -> StrapiQuery:
        return replace(self, selected_fields=self.selected_fields + names)

    def build(self) -> QueryParams:
        """Flatten the query into ordered ``(key, value)`` pairs."""
        params: QueryParams = []
        params.extend(encode_flat_filters(self.legacy_filters))
        if self.filter_tree:
            params.extend(encode_filters(self.filter_tree))
        params.extend(
            (f"sort[{index}]", f"{field}:{direction.value}")
            for index, (field, direction) in enumerate(self.sorts)
        )
        if self.pagination.page is not None:
            params.append(("pagination[page]", str(self.pagination.page)))
        if self.pagination.page_size is not None:
            params.append(("pagination[pageSize]", str(self.pagination.page_size)))
        params.extend(encode_populate(self.populate_nodes))
        params.extend((f"fields[{index}]", name) for index, name in enumerate(self.selected_fields))
        return params

    def to_query_string(self) -> str:
        """Return the percent-encoded query string (without the leading ``?``)."""
        return urlencode(self.build())
