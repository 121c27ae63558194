"""Populate directives: which relations to eager-load and how."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from strapi_client.query.filters import FilterBuilder, FilterNode, wrap_block_nodes
from strapi_client.query.operators import SortDirection


@dataclass(frozen=True)
class PopulateAll:
    """Wildcard ``*``. At the top level it overrides every other directive."""


@dataclass(frozen=True)
class PopulateField:
    """Restrict a populated relation to one field."""

    name: str


@dataclass(frozen=True)
class PopulateSort:
    """Sort the records of a populated relation."""

    field: str
    direction: SortDirection = SortDirection.asc


@dataclass(frozen=True)
class PopulateFilters:
    """Filter the records of a populated relation."""

    nodes: tuple[FilterNode, ...]


@dataclass(frozen=True)
class PopulateRelation:
    """Populate relation ``name``.

    Without children the relation is populated wholesale
    (``populate[name]=*``); children scope it.
    """

    name: str
    children: tuple[PopulateNode, ...] = ()


@dataclass(frozen=True)
class PopulateName:
    """A relation named through the flat ``populate(name)`` call.

    Encoded as ``populate[i]=name`` unless the query also holds relation
    directives.
    """

    name: str


PopulateNode = Union[
    PopulateAll,
    PopulateField,
    PopulateSort,
    PopulateFilters,
    PopulateRelation,
    PopulateName,
]


@dataclass
class PopulateBuilder:
    """Collects the directives of one ``populate(name, block)`` call.

    Example::

        def comments(p: PopulateBuilder) -> None:
            p.fields("content", "createdAt")
            p.sort("createdAt", SortDirection.desc)
            p.populate("author", lambda a: a.fields("name"))
    """

    _nodes: list[PopulateNode] = field(default_factory=list)

    @property
    def nodes(self) -> tuple[PopulateNode, ...]:
        return tuple(self._nodes)

    def all(self) -> PopulateBuilder:
        self._nodes.append(PopulateAll())
        return self

    def field(self, name: str) -> PopulateBuilder:
        self._nodes.append(PopulateField(name))
        return self

    def fields(self, *names: str) -> PopulateBuilder:
        self._nodes.extend(PopulateField(name) for name in names)
        return self

    def sort(
        self, field_name: str, direction: SortDirection = SortDirection.asc
    ) -> PopulateBuilder:
        self._nodes.append(PopulateSort(field_name, SortDirection(direction)))
        return self

    def filters(self, block: Callable[[FilterBuilder], object]) -> PopulateBuilder:
        builder = FilterBuilder()
        block(builder)
        self._nodes.append(PopulateFilters((wrap_block_nodes(builder.nodes),)))
        return self

    def populate(
        self,
        name: str,
        block: Callable[[PopulateBuilder], object] | None = None,
    ) -> PopulateBuilder:
        self._nodes.append(build_relation(name, block))
        return self


def build_relation(
    name: str,
    block: Callable[[PopulateBuilder], object] | None = None,
) -> PopulateRelation:
    """Run ``block`` on a fresh builder and wrap its directives in a relation."""
    child = PopulateBuilder()
    if block is not None:
        block(child)
    return PopulateRelation(name, child.nodes)
