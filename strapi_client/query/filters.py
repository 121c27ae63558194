"""Filter conditions and the AND/OR tree built from them."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Union

from strapi_client.exceptions import ValidationError
from strapi_client.query.operators import FilterOperator

# A plain string is a single value, a tuple is a list value ($in / $notIn).
FilterValue = Union[str, tuple[str, ...]]


def split_field(reference: str) -> tuple[str, ...]:
    """Split a dotted field reference like ``author.name`` into path segments.

    Empty segments (``a..b``, ``.name``, ``author.``) are rejected, not dropped.

    Raises:
        ValidationError: If the reference is empty or has an empty segment.
    """
    segments = tuple(reference.split("."))
    if not reference or any(not segment for segment in segments):
        raise ValidationError("field", reference, "field path segments must be non-empty")
    return segments


@dataclass(frozen=True)
class StrapiFilter:
    """A single comparison: field path, operator and value.

    Use the classmethod factories rather than the constructor; they split
    dotted field references into path segments.
    """

    path: tuple[str, ...]
    operator: FilterOperator
    value: FilterValue

    def __post_init__(self) -> None:
        if not self.path or any(not segment for segment in self.path):
            raise ValidationError("path", self.path, "field path segments must be non-empty")
        if isinstance(self.value, list):
            object.__setattr__(self, "value", tuple(self.value))

    @classmethod
    def _single(cls, reference: str, op: FilterOperator, value: str) -> StrapiFilter:
        return cls(path=split_field(reference), operator=op, value=value)

    @classmethod
    def _many(cls, reference: str, op: FilterOperator, values: Iterable[str]) -> StrapiFilter:
        return cls(path=split_field(reference), operator=op, value=tuple(values))

    @classmethod
    def equals(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.eq, value)

    @classmethod
    def not_equal(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.ne, value)

    @classmethod
    def contains(cls, reference: str, value: str) -> StrapiFilter:
        """Case-insensitive substring match ($containsi)."""
        return cls._single(reference, FilterOperator.containsi, value)

    @classmethod
    def contains_case_sensitive(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.contains, value)

    @classmethod
    def not_contains(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.notcontains, value)

    @classmethod
    def not_contains_case_insensitive(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.notcontainsi, value)

    @classmethod
    def greater(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.gt, value)

    @classmethod
    def greater_than_equal(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.gte, value)

    @classmethod
    def lesser(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.lt, value)

    @classmethod
    def lesser_than_equal(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.lte, value)

    @classmethod
    def starts_with(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.startsWith, value)

    @classmethod
    def ends_with(cls, reference: str, value: str) -> StrapiFilter:
        return cls._single(reference, FilterOperator.endsWith, value)

    @classmethod
    def in_(cls, reference: str, values: Iterable[str]) -> StrapiFilter:
        return cls._many(reference, FilterOperator.in_, values)

    @classmethod
    def not_in(cls, reference: str, values: Iterable[str]) -> StrapiFilter:
        return cls._many(reference, FilterOperator.notIn, values)


@dataclass(frozen=True)
class Condition:
    """Leaf of a filter tree."""

    filter: StrapiFilter


@dataclass(frozen=True)
class And:
    """All children must match. An empty group encodes to nothing."""

    children: tuple[FilterNode, ...] = ()


@dataclass(frozen=True)
class Or:
    """Any child may match. An empty group encodes to nothing."""

    children: tuple[FilterNode, ...] = ()


FilterNode = Union[Condition, And, Or]


def wrap_block_nodes(nodes: tuple[FilterNode, ...]) -> FilterNode:
    """Collapse the nodes collected by one filters block into a single node.

    One node is kept as is; zero or several are wrapped in an ``And``.
    """
    if len(nodes) == 1:
        return nodes[0]
    return And(nodes)


@dataclass
class FilterBuilder:
    """Collects filter nodes inside a ``filters`` / ``and_`` / ``or_`` block.

    Blocks are plain callables receiving the builder::

        def published_by_alice(f: FilterBuilder) -> None:
            f.equals("status", "published")
            f.or_(lambda g: g.equals("author.name", "Alice").equals("author.name", "Bob"))

    Every method returns the builder, so short blocks can be chained
    inside a lambda.
    """

    _nodes: list[FilterNode] = field(default_factory=list)

    @property
    def nodes(self) -> tuple[FilterNode, ...]:
        return tuple(self._nodes)

    def _group(self, block: Callable[[FilterBuilder], object]) -> tuple[FilterNode, ...]:
        child = FilterBuilder()
        block(child)
        return child.nodes

    def and_(self, block: Callable[[FilterBuilder], object]) -> FilterBuilder:
        self._nodes.append(And(self._group(block)))
        return self

    def or_(self, block: Callable[[FilterBuilder], object]) -> FilterBuilder:
        self._nodes.append(Or(self._group(block)))
        return self

    def condition(self, flt: StrapiFilter) -> FilterBuilder:
        self._nodes.append(Condition(flt))
        return self

    def equals(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.equals(field_ref, value))

    def not_equal(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.not_equal(field_ref, value))

    def contains(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.contains(field_ref, value))

    def contains_case_sensitive(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.contains_case_sensitive(field_ref, value))

    def not_contains(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.not_contains(field_ref, value))

    def not_contains_case_insensitive(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.not_contains_case_insensitive(field_ref, value))

    def greater(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.greater(field_ref, value))

    def greater_than_equal(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.greater_than_equal(field_ref, value))

    def lesser(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.lesser(field_ref, value))

    def lesser_than_equal(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.lesser_than_equal(field_ref, value))

    def starts_with(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.starts_with(field_ref, value))

    def ends_with(self, field_ref: str, value: str) -> FilterBuilder:
        return self.condition(StrapiFilter.ends_with(field_ref, value))

    def in_(self, field_ref: str, values: Iterable[str]) -> FilterBuilder:
        return self.condition(StrapiFilter.in_(field_ref, values))

    def not_in(self, field_ref: str, values: Iterable[str]) -> FilterBuilder:
        return self.condition(StrapiFilter.not_in(field_ref, values))
