"""Compile filters into bracket-notation query parameters.

Two encodings exist and both are relied upon:

* The flat form (``StrapiQuery.filter``) repeats the same key once per
  list element: ``filters[category][$in]=ios&filters[category][$in]=swift``.
* The tree form (``StrapiQuery.filters`` and populate filters) indexes list
  elements: ``filters[$or][0][tags][$in][0]=swift``.

Percent-encoding is left to the transport layer; values are emitted verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from strapi_client.query.filters import And, Condition, FilterNode, Or, StrapiFilter

QueryParams = list[tuple[str, str]]

FILTERS_PREFIX = "filters"


def condition_key(prefix: str, flt: StrapiFilter) -> str:
    """Build ``prefix[p1]...[pn][$op]`` for a single condition."""
    segments = "".join(f"[{segment}]" for segment in flt.path)
    return f"{prefix}{segments}[{flt.operator.value}]"


def encode_flat_filters(filters: Iterable[StrapiFilter]) -> QueryParams:
    """Encode the legacy flat filter list.

    List values fan out into one parameter per element, all sharing the
    identical key. An empty list emits nothing.
    """
    params: QueryParams = []
    for flt in filters:
        key = condition_key(FILTERS_PREFIX, flt)
        if isinstance(flt.value, str):
            params.append((key, flt.value))
        else:
            params.extend((key, value) for value in flt.value)
    return params


def encode_filters(nodes: Sequence[FilterNode], prefix: str = FILTERS_PREFIX) -> QueryParams:
    """Encode a filter tree.

    A single top-level node is encoded as is. Zero or several nodes are
    wrapped in an implicit ``$and`` so independent constraints combine
    conjunctively.
    """
    params: QueryParams = []
    if len(nodes) == 1:
        _encode_node(nodes[0], prefix, params)
    else:
        _encode_node(And(tuple(nodes)), prefix, params)
    return params


def _encode_node(node: FilterNode, prefix: str, params: QueryParams) -> None:
    if isinstance(node, Condition):
        key = condition_key(prefix, node.filter)
        value = node.filter.value
        if isinstance(value, str):
            params.append((key, value))
        else:
            for index, item in enumerate(value):
                params.append((f"{key}[{index}]", item))
    elif isinstance(node, And):
        for index, child in enumerate(node.children):
            _encode_node(child, f"{prefix}[$and][{index}]", params)
    elif isinstance(node, Or):
        for index, child in enumerate(node.children):
            _encode_node(child, f"{prefix}[$or][{index}]", params)
    else:
        raise TypeError(f"Unsupported filter node: {type(node).__name__}")
