"""Compile populate directives into bracket-notation query parameters."""

from __future__ import annotations

from collections.abc import Sequence

from strapi_client.query.filter_encoder import FILTERS_PREFIX, QueryParams, encode_filters
from strapi_client.query.populate import (
    PopulateAll,
    PopulateField,
    PopulateFilters,
    PopulateName,
    PopulateNode,
    PopulateRelation,
    PopulateSort,
)

POPULATE_PREFIX = "populate"
WILDCARD = "*"


def encode_populate(nodes: Sequence[PopulateNode]) -> QueryParams:
    """Encode a list of top-level populate directives.

    A top-level ``PopulateAll`` short-circuits everything else into
    ``populate=*``. Flat names keep their indexed ``populate[i]=name`` form
    unless relation directives are present too, in which case each becomes
    ``populate[name]=*`` so the parameter keeps a single object shape.
    """
    if any(isinstance(node, PopulateAll) for node in nodes):
        return [(POPULATE_PREFIX, WILDCARD)]

    params: QueryParams = []
    only_names = all(isinstance(node, PopulateName) for node in nodes)
    name_index = 0
    for node in nodes:
        if isinstance(node, PopulateName):
            if only_names:
                params.append((f"{POPULATE_PREFIX}[{name_index}]", node.name))
                name_index += 1
            else:
                params.append((f"{POPULATE_PREFIX}[{node.name}]", WILDCARD))
            continue
        _encode_node(node, POPULATE_PREFIX, params)
    return params


def _next_index(params: QueryParams, key_prefix: str) -> int:
    """Count already-emitted keys under ``key_prefix``.

    The count is the positional index of the next entry.
    """
    return sum(1 for key, _ in params if key.startswith(key_prefix))


def _encode_node(node: PopulateNode, prefix: str, params: QueryParams) -> None:
    if isinstance(node, PopulateAll):
        params.append((prefix, WILDCARD))
    elif isinstance(node, PopulateField):
        index = _next_index(params, f"{prefix}[fields]")
        params.append((f"{prefix}[fields][{index}]", node.name))
    elif isinstance(node, PopulateSort):
        index = _next_index(params, f"{prefix}[sort]")
        params.append((f"{prefix}[sort][{index}]", f"{node.field}:{node.direction.value}"))
    elif isinstance(node, PopulateFilters):
        rooted = f"{prefix}[{FILTERS_PREFIX}]"
        for key, value in encode_filters(node.nodes):
            # Re-root only the leading "filters" segment.
            params.append((rooted + key[len(FILTERS_PREFIX) :], value))
    elif isinstance(node, PopulateRelation):
        base = f"{prefix}[{node.name}]"
        if not node.children:
            params.append((base, WILDCARD))
            return
        for child in node.children:
            if isinstance(child, PopulateRelation):
                _encode_node(child, f"{base}[{POPULATE_PREFIX}]", params)
            else:
                _encode_node(child, base, params)
    elif isinstance(node, PopulateName):
        params.append((f"{prefix}[{node.name}]", WILDCARD))
    else:
        raise TypeError(f"Unsupported populate node: {type(node).__name__}")
