"""Query construction: filters, populate directives and their encoders."""

from strapi_client.query.builder import Pagination, StrapiQuery
from strapi_client.query.filter_encoder import encode_filters, encode_flat_filters
from strapi_client.query.filters import (
    And,
    Condition,
    FilterBuilder,
    FilterNode,
    Or,
    StrapiFilter,
)
from strapi_client.query.operators import FilterOperator, SortDirection
from strapi_client.query.populate import (
    PopulateAll,
    PopulateBuilder,
    PopulateField,
    PopulateFilters,
    PopulateName,
    PopulateNode,
    PopulateRelation,
    PopulateSort,
)
from strapi_client.query.populate_encoder import encode_populate

__all__ = [
    "And",
    "Condition",
    "FilterBuilder",
    "FilterNode",
    "FilterOperator",
    "Or",
    "Pagination",
    "PopulateAll",
    "PopulateBuilder",
    "PopulateField",
    "PopulateFilters",
    "PopulateName",
    "PopulateNode",
    "PopulateRelation",
    "PopulateSort",
    "SortDirection",
    "StrapiFilter",
    "StrapiQuery",
    "encode_filters",
    "encode_flat_filters",
    "encode_populate",
]
