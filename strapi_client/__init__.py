"""strapi-client: typed query builder and REST client for Strapi."""

from strapi_client._version import __version__
from strapi_client.auth import CredentialsFileAuth, StaticTokenAuth
from strapi_client.client import SessionTransport, StrapiClient
from strapi_client.config import Config, load_config
from strapi_client.exceptions import (
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    ServerError,
    StrapiClientError,
    StrapiError,
    TransportError,
)
from strapi_client.models import (
    HTTPMethod,
    PaginationMeta,
    ResponseMeta,
    StrapiEndpoint,
    StrapiRequest,
    StrapiResponse,
)
from strapi_client.observer import LoggingObserver
from strapi_client.query import (
    FilterBuilder,
    FilterOperator,
    PopulateBuilder,
    SortDirection,
    StrapiFilter,
    StrapiQuery,
)
from strapi_client.repository import StrapiRepository

__all__ = [
    "Config",
    "CredentialsFileAuth",
    "DecodingError",
    "FilterBuilder",
    "FilterOperator",
    "HTTPMethod",
    "InvalidResponseError",
    "InvalidURLError",
    "LoggingObserver",
    "PaginationMeta",
    "PopulateBuilder",
    "ResponseMeta",
    "ServerError",
    "SessionTransport",
    "SortDirection",
    "StaticTokenAuth",
    "StrapiClient",
    "StrapiClientError",
    "StrapiEndpoint",
    "StrapiError",
    "StrapiFilter",
    "StrapiQuery",
    "StrapiRepository",
    "StrapiRequest",
    "StrapiResponse",
    "TransportError",
    "__version__",
    "load_config",
]
