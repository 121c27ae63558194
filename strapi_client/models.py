"""Request descriptors and response envelopes."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from strapi_client.exceptions import DecodingError
from strapi_client.query.builder import StrapiQuery

T = TypeVar("T")

# A dataclass type (unknown keys are dropped) or any callable taking the raw dict.
RecordType = Union[type, Callable[[Any], Any]]


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class StrapiEndpoint:
    """Path below the API prefix plus the HTTP method, e.g. ``/articles``."""

    path: str
    method: HTTPMethod = HTTPMethod.GET

    def child(self, item_id: str | int, method: HTTPMethod | None = None) -> StrapiEndpoint:
        """Endpoint for a single item, e.g. ``/articles/42``."""
        return StrapiEndpoint(f"{self.path.rstrip('/')}/{item_id}", method or self.method)


_NO_BODY = object()


@dataclass(frozen=True)
class StrapiRequest:
    """Everything StrapiClient.execute() needs for one call.

    Attributes:
        endpoint: Path below the API prefix.
        method: HTTP method.
        query: Optional query; flattened at send time.
        body: JSON-serialisable payload, sent wrapped as ``{"data": body}``.
        raw_body: Pre-encoded JSON bytes sent verbatim (takes precedence over body).
        headers: Extra headers, applied last so they override defaults.
    """

    endpoint: str
    method: HTTPMethod = HTTPMethod.GET
    query: StrapiQuery | None = None
    body: Any = _NO_BODY
    raw_body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return self.raw_body is not None or self.body is not _NO_BODY

    def json_payload(self) -> Any:
        """Body wrapped in the ``data`` envelope the server expects."""
        return {"data": self.body}


@dataclass(frozen=True)
class PaginationMeta:
    page: int
    page_size: int
    page_count: int
    total: int

    @classmethod
    def from_dict(cls, raw: Any) -> PaginationMeta:
        if not isinstance(raw, dict):
            raise DecodingError(f"meta.pagination must be an object, got {type(raw).__name__}")
        try:
            return cls(
                page=int(raw["page"]),
                page_size=int(raw["pageSize"]),
                page_count=int(raw["pageCount"]),
                total=int(raw["total"]),
            )
        except KeyError as e:
            raise DecodingError(f"meta.pagination is missing {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise DecodingError(f"meta.pagination has a non-integer value: {e}") from e


@dataclass(frozen=True)
class ResponseMeta:
    pagination: PaginationMeta | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> ResponseMeta:
        if not isinstance(raw, dict):
            raise DecodingError(f"meta must be an object, got {type(raw).__name__}")
        pagination = None
        if raw.get("pagination") is not None:
            pagination = PaginationMeta.from_dict(raw["pagination"])
        extra = {key: value for key, value in raw.items() if key != "pagination"}
        return cls(pagination=pagination, extra=extra)


@dataclass(frozen=True)
class StrapiResponse(Generic[T]):
    """Decoded ``{data, meta}`` envelope. ``meta`` is None when absent."""

    data: T
    meta: ResponseMeta | None = None

    @classmethod
    def from_envelope(cls, payload: Any, record_type: RecordType | None = None) -> StrapiResponse:
        """Decode a success envelope.

        Raises:
            DecodingError: If the payload is not an object with a ``data`` key,
                or a record cannot be converted to ``record_type``.
        """
        if not isinstance(payload, dict):
            raise DecodingError(f"expected an object envelope, got {type(payload).__name__}")
        if "data" not in payload:
            raise DecodingError("envelope has no 'data' key")

        raw_data = payload["data"]
        if isinstance(raw_data, list):
            data: Any = [decode_record(item, record_type) for item in raw_data]
        elif raw_data is None:
            data = None
        else:
            data = decode_record(raw_data, record_type)

        meta = None
        if payload.get("meta") is not None:
            meta = ResponseMeta.from_dict(payload["meta"])
        return cls(data=data, meta=meta)


@dataclass(frozen=True)
class StrapiErrorPayload:
    """The ``error`` object of a failed response."""

    status: int
    name: str
    message: str
    details: dict[str, Any] | None = None

    @classmethod
    def from_envelope(cls, payload: Any) -> StrapiErrorPayload | None:
        """Parse ``{"error": {...}}``; None if the payload has another shape."""
        if not isinstance(payload, dict):
            return None
        error = payload.get("error")
        if not isinstance(error, dict):
            return None
        status, name, message = error.get("status"), error.get("name"), error.get("message")
        if not isinstance(status, int) or not isinstance(name, str) or not isinstance(message, str):
            return None
        details = error.get("details")
        return cls(
            status=status,
            name=name,
            message=message,
            details=details if isinstance(details, dict) else None,
        )


def decode_record(raw: Any, record_type: RecordType | None) -> Any:
    """Convert one raw record.

    Dataclass types receive only the keys matching their init fields, so
    server-side additions (``documentId``, timestamps, ...) are ignored.

    Raises:
        DecodingError: If conversion fails.
    """
    if record_type is None:
        return raw
    try:
        if isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
            if not isinstance(raw, dict):
                raise DecodingError(
                    f"expected an object for {record_type.__name__}, got {type(raw).__name__}"
                )
            names = {f.name for f in dataclasses.fields(record_type) if f.init}
            return record_type(**{key: value for key, value in raw.items() if key in names})
        return record_type(raw)
    except DecodingError:
        raise
    except (TypeError, ValueError, KeyError) as e:
        name = getattr(record_type, "__name__", repr(record_type))
        raise DecodingError(f"cannot build {name} from record: {e}") from e
