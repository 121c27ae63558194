"""HTTP client for the Strapi REST API.

Builds requests (URL, headers, JSON body), hands them to a pluggable
transport, validates the status and decodes the JSON envelope. Every
failure is raised as a StrapiError subclass; nothing is retried.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, Protocol
from urllib.parse import urlencode, urlsplit

import requests

from strapi_client._version import __version__
from strapi_client.auth import AuthProvider, StaticTokenAuth
from strapi_client.config import Config
from strapi_client.exceptions import (
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    ServerError,
    StrapiError,
    TransportError,
    ValidationError,
)
from strapi_client.models import (
    HTTPMethod,
    RecordType,
    StrapiEndpoint,
    StrapiErrorPayload,
    StrapiRequest,
    StrapiResponse,
)
from strapi_client.observer import RequestObserver
from strapi_client.query.builder import StrapiQuery
from strapi_client.query.filter_encoder import QueryParams

logger = logging.getLogger(__name__)

_USER_AGENT = f"strapi-client/{__version__}"
_JSON = "application/json"
_NO_BODY = object()


class Transport(Protocol):
    """Sends a prepared request and returns the raw response."""

    def send(
        self, request: requests.PreparedRequest, *, timeout: float, verify: bool
    ) -> requests.Response: ...


class SessionTransport:
    """Transport backed by a requests.Session (connection pooling, proxies)."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session if session is not None else requests.Session()

    def send(
        self, request: requests.PreparedRequest, *, timeout: float, verify: bool
    ) -> requests.Response:
        return self._session.send(request, timeout=timeout, verify=verify)

    def close(self) -> None:
        self._session.close()


class StrapiClient:
    """Client for one Strapi server.

    Args:
        config: Server location and request settings. Defaults to Config().
        transport: Byte transport. Defaults to a SessionTransport.
        auth: Token provider. Defaults to the token from ``config``.
        observer: Optional request observer (see strapi_client.observer).
    """

    def __init__(
        self,
        config: Config | None = None,
        transport: Transport | None = None,
        auth: AuthProvider | None = None,
        observer: RequestObserver | None = None,
    ) -> None:
        self.config = config or Config()
        self.transport = transport or SessionTransport()
        self.auth = auth if auth is not None else StaticTokenAuth(self.config.token)
        self.observer = observer

    def __enter__(self) -> StrapiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    # -- request construction -------------------------------------------

    def build_url(self, path: str, params: QueryParams | None = None) -> str:
        """Join base URL, API prefix, endpoint path and encoded parameters.

        Raises:
            InvalidURLError: If the result is not an absolute http(s) URL.
        """
        base = self.config.base_url.rstrip("/")
        if path and not path.startswith("/"):
            path = f"/{path}"
        url = f"{base}{self.config.api_path}{path}"

        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidURLError(url, "expected an absolute http(s) URL")
        if parts.query or parts.fragment:
            raise InvalidURLError(url, "endpoint path must not contain '?' or '#'")

        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def build_request(
        self,
        method: HTTPMethod | str,
        path: str,
        params: QueryParams | None = None,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> requests.PreparedRequest:
        """Build the prepared request without sending it.

        Default headers are applied first, caller headers last so they can
        override any of them.
        """
        url = self.build_url(path, params)

        request_headers: dict[str, str] = {
            "User-Agent": _USER_AGENT,
            "Accept": _JSON,
        }
        token = self.auth.token
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if body is not None:
            request_headers["Content-Type"] = _JSON
        if headers:
            request_headers.update(headers)

        try:
            return requests.Request(
                method=HTTPMethod(method).value,
                url=url,
                headers=request_headers,
                data=body,
            ).prepare()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise InvalidURLError(url, str(e)) from e

    # -- public API -------------------------------------------------------

    def send(
        self,
        endpoint: StrapiEndpoint,
        query: StrapiQuery | QueryParams | None = None,
        body: Any = _NO_BODY,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body as is.

        ``body`` is serialised to JSON without wrapping.

        Raises:
            StrapiError: On any failure.
        """
        encoded = None if body is _NO_BODY else _dump_json(body)
        prepared = self.build_request(
            endpoint.method, endpoint.path, _params(query), encoded, headers
        )
        response = self._perform(prepared)
        return _read_json(response)

    def execute(
        self,
        request: StrapiRequest,
        record_type: RecordType | None = None,
    ) -> StrapiResponse:
        """Send ``request`` and decode the ``{data, meta}`` envelope.

        Args:
            request: Endpoint, method, query, body and headers.
            record_type: Converts each record; a dataclass type or any callable.

        An empty body is only accepted for DELETE and yields ``data=None``.

        Raises:
            StrapiError: On any failure.
        """
        encoded: bytes | None = None
        if request.raw_body is not None:
            encoded = request.raw_body
        elif request.has_body:
            encoded = _dump_json(request.json_payload())

        prepared = self.build_request(
            request.method,
            request.endpoint,
            _params(request.query),
            encoded,
            request.headers,
        )
        response = self._perform(prepared)
        payload = _read_json(response)
        if payload is None and request.method == HTTPMethod.DELETE:
            # 204 No Content
            return StrapiResponse(data=None)
        return StrapiResponse.from_envelope(payload, record_type)

    # -- internals --------------------------------------------------------

    def _perform(self, prepared: requests.PreparedRequest) -> requests.Response:
        correlation_id = uuid.uuid4().hex[:8]
        self._notify("request_started", prepared, correlation_id)
        start = time.monotonic()

        try:
            response = self.transport.send(
                prepared, timeout=self.config.timeout, verify=self.config.verify_ssl
            )
        except StrapiError as e:
            self._notify("request_failed", prepared, e, correlation_id, _elapsed_ms(start))
            raise
        except Exception as e:
            error = TransportError(str(e) or type(e).__name__)
            error.__cause__ = e
            self._notify("request_failed", prepared, error, correlation_id, _elapsed_ms(start))
            raise error from e

        if not isinstance(response, requests.Response):
            error = InvalidResponseError(response)
            self._notify("request_failed", prepared, error, correlation_id, _elapsed_ms(start))
            raise error

        self._notify("response_received", prepared, response, correlation_id, _elapsed_ms(start))
        _validate_status(response)
        return response

    def _notify(self, event: str, *args: Any) -> None:
        if self.observer is None:
            return
        try:
            getattr(self.observer, event)(*args)
        except Exception:
            logger.debug("Request observer failed in %s", event, exc_info=True)


def _params(query: StrapiQuery | QueryParams | None) -> QueryParams:
    if query is None:
        return []
    if isinstance(query, StrapiQuery):
        return query.build()
    return list(query)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _dump_json(value: Any) -> bytes:
    try:
        return json.dumps(value).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ValidationError("body", value, f"not JSON-serialisable: {e}") from e


def _read_json(response: requests.Response) -> Any:
    """Decode the response body; an empty body decodes to None.

    Raises:
        DecodingError: If the body is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return json.loads(response.content)
    except ValueError as e:
        raise DecodingError(f"invalid JSON in response body: {e}") from e


def reason_phrase(status: int) -> str:
    """Standard reason phrase for an HTTP status code."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown Status"


def _validate_status(response: requests.Response) -> None:
    """Raise ServerError for non-2xx responses.

    Name and message come from the error envelope when the body has one,
    otherwise they are synthesised from the status code.
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    payload: Any = None
    if response.content:
        try:
            payload = json.loads(response.content)
        except ValueError:
            payload = None

    error = StrapiErrorPayload.from_envelope(payload)
    if error is not None:
        raise ServerError(status, error.name, error.message, error.details)
    raise ServerError(status, "HTTPError", reason_phrase(status))
