"""Request/response observers.

StrapiClient notifies an optional observer before each request and after
it succeeds or fails. Observers only watch; an observer that raises is
logged and otherwise ignored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Protocol

import requests

logger = logging.getLogger(__name__)

REDACTED = "REDACTED"
_SENSITIVE_HEADERS = frozenset({"authorization", "cookie"})


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy with credentials replaced by ``REDACTED``.

    ``Authorization``, ``Cookie`` and any header whose name contains
    ``token`` are redacted (case-insensitive).
    """
    safe: dict[str, str] = {}
    for key, value in headers.items():
        lowered = key.lower()
        if lowered in _SENSITIVE_HEADERS or "token" in lowered:
            safe[key] = REDACTED
        else:
            safe[key] = value
    return safe


def _format_headers(headers: Mapping[str, str]) -> str:
    if not headers:
        return "none"
    return ", ".join(sorted(f"{key}: {value}" for key, value in redact_headers(headers).items()))


def _format_body(body: bytes | str | None) -> str | None:
    """Pretty-print a JSON body; fall back to text or a byte count."""
    if not body:
        return None
    if isinstance(body, str):
        body = body.encode("utf-8")
    try:
        return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
    except ValueError:
        pass
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return f"{len(body)} bytes (non-text)"
    return text if text.strip() else None


class RequestObserver(Protocol):
    def request_started(self, request: requests.PreparedRequest, correlation_id: str) -> None: ...

    def response_received(
        self,
        request: requests.PreparedRequest,
        response: requests.Response,
        correlation_id: str,
        duration_ms: int,
    ) -> None: ...

    def request_failed(
        self,
        request: requests.PreparedRequest,
        error: BaseException,
        correlation_id: str,
        duration_ms: int,
    ) -> None: ...


class LoggingObserver:
    """Writes request traffic to a standard library logger.

    INFO gets one line per request and response, DEBUG adds redacted
    headers and pretty-printed bodies, failures go to ERROR.

    Args:
        log: Logger to write to. Defaults to this module's logger.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def request_started(self, request: requests.PreparedRequest, correlation_id: str) -> None:
        self.log.info("[%s] -> %s %s", correlation_id, request.method, request.url)
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        self.log.debug("[%s] Headers: %s", correlation_id, _format_headers(request.headers))
        body = _format_body(request.body)
        self.log.debug("[%s] Body: %s", correlation_id, body if body is not None else "none")

    def response_received(
        self,
        request: requests.PreparedRequest,
        response: requests.Response,
        correlation_id: str,
        duration_ms: int,
    ) -> None:
        self.log.info(
            "[%s] <- %d %s (%d ms, %d bytes)",
            correlation_id,
            response.status_code,
            request.url,
            duration_ms,
            len(response.content or b""),
        )
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        self.log.debug(
            "[%s] Response headers: %s", correlation_id, _format_headers(response.headers)
        )
        body = _format_body(response.content)
        self.log.debug(
            "[%s] Response body: %s", correlation_id, body if body is not None else "none"
        )

    def request_failed(
        self,
        request: requests.PreparedRequest,
        error: BaseException,
        correlation_id: str,
        duration_ms: int,
    ) -> None:
        self.log.error(
            "[%s] x %s %s failed after %d ms: %s",
            correlation_id,
            request.method,
            request.url,
            duration_ms,
            error,
        )
        if error.__cause__ is not None:
            self.log.debug(
                "[%s] Underlying: %s: %s",
                correlation_id,
                type(error.__cause__).__name__,
                error.__cause__,
            )
