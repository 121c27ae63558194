"""Exception hierarchy for strapi-client."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class StrapiClientError(Exception):
    """Base exception for all strapi-client errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all strapi-client errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(StrapiClientError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Validation Errors
class ValidationError(StrapiClientError):
    """Invalid input value passed to a query builder."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


# Request Errors
class StrapiError(StrapiClientError):
    """Failure while sending a request or reading its response.

    Every error raised by StrapiClient.send() and StrapiClient.execute()
    is one of the subclasses below.
    """

    pass


class InvalidURLError(StrapiError):
    """Endpoint, path and query could not be combined into a valid URL."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}")


class InvalidResponseError(StrapiError):
    """Transport returned something that is not an HTTP response."""

    def __init__(self, received: object) -> None:
        self.received = received
        super().__init__(f"Transport returned {type(received).__name__}, expected an HTTP response")


class ServerError(StrapiError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        status: int,
        name: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        self.name = name
        self.message = message
        self.details = details
        super().__init__(f"HTTP {status} {name}: {message}")


class DecodingError(StrapiError):
    """Success response body did not match the expected envelope or record shape."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Could not decode response: {detail}")


class TransportError(StrapiError):
    """Underlying transport failed (connection refused, timeout, ...)."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Transport failure: {detail}")
