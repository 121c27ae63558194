"""CRUD helper bound to one collection endpoint."""

from __future__ import annotations

from typing import Any

from strapi_client.client import StrapiClient
from strapi_client.models import (
    HTTPMethod,
    RecordType,
    StrapiEndpoint,
    StrapiRequest,
    StrapiResponse,
)
from strapi_client.query.builder import StrapiQuery


class StrapiRepository:
    """List, fetch, create, update and delete records of one content type.

    Example::

        articles = StrapiRepository(client, StrapiEndpoint("/articles"), Article)
        page = articles.list(StrapiQuery().filter(StrapiFilter.equals("title", "Hi")))
    """

    def __init__(
        self,
        client: StrapiClient,
        endpoint: StrapiEndpoint,
        record_type: RecordType | None = None,
    ) -> None:
        self.client = client
        self.endpoint = endpoint
        self.record_type = record_type

    def _item_path(self, item_id: str | int) -> str:
        return self.endpoint.child(item_id).path

    def list(self, query: StrapiQuery | None = None) -> StrapiResponse:
        return self.client.execute(
            StrapiRequest(self.endpoint.path, HTTPMethod.GET, query=query),
            self.record_type,
        )

    def get(self, item_id: str | int, query: StrapiQuery | None = None) -> StrapiResponse:
        return self.client.execute(
            StrapiRequest(self._item_path(item_id), HTTPMethod.GET, query=query),
            self.record_type,
        )

    def create(self, data: Any) -> StrapiResponse:
        """POST ``data`` to the collection; the server's record is returned."""
        return self.client.execute(
            StrapiRequest(self.endpoint.path, HTTPMethod.POST, body=data),
            self.record_type,
        )

    def update(self, item_id: str | int, data: Any) -> StrapiResponse:
        return self.client.execute(
            StrapiRequest(self._item_path(item_id), HTTPMethod.PUT, body=data),
            self.record_type,
        )

    def delete(self, item_id: str | int) -> StrapiResponse:
        return self.client.execute(
            StrapiRequest(self._item_path(item_id), HTTPMethod.DELETE),
            self.record_type,
        )
