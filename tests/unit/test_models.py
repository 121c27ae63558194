"""Unit tests for request descriptors and response envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from strapi_client.exceptions import DecodingError
from strapi_client.models import (
    HTTPMethod,
    PaginationMeta,
    ResponseMeta,
    StrapiEndpoint,
    StrapiErrorPayload,
    StrapiRequest,
    StrapiResponse,
    decode_record,
)


@dataclass
class Tag:
    id: int
    name: str
    slug: str = ""
    cached: bool = field(default=False, init=False)


class TestStrapiEndpoint:
    def test_defaults_to_get(self) -> None:
        assert StrapiEndpoint("/articles").method is HTTPMethod.GET

    def test_child(self) -> None:
        child = StrapiEndpoint("/articles/").child(7, HTTPMethod.PUT)
        assert child == StrapiEndpoint("/articles/7", HTTPMethod.PUT)


class TestStrapiRequest:
    def test_no_body_by_default(self) -> None:
        assert StrapiRequest("/articles").has_body is False

    def test_none_is_a_body(self) -> None:
        request = StrapiRequest("/articles", HTTPMethod.PUT, body=None)
        assert request.has_body is True
        assert request.json_payload() == {"data": None}

    def test_raw_body_counts_as_body(self) -> None:
        assert StrapiRequest("/articles", raw_body=b"{}").has_body is True


class TestResponseMeta:
    def test_pagination(self) -> None:
        meta = ResponseMeta.from_dict(
            {"pagination": {"page": 2, "pageSize": 25, "pageCount": 4, "total": 90}}
        )
        assert meta.pagination == PaginationMeta(page=2, page_size=25, page_count=4, total=90)

    def test_empty_meta(self) -> None:
        assert ResponseMeta.from_dict({}) == ResponseMeta(pagination=None)

    def test_extra_keys_kept(self) -> None:
        meta = ResponseMeta.from_dict({"availableLocales": ["en"]})
        assert meta.extra == {"availableLocales": ["en"]}

    def test_non_integer_pagination(self) -> None:
        with pytest.raises(DecodingError):
            PaginationMeta.from_dict(
                {"page": "one", "pageSize": 25, "pageCount": 4, "total": 90}
            )


class TestStrapiResponse:
    def test_missing_meta_is_none(self) -> None:
        assert StrapiResponse.from_envelope({"data": []}).meta is None

    def test_null_data(self) -> None:
        assert StrapiResponse.from_envelope({"data": None}, Tag).data is None

    @pytest.mark.parametrize("payload", [None, [], "data", {"meta": {}}])
    def test_bad_envelope(self, payload: object) -> None:
        with pytest.raises(DecodingError):
            StrapiResponse.from_envelope(payload)


class TestDecodeRecord:
    def test_no_record_type_returns_raw(self) -> None:
        raw = {"id": 1}
        assert decode_record(raw, None) is raw

    def test_dataclass_ignores_unknown_and_non_init_fields(self) -> None:
        tag = decode_record({"id": 1, "name": "python", "cached": True, "locale": "en"}, Tag)
        assert tag == Tag(id=1, name="python")
        assert tag.cached is False

    def test_dataclass_needs_object(self) -> None:
        with pytest.raises(DecodingError):
            decode_record([1, 2], Tag)

    def test_callable_failure(self) -> None:
        with pytest.raises(DecodingError):
            decode_record({"id": "x"}, lambda raw: int(raw["id"]))


class TestStrapiErrorPayload:
    def test_parses_error_object(self) -> None:
        payload = {
            "data": None,
            "error": {"status": 400, "name": "ValidationError", "message": "Missing title"},
        }
        assert StrapiErrorPayload.from_envelope(payload) == StrapiErrorPayload(
            status=400, name="ValidationError", message="Missing title"
        )

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "text",
            {},
            {"error": "boom"},
            {"error": {"status": "400", "name": "x", "message": "y"}},
        ],
    )
    def test_other_shapes(self, payload: object) -> None:
        assert StrapiErrorPayload.from_envelope(payload) is None
