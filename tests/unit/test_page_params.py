from __future__ import annotations

import json

import pytest

from iothub_query_client.query.models import QueryCollectionResponse
from iothub_query_client.query.options import QueryOptions
from iothub_query_client.query.params import (
    CONTINUATION_HEADER,
    PAGE_SIZE_HEADER,
    PageRequest,
    build_page_headers,
    build_query_body,
    resolve_page_request,
)


@pytest.mark.parametrize(
    ("options", "latest", "expected"),
    [
        (None, None, PageRequest(page_size=10, continuation_token=None)),
        (QueryOptions(), None, PageRequest(page_size=10, continuation_token=None)),
        (
            None,
            QueryCollectionResponse(body=b"[]", continuation_token="stored"),
            PageRequest(page_size=10, continuation_token="stored"),
        ),
        (
            QueryOptions(continuation_token="explicit"),
            QueryCollectionResponse(body=b"[]", continuation_token="stored"),
            PageRequest(page_size=10, continuation_token="explicit"),
        ),
        (
            QueryOptions(continuation_token=""),
            QueryCollectionResponse(body=b"[]", continuation_token="stored"),
            PageRequest(page_size=10, continuation_token="stored"),
        ),
        (
            QueryOptions(page_size=3),
            QueryCollectionResponse(body=b"[]", continuation_token=None),
            PageRequest(page_size=3, continuation_token=None),
        ),
    ],
    ids=[
        "defaults",
        "empty-options",
        "stored-token",
        "options-token-wins",
        "blank-options-token-falls-through",
        "options-page-size",
    ],
)
def test_resolve_page_request_precedence(options, latest, expected):
    assert resolve_page_request(options, latest, 10) == expected


def test_build_page_headers_without_token():
    headers = build_page_headers(PageRequest(page_size=100))
    assert dict(headers) == {PAGE_SIZE_HEADER: "100"}


def test_build_page_headers_with_token():
    headers = build_page_headers(PageRequest(page_size=2, continuation_token="tok1"))
    assert dict(headers) == {"x-ms-max-item-count": "2", "x-ms-continuation": "tok1"}
    assert CONTINUATION_HEADER == "x-ms-continuation"


def test_build_query_body_is_json_object_with_query():
    body = build_query_body('SELECT * FROM devices WHERE tags.site = "b1"')
    assert json.loads(body.decode("utf-8")) == {
        "query": 'SELECT * FROM devices WHERE tags.site = "b1"'
    }
