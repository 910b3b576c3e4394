from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from iothub_query_client.core.errors import QueryMalformedResponseError, QueryValidationError
from iothub_query_client.core.models import HttpResponse
from iothub_query_client.query.models import QueryCollectionResponse, QueryType
from iothub_query_client.query.options import QueryOptions


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("raw", QueryType.RAW),
        ("twin", QueryType.TWIN),
        ("deviceJob", QueryType.DEVICE_JOB),
        ("jobResponse", QueryType.JOB_RESPONSE),
        ("JOBRESPONSE", QueryType.JOB_RESPONSE),
        (" Raw ", QueryType.RAW),
        ("Unknown", QueryType.UNKNOWN),
        ("enrollment", None),
        (None, None),
    ],
)
def test_query_type_from_item_type(raw, expected):
    assert QueryType.from_item_type(raw) is expected


def test_query_type_item_type_tag():
    assert QueryType.DEVICE_JOB.item_type == "deviceJob"


def test_query_options_defaults_are_empty():
    options = QueryOptions()
    assert options.continuation_token is None
    assert options.page_size is None


@pytest.mark.parametrize("page_size", [0, -3, True, 1.5])
def test_query_options_rejects_invalid_page_size(page_size):
    with pytest.raises(QueryValidationError):
        QueryOptions(page_size=page_size)


def test_query_options_rejects_non_str_token():
    with pytest.raises(QueryValidationError):
        QueryOptions(continuation_token=123)  # type: ignore[arg-type]


def test_query_options_are_immutable():
    options = QueryOptions(continuation_token="a", page_size=2)
    with pytest.raises(FrozenInstanceError):
        options.page_size = 3  # type: ignore[misc]


def test_collection_response_is_immutable_and_normalizes_blank_token():
    response = QueryCollectionResponse(body=b"[]", continuation_token="")
    assert response.continuation_token is None
    with pytest.raises(FrozenInstanceError):
        response.continuation_token = "x"  # type: ignore[misc]


def test_collection_response_accepts_text_body():
    response = QueryCollectionResponse(body='[{"deviceId": "d1"}]', continuation_token="t")  # type: ignore[arg-type]
    assert response.body == b'[{"deviceId": "d1"}]'
    assert response.text == '[{"deviceId": "d1"}]'
    assert response.items == ({"deviceId": "d1"},)
    assert response.has_continuation is True


@pytest.mark.parametrize(
    ("body", "message"),
    [
        (b"{not json", "not valid JSON"),
        (b'{"a": 1}', "must be an array"),
    ],
)
def test_collection_response_items_rejects_non_array_bodies(body, message):
    response = QueryCollectionResponse(body=body)
    with pytest.raises(QueryMalformedResponseError, match=message):
        response.items


def test_collection_response_text_rejects_non_utf8_body():
    response = QueryCollectionResponse(body=b"\xff\xfe")
    with pytest.raises(QueryMalformedResponseError, match="UTF-8"):
        response.text
    with pytest.raises(OSError):
        response.items


def test_http_response_lowercases_header_names():
    response = HttpResponse(status_code=200, headers={"X-MS-Item-Type": "raw"}, body=b"")
    assert response.header("x-ms-item-type") == "raw"
    assert response.header("X-MS-ITEM-TYPE") == "raw"
    with pytest.raises(TypeError):
        response.headers["x"] = "y"  # type: ignore[index]
