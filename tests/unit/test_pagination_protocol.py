from __future__ import annotations

import pytest

from iothub_query_client.core.errors import (
    QueryMalformedResponseError,
    QueryTransportError,
    QueryValidationError,
)
from iothub_query_client.core.models import HttpMethod
from iothub_query_client.query.collection import QueryCollection
from iothub_query_client.query.collection_shared import CollectionState
from iothub_query_client.query.models import QueryTarget, QueryType
from iothub_query_client.query.options import QueryOptions
from iothub_query_client.query.specs import SqlQuery
from tests.shared.executors import SpyExecutor, make_page

URL = "https://hub.example.net/devices/query?api-version=2021-04-12"


def _bound(executor: SpyExecutor, credentials, *, query_type=QueryType.RAW, page_size: int = 2):
    return QueryCollection(
        SqlQuery("someQuery"),
        page_size,
        query_type,
        executor=executor,
        target=QueryTarget(
            credentials=credentials,
            url=URL,
            method=HttpMethod.POST,
            timeout_seconds=10.0,
        ),
        validator=lambda text: None,
    )


def test_has_next_on_fresh_collection_is_true_without_fetch(credentials):
    executor = SpyExecutor()
    collection = _bound(executor, credentials)
    assert collection.has_next() is True
    assert collection.has_next(QueryOptions(page_size=5)) is True
    assert executor.calls == []


def test_has_next_is_idempotent_for_unconsumed_page(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1")])
    collection = _bound(executor, credentials)
    collection.send_query_request(credentials, URL, HttpMethod.POST, 10.0)

    assert collection.state is CollectionState.RESPONSE_UNCONSUMED
    assert collection.has_next() is True
    assert collection.has_next() is True
    assert len(executor.calls) == 1


def test_has_next_fetches_when_consumed_page_has_continuation(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1"), make_page("raw")])
    collection = _bound(executor, credentials)
    collection.next()
    assert collection.state is CollectionState.RESPONSE_CONSUMED_HAS_CONTINUATION

    assert collection.has_next() is True
    assert len(executor.calls) == 2
    assert executor.calls[1]["headers"]["x-ms-continuation"] == "tok1"
    assert collection.state is CollectionState.RESPONSE_UNCONSUMED


def test_has_next_with_options_applies_them_to_fetch(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1"), make_page("raw")])
    collection = _bound(executor, credentials)
    collection.next()

    collection.has_next(QueryOptions(continuation_token="override", page_size=9))

    assert dict(executor.calls[1]["headers"]) == {
        "x-ms-max-item-count": "9",
        "x-ms-continuation": "override",
    }


def test_has_next_is_false_when_consumed_page_has_no_continuation(credentials):
    executor = SpyExecutor([make_page("raw")])
    collection = _bound(executor, credentials)
    collection.next()

    assert collection.state is CollectionState.RESPONSE_CONSUMED_NO_CONTINUATION
    assert collection.has_next() is False
    assert len(executor.calls) == 1


def test_has_next_propagates_fetch_errors(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1"), make_page("twin")])
    collection = _bound(executor, credentials)
    collection.next()
    with pytest.raises(QueryMalformedResponseError):
        collection.has_next()


def test_has_next_propagates_transport_errors(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1"), QueryTransportError("down")])
    collection = _bound(executor, credentials)
    collection.next()
    with pytest.raises(QueryTransportError):
        collection.has_next()


def test_next_returns_held_page_and_marks_it_returned(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1")])
    collection = _bound(executor, credentials)
    fetched = collection.send_query_request(credentials, URL, HttpMethod.POST, 10.0)

    page = collection.next()

    assert page is fetched
    assert collection.response_already_returned is True
    assert len(executor.calls) == 1


def test_next_returns_none_when_nothing_left(credentials):
    executor = SpyExecutor([make_page("raw")])
    collection = _bound(executor, credentials)
    assert collection.next() is not None
    assert collection.next() is None
    assert collection.next(QueryOptions(page_size=4)) is None
    assert len(executor.calls) == 1


def test_second_next_fetches_when_continuation_present(credentials):
    executor = SpyExecutor([make_page("raw", continuation="tok1"), make_page("raw", body=b"[2]")])
    collection = _bound(executor, credentials)
    collection.next()
    second = collection.next()
    assert second is not None
    assert second.body == b"[2]"


def test_next_with_options_fetches_first_page_with_them(credentials):
    executor = SpyExecutor([make_page("raw")])
    collection = _bound(executor, credentials)
    collection.next(QueryOptions(continuation_token="resume", page_size=3))
    assert dict(executor.calls[0]["headers"]) == {
        "x-ms-max-item-count": "3",
        "x-ms-continuation": "resume",
    }


def test_next_without_target_fails_before_any_request():
    executor = SpyExecutor()
    collection = QueryCollection.typed(5, QueryType.RAW, executor=executor)
    assert collection.has_next() is True
    with pytest.raises(QueryValidationError, match="target"):
        collection.next()
    assert executor.calls == []


def test_next_uses_target_bound_by_send_query_request(credentials):
    executor = SpyExecutor([make_page("jobResponse", continuation="t"), make_page("jobResponse")])
    collection = QueryCollection.typed(5, QueryType.JOB_RESPONSE, executor=executor)
    collection.send_query_request(credentials, "https://hub/jobs/v2/query", HttpMethod.GET, 3.0)
    collection.next()
    collection.next()
    assert executor.calls[1]["url"] == "https://hub/jobs/v2/query"
    assert executor.calls[1]["method"] is HttpMethod.GET
    assert executor.calls[1]["timeout_seconds"] == 3.0


def test_iteration_yields_every_page_once(credentials):
    executor = SpyExecutor(
        [
            make_page("raw", continuation="a", body=b"[1]"),
            make_page("raw", continuation="b", body=b"[2]"),
            make_page("raw", body=b"[3]"),
        ]
    )
    collection = _bound(executor, credentials)
    bodies = [page.body for page in collection]
    assert bodies == [b"[1]", b"[2]", b"[3]"]
    assert len(executor.calls) == 3


def test_end_to_end_continuation_scenario(credentials):
    executor = SpyExecutor(
        [
            make_page("raw", continuation="tok1", body=b'[{"deviceId": "a"}]'),
            make_page("raw", body=b'[{"deviceId": "b"}]'),
        ]
    )
    collection = _bound(executor, credentials, page_size=2)

    assert collection.has_next() is True
    assert executor.calls == []

    first = collection.next()
    assert first is not None
    assert first.continuation_token == "tok1"
    assert dict(executor.calls[0]["headers"]) == {"x-ms-max-item-count": "2"}

    assert collection.has_next() is True
    assert executor.calls[1]["headers"]["x-ms-continuation"] == "tok1"
    assert collection.has_next() is True
    assert len(executor.calls) == 2

    last = collection.next()
    assert last is not None
    assert last.continuation_token is None
    assert last.items == ({"deviceId": "b"},)

    assert collection.has_next() is False
    assert collection.next() is None
    assert len(executor.calls) == 2


def test_empty_page_with_continuation_is_valid(credentials):
    executor = SpyExecutor([make_page("raw", continuation="more", body=b""), make_page("raw", body=b"[1]")])
    collection = _bound(executor, credentials)
    first = collection.next()
    assert first.items == ()
    assert collection.has_next() is True
    assert collection.next().items == (1,)
