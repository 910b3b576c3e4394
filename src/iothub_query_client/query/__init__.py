"""Paged query package."""

from .async_collection import AsyncQueryCollection
from .collection import QueryCollection
from .collection_shared import CollectionState
from .models import QueryCollectionResponse, QueryTarget, QueryType
from .options import QueryOptions
from .specs import QuerySpec, SqlQuery, TypedQuery

__all__ = [
    "QueryCollection",
    "AsyncQueryCollection",
    "CollectionState",
    "QueryCollectionResponse",
    "QueryTarget",
    "QueryType",
    "QueryOptions",
    "QuerySpec",
    "SqlQuery",
    "TypedQuery",
]
