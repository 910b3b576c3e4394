"""Public package exports for the IoT hub query client."""

from .async_client import AsyncQueryClient
from .client import QueryClient
from .config import QueryClientConfig
from .core.credentials import SasTokenCredentials
from .query import (
    AsyncQueryCollection,
    QueryCollection,
    QueryCollectionResponse,
    QueryOptions,
    QueryType,
    SqlQuery,
    TypedQuery,
)

__all__ = [
    "QueryClient",
    "AsyncQueryClient",
    "QueryClientConfig",
    "SasTokenCredentials",
    "QueryCollection",
    "AsyncQueryCollection",
    "QueryCollectionResponse",
    "QueryOptions",
    "QueryType",
    "SqlQuery",
    "TypedQuery",
]
