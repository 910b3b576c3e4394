"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import QueryClientConfig
from .core.credentials import SasTokenCredentials, ServiceCredentials
from .core.errors import QueryValidationError
from .core.models import HttpMethod
from .query.endpoints import build_job_query_url, build_twin_query_url
from .query.models import QueryTarget


def validate_client_config(config: QueryClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise QueryValidationError(str(exc)) from exc


def resolve_credentials(credentials: ServiceCredentials | str) -> ServiceCredentials:
    if isinstance(credentials, str):
        return SasTokenCredentials(credentials)
    if not isinstance(credentials, ServiceCredentials):
        raise QueryValidationError("credentials must provide authorization_header()")
    return credentials


def resolve_page_size(config: QueryClientConfig, page_size: int | None) -> int:
    if page_size is None:
        return config.query.default_page_size
    return page_size


def build_twin_query_target(
    config: QueryClientConfig,
    credentials: ServiceCredentials,
) -> QueryTarget:
    return QueryTarget(
        credentials=credentials,
        url=build_twin_query_url(config),
        method=HttpMethod.POST,
        timeout_seconds=config.query.default_timeout_seconds,
    )


def build_job_query_target(
    config: QueryClientConfig,
    credentials: ServiceCredentials,
    *,
    job_type: str | None,
    job_status: str | None,
) -> QueryTarget:
    return QueryTarget(
        credentials=credentials,
        url=build_job_query_url(config, job_type=job_type, job_status=job_status),
        method=HttpMethod.GET,
        timeout_seconds=config.query.default_timeout_seconds,
    )


__all__ = [
    "validate_client_config",
    "resolve_credentials",
    "resolve_page_size",
    "build_twin_query_target",
    "build_job_query_target",
]
