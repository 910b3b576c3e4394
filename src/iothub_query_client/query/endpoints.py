"""Service URLs for query endpoints."""

from __future__ import annotations

import httpx

from ..config import QueryClientConfig
from ..core.errors import QueryValidationError


def build_twin_query_url(config: QueryClientConfig) -> str:
    return str(
        httpx.URL(
            f"{config.normalized_base_url}/devices/query",
            params={"api-version": config.api_version},
        )
    )


def build_job_query_url(
    config: QueryClientConfig,
    *,
    job_type: str | None = None,
    job_status: str | None = None,
) -> str:
    params: dict[str, str] = {}
    if job_type is not None:
        if not job_type.strip():
            raise QueryValidationError("job_type must not be blank")
        params["jobType"] = job_type
    if job_status is not None:
        if not job_status.strip():
            raise QueryValidationError("job_status must not be blank")
        params["jobStatus"] = job_status
    params["api-version"] = config.api_version
    return str(httpx.URL(f"{config.normalized_base_url}/jobs/v2/query", params=params))


__all__ = [
    "build_twin_query_url",
    "build_job_query_url",
]
