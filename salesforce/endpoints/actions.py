"""Global quick action endpoints."""

from __future__ import annotations

import httpx

from salesforce.common import dispatch
from salesforce.config import DEFAULT_API_CONFIG, ApiConfig
from salesforce.model import Connection, NormalizedResult


async def get_actions(
    connection: Connection,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """List the global quick actions available to the current user."""

    cfg = config or DEFAULT_API_CONFIG
    return await dispatch(
        "GET",
        connection,
        cfg.api_path("sobjects/Global/quickActions"),
        client=client,
        timeout=cfg.timeout_seconds,
    )


async def get_describe_action(
    connection: Connection,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Describe one action, given the ``urls.describe`` path from ``get_actions``."""

    cfg = config or DEFAULT_API_CONFIG
    return await dispatch("GET", connection, url, client=client, timeout=cfg.timeout_seconds)


__all__ = ["get_actions", "get_describe_action"]
