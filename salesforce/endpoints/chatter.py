"""Chatter REST endpoints.

Each helper binds one verb and path onto ``dispatch`` and returns the
``NormalizedResult`` unchanged, so any of them can be handed to
``call_with_retry`` as the action.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

from salesforce.common import dispatch, encode_component
from salesforce.config import DEFAULT_API_CONFIG, ApiConfig
from salesforce.model import Connection, NormalizedResult


def _resolve_config(config: ApiConfig | None) -> ApiConfig:
    return config or DEFAULT_API_CONFIG


async def _call(
    method: str,
    connection: Connection,
    path: str,
    body: Any = None,
    *,
    client: httpx.AsyncClient | None,
    config: ApiConfig,
) -> NormalizedResult:
    return await dispatch(
        method,
        connection,
        path,
        body,
        client=client,
        timeout=config.timeout_seconds,
    )


async def get_feed(
    connection: Connection,
    url: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Fetch the news feed, or the page at ``url`` (e.g. a ``nextPageUrl``)."""

    cfg = _resolve_config(config)
    if url is None:
        url = cfg.api_path(
            f"chatter/feeds/news/me/feed-items?sort={cfg.feed_sort}&pageSize={cfg.feed_page_size}"
        )
    return await _call("GET", connection, url, client=client, config=cfg)


async def get_more_comments(
    connection: Connection,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    return await _call("GET", connection, url, client=client, config=cfg)


async def get_groups(
    connection: Connection,
    name: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/groups?q={encode_component(name)}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_users(
    connection: Connection,
    name: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/users?q={encode_component(name)}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_mention_completions(
    connection: Connection,
    query: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Suggest people and groups whose name matches a partial @mention."""

    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/mentions/completions?q={encode_component(query)}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_topic_completions(
    connection: Connection,
    query: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"connect/topics?q={encode_component(query)}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_hashtags(
    connection: Connection,
    tag: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feed-items?q={encode_component(tag)}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_batch(
    connection: Connection,
    post_ids: str | Sequence[str],
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Fetch several feed items at once.

    ``post_ids`` is either an already comma-separated string or a sequence of
    ids, which is joined with commas.
    """

    cfg = _resolve_config(config)
    ids = post_ids if isinstance(post_ids, str) else ",".join(post_ids)
    path = cfg.api_path(f"chatter/feed-items/batch/{ids}")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_post_likes(
    connection: Connection,
    post_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feed-items/{post_id}/likes")
    return await _call("GET", connection, path, client=client, config=cfg)


async def get_comment_likes(
    connection: Connection,
    comment_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/comments/{comment_id}/likes")
    return await _call("GET", connection, path, client=client, config=cfg)


async def like_post(
    connection: Connection,
    post_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feed-items/{post_id}/likes")
    return await _call("POST", connection, path, client=client, config=cfg)


async def like_comment(
    connection: Connection,
    comment_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/comments/{comment_id}/likes")
    return await _call("POST", connection, path, client=client, config=cfg)


async def submit_comment(
    connection: Connection,
    post_id: str,
    message: Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feed-items/{post_id}/comments")
    return await _call("POST", connection, path, message, client=client, config=cfg)


async def submit_post(
    connection: Connection,
    message: Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Post ``message`` to the current user's news feed."""

    cfg = _resolve_config(config)
    path = cfg.api_path("chatter/feeds/news/me/feed-items")
    return await _call("POST", connection, path, message, client=client, config=cfg)


async def submit_post_to_record(
    connection: Connection,
    record_id: str,
    message: Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feeds/record/{record_id}/feed-items")
    return await _call("POST", connection, path, message, client=client, config=cfg)


async def bookmark_item(
    connection: Connection,
    item_id: str,
    should_bookmark: bool,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    flag = "true" if should_bookmark else "false"
    path = cfg.api_path(f"chatter/feed-items/{item_id}?isBookmarkedByCurrentUser={flag}")
    return await _call("PATCH", connection, path, client=client, config=cfg)


async def unlike(
    connection: Connection,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    """Remove a like given the like resource's own URL (``myLike.url``)."""

    cfg = _resolve_config(config)
    return await _call("DELETE", connection, url, client=client, config=cfg)


async def delete_post(
    connection: Connection,
    post_id: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ApiConfig | None = None,
) -> NormalizedResult:
    cfg = _resolve_config(config)
    path = cfg.api_path(f"chatter/feed-items/{post_id}")
    return await _call("DELETE", connection, path, client=client, config=cfg)


__all__ = [
    "get_feed",
    "get_more_comments",
    "get_groups",
    "get_users",
    "get_mention_completions",
    "get_topic_completions",
    "get_hashtags",
    "get_batch",
    "get_post_likes",
    "get_comment_likes",
    "like_post",
    "like_comment",
    "submit_comment",
    "submit_post",
    "submit_post_to_record",
    "bookmark_item",
    "unlike",
    "delete_post",
]
