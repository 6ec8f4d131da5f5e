"""Run one endpoint helper end to end with credentials from the environment."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Sequence

import httpx
from dotenv import load_dotenv

from salesforce.config import ApiConfig, connection_from_env, load_api_config
from salesforce.errors import ConfigurationError, SalesforceError
from salesforce.model import Action, Connection
from salesforce.retry import call_with_retry

load_dotenv()

logger = logging.getLogger(__name__)


def text_message(text: str) -> dict[str, Any]:
    """Wrap plain text in the message-segment body Chatter expects for posts and comments."""

    return {"body": {"messageSegments": [{"type": "Text", "text": text}]}}


class EnvRetryArgs:
    """Retry-args provider that re-reads credentials from the environment.

    ``.env`` is reloaded with override so a token refreshed by another process
    is picked up. Returns ``None`` when no different token is available.
    """

    def __init__(self, connection: Connection, extra_args: Sequence[Any]) -> None:
        self.connection = connection
        self.extra_args = tuple(extra_args)

    async def __call__(self) -> list[Any] | None:
        load_dotenv(override=True)
        try:
            refreshed = connection_from_env()
        except ConfigurationError:
            return None
        if refreshed.access_token == self.connection.access_token:
            logger.warning("Access token in the environment has not changed; cannot refresh.")
            return None
        logger.info("Picked up a refreshed access token for %s.", refreshed.instance_url)
        return [refreshed, *self.extra_args]


async def run_action_async(
    action: Action,
    extra_args: Sequence[Any] = (),
    *,
    config: ApiConfig | None = None,
) -> Any:
    """Call ``action(connection, *extra_args)`` with the single 401 retry."""

    cfg = config or load_api_config()
    connection = connection_from_env()
    provider = EnvRetryArgs(connection, extra_args)
    async with httpx.AsyncClient(timeout=cfg.timeout_seconds) as client:
        return await call_with_retry(
            action,
            [connection, *extra_args],
            provider,
            client=client,
            config=cfg,
        )


def main(action: Action, extra_args: Sequence[Any] = ()) -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    try:
        body = asyncio.run(run_action_async(action, extra_args))
    except SalesforceError as exc:
        logger.error("%s failed: %s", getattr(action, "__name__", "request"), exc)
        return 1
    if body is not None:
        print(json.dumps(body, indent=2, sort_keys=True))
    return 0


__all__ = ["EnvRetryArgs", "main", "run_action_async", "text_message"]
