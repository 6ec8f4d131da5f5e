"""Authenticated request dispatch and response normalization."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from salesforce.config import DEFAULT_TIMEOUT_SECONDS
from salesforce.model import Connection, Failure, MalformedBody, NormalizedResult, Success

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
TRANSPORT_FAILURE_STATUS = 0

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~".
_COMPONENT_SAFE = "!*'()"

logger = logging.getLogger(__name__)


def encode_component(value: Any) -> str:
    """Percent-encode a free-text value for use inside a query string."""

    return quote(str(value), safe=_COMPONENT_SAFE)


def build_url(connection: Connection, path: str) -> str:
    return connection.instance_url + path


def build_headers(connection: Connection, *, has_body: bool) -> dict[str, str]:
    headers = {
        "Authorization": f"Bearer {connection.access_token}",
        "Accept": "application/json",
    }
    if has_body:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return headers


def encode_body(body: Any) -> bytes:
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


def classify_response(status_code: int, content: bytes) -> NormalizedResult:
    """Map a status code and raw payload onto exactly one normalized result."""

    if status_code < 200 or status_code >= 300:
        return Failure(status_code)
    if len(content) == 0:
        return Success(None)
    try:
        return Success(json.loads(content))
    except ValueError:
        text = content.decode("utf-8", errors="replace")
        return MalformedBody(status_code, text)


async def _send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: dict[str, str],
    content: bytes | None,
) -> NormalizedResult:
    try:
        response = await client.request(method, url, headers=headers, content=content)
    except httpx.TransportError as exc:
        logger.warning("%s %s failed before a response arrived: %s", method, url, exc)
        return Failure(TRANSPORT_FAILURE_STATUS)
    return classify_response(response.status_code, response.content)


async def dispatch(
    method: str,
    connection: Connection,
    path: str,
    body: Any = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> NormalizedResult:
    """Send one authenticated request and normalize its outcome.

    The target is ``connection.instance_url + path``; callers own the path,
    including any API prefix and query string. ``body``, when not ``None``, is
    sent as UTF-8 JSON. HTTP and transport failures come back as ``Failure``
    rather than being raised, and a 2xx payload that is not JSON comes back as
    ``MalformedBody``.

    Pass ``client`` to reuse a pooled ``httpx.AsyncClient``; otherwise a
    short-lived client is opened for this request only.
    """

    request_method = method.upper()
    if request_method not in ALLOWED_METHODS:
        raise ValueError(f"Unsupported HTTP method '{method}'.")

    url = build_url(connection, path)
    has_body = body is not None
    headers = build_headers(connection, has_body=has_body)
    content = encode_body(body) if has_body else None

    logger.debug("Dispatching %s %s (body=%s)", request_method, url, has_body)
    if client is not None:
        result = await _send(client, request_method, url, headers, content)
    else:
        async with httpx.AsyncClient(timeout=timeout) as owned_client:
            result = await _send(owned_client, request_method, url, headers, content)

    if isinstance(result, Failure):
        logger.warning("%s %s returned status %s", request_method, url, result.status_code)
    elif isinstance(result, MalformedBody):
        logger.warning(
            "%s %s returned status %s with a body that is not valid JSON",
            request_method,
            url,
            result.status_code,
        )
    return result


__all__ = [
    "dispatch",
    "classify_response",
    "encode_component",
    "build_url",
    "build_headers",
    "ALLOWED_METHODS",
    "JSON_CONTENT_TYPE",
    "TRANSPORT_FAILURE_STATUS",
]
