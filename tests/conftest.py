from typing import Callable

import httpx
import pytest

from salesforce.model import Connection

INSTANCE_URL = "https://example.my.salesforce.com"


class RecordingTransport:
    """Wraps a responder in ``httpx.MockTransport`` and keeps every request it saw."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


@pytest.fixture()
def connection():
    return Connection(instance_url=INSTANCE_URL, access_token="token-123")


@pytest.fixture()
def json_transport():
    def _make(status_code=200, payload=None, content=None):
        def responder(request):
            if content is not None:
                return httpx.Response(status_code, content=content)
            if payload is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=payload)

        return RecordingTransport(responder)

    return _make
