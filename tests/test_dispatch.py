import json

import httpx
import pytest

from salesforce.common import classify_response, dispatch, encode_component
from salesforce.model import Failure, MalformedBody, Success


@pytest.mark.asyncio
async def test_success_with_json_body_is_parsed_exactly(connection, json_transport):
    payload = {"items": [{"id": "0D5x", "likes": {"total": 2}}], "nextPageUrl": None, "ratio": 0.5}
    transport = json_transport(200, payload)

    async with transport.client() as client:
        result = await dispatch("GET", connection, "/services/data/v29.0/chatter/feeds", client=client)

    assert result == Success(payload)
    assert result.ok


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 201, 204])
async def test_success_with_empty_body_has_no_body(connection, json_transport, status_code):
    transport = json_transport(status_code)

    async with transport.client() as client:
        result = await dispatch("DELETE", connection, "/services/data/v29.0/x", client=client)

    assert result == Success(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [199, 300, 302, 400, 401, 404, 500, 503])
async def test_status_outside_2xx_is_a_failure(connection, json_transport, status_code):
    transport = json_transport(status_code, [{"errorCode": "INVALID_SESSION_ID"}])

    async with transport.client() as client:
        result = await dispatch("GET", connection, "/services/data/v29.0/x", client=client)

    assert result == Failure(status_code)
    assert not result.ok


@pytest.mark.asyncio
async def test_malformed_json_on_success_is_reported(connection, json_transport):
    transport = json_transport(200, content=b"<html>not json</html>")

    async with transport.client() as client:
        result = await dispatch("GET", connection, "/services/data/v29.0/x", client=client)

    assert isinstance(result, MalformedBody)
    assert result.status_code == 200
    assert result.text == "<html>not json</html>"


@pytest.mark.asyncio
async def test_transport_error_is_reported_as_status_zero(connection):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await dispatch("GET", connection, "/services/data/v29.0/x", client=client)

    assert result == Failure(0)


@pytest.mark.asyncio
async def test_request_without_body_sends_auth_header_only(connection, json_transport):
    transport = json_transport(200, {})

    async with transport.client() as client:
        await dispatch("GET", connection, "/services/data/v29.0/chatter/users/me", client=client)

    request = transport.requests[0]
    assert str(request.url) == "https://example.my.salesforce.com/services/data/v29.0/chatter/users/me"
    assert request.headers["Authorization"] == "Bearer token-123"
    assert "Content-Type" not in request.headers
    assert request.content == b""


@pytest.mark.asyncio
async def test_request_with_body_is_utf8_json(connection, json_transport):
    transport = json_transport(201, {"id": "0D5new"})
    message = {"body": {"messageSegments": [{"type": "Text", "text": "héllo wörld"}]}}

    async with transport.client() as client:
        result = await dispatch(
            "post", connection, "/services/data/v29.0/chatter/feeds/news/me/feed-items", message, client=client
        )

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json;charset=UTF-8"
    assert json.loads(request.content.decode("utf-8")) == message
    assert "héllo wörld".encode("utf-8") in request.content
    assert result == Success({"id": "0D5new"})


@pytest.mark.asyncio
async def test_each_call_issues_exactly_one_request(connection, json_transport):
    transport = json_transport(500)

    async with transport.client() as client:
        await dispatch("GET", connection, "/services/data/v29.0/x", client=client)

    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_unsupported_method_is_rejected_before_sending(connection, json_transport):
    transport = json_transport(200, {})

    async with transport.client() as client:
        with pytest.raises(ValueError):
            await dispatch("PUT", connection, "/services/data/v29.0/x", client=client)

    assert transport.requests == []


def test_classify_response_edges():
    assert classify_response(200, b"[]") == Success([])
    assert classify_response(200, b"null") == Success(None)
    assert classify_response(299, b"") == Success(None)
    assert classify_response(300, b"{}") == Failure(300)
    assert isinstance(classify_response(200, b"{"), MalformedBody)


def test_encode_component_matches_uri_component_rules():
    assert encode_component("engineering") == "engineering"
    assert encode_component("R&D team") == "R%26D%20team"
    assert encode_component("a+b=c/d?") == "a%2Bb%3Dc%2Fd%3F"
    assert encode_component("#launch") == "%23launch"
    assert encode_component("it's (fine)!~*") == "it's%20(fine)!~*"
    assert encode_component("café") == "caf%C3%A9"
