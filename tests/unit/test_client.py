"""Unit tests for the Home Assistant HTTP client."""

import errno
import json
import socket

import httpx
import pytest

from hass_cli.client import (
    DEFAULT_TIMEOUT,
    HomeAssistantClient,
    HttpResponse,
    NoResponse,
    SendFailure,
    decode_body,
    error_code,
)
from hass_cli.core.config import Settings


def _chained(exc: httpx.TransportError, cause: BaseException) -> httpx.TransportError:
    """Raise exc from cause and return it with the chain attached."""
    try:
        try:
            raise cause
        except BaseException as inner:
            raise exc from inner
    except httpx.TransportError as outer:
        return outer


class TestClientConfiguration:
    """Tests for headers, base URL and timeout."""

    def test_defaults(self, settings):
        client = HomeAssistantClient(settings)

        assert client.base_url == "http://hass.test:8123/api"
        assert client.timeout == DEFAULT_TIMEOUT == 10.0

    def test_strips_trailing_slash(self):
        client = HomeAssistantClient(
            Settings(hass_api_url="http://hass.test:8123/api/", hass_api_token="t", _env_file=None)
        )

        assert client.base_url == "http://hass.test:8123/api"

    def test_headers(self, settings):
        client = HomeAssistantClient(settings)

        assert client.headers == {
            "Authorization": "Bearer test-token",
            "Content-Type": "application/json",
        }

    @pytest.mark.asyncio
    async def test_request_carries_headers_and_base_path(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"message": "API running."}))

        result = await client.get("/states/sun.sun")
        await client.close()

        assert isinstance(result, HttpResponse)
        request = requests_seen[0]
        assert str(request.url) == "http://hass.test:8123/api/states/sun.sun"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json=[]))

        await client.get("/calendars/calendar.home", params={"start": "2024-01-01", "end": None})
        await client.close()

        assert dict(requests_seen[0].url.params) == {"start": "2024-01-01"}

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json=[]))

        await client.post("/services/light/turn_on", json={"entity_id": "light.kitchen"})
        await client.close()

        request = requests_seen[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {"entity_id": "light.kitchen"}

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, make_client):
        client = make_client(lambda request: httpx.Response(200))
        await client.get("/")

        await client.close()
        await client.close()

        assert client._client is None


class TestTransportResults:
    """Tests for how each kind of attempt is reported."""

    @pytest.mark.asyncio
    async def test_error_status_is_a_response(self, make_client):
        client = make_client(lambda request: httpx.Response(404, json={"message": "Entity not found."}))

        result = await client.get("/states/light.nope")
        await client.close()

        assert result == HttpResponse(
            status=404,
            reason="Not Found",
            body={"message": "Entity not found."},
            headers=result.headers,
            content=result.content,
        )
        assert result.ok is False

    @pytest.mark.asyncio
    async def test_disconnect_is_no_response(self, make_client, raising):
        client = make_client(raising(httpx.RemoteProtocolError("Server disconnected without sending a response.")))

        result = await client.post("/services/homeassistant/reload_all", json={})
        await client.close()

        assert result == NoResponse(
            message="Server disconnected without sending a response.",
            code="ECONNRESET",
        )

    @pytest.mark.asyncio
    async def test_timeout_is_no_response(self, make_client, raising):
        client = make_client(raising(httpx.ReadTimeout("timed out")))

        result = await client.get("/states")
        await client.close()

        assert isinstance(result, NoResponse)
        assert result.code == "ECONNABORTED"

    @pytest.mark.asyncio
    async def test_connect_error_is_no_response(self, make_client, raising):
        client = make_client(raising(httpx.ConnectError("")))

        result = await client.get("/states")
        await client.close()

        assert result == NoResponse(message="ConnectError", code=None)

    @pytest.mark.asyncio
    async def test_missing_base_url_is_send_failure(self, empty_settings):
        client = HomeAssistantClient(empty_settings)

        result = await client.get("/states")
        await client.close()

        assert isinstance(result, SendFailure)
        assert "protocol" in result.message.lower()

    @pytest.mark.asyncio
    async def test_unsupported_scheme_is_send_failure(self):
        client = HomeAssistantClient(
            Settings(hass_api_url="ftp://hass.test/api", hass_api_token="t", _env_file=None)
        )

        result = await client.get("/states")
        await client.close()

        assert isinstance(result, SendFailure)

    @pytest.mark.asyncio
    async def test_non_ascii_token_is_send_failure(self, make_client, requests_seen):
        client = make_client(
            lambda request: httpx.Response(200),
            Settings(hass_api_url="http://hass.test/api", hass_api_token="tokén", _env_file=None),
        )

        result = await client.get("/")
        await client.close()

        assert isinstance(result, SendFailure)
        assert "ascii" in result.message
        assert requests_seen == []

    @pytest.mark.asyncio
    async def test_unserializable_body_is_send_failure(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200))

        result = await client.post("/template", json={"template": object()})
        await client.close()

        assert isinstance(result, SendFailure)
        assert requests_seen == []


class TestErrorCode:
    """Tests for mapping httpx exceptions to connection error codes."""

    def test_any_timeout(self):
        assert error_code(httpx.ConnectTimeout("x")) == "ECONNABORTED"
        assert error_code(httpx.PoolTimeout("x")) == "ECONNABORTED"

    def test_reset_from_os_error(self):
        exc = _chained(httpx.ReadError("reset"), ConnectionResetError(errno.ECONNRESET, "reset"))

        assert error_code(exc) == "ECONNRESET"

    def test_refused_from_os_error(self):
        exc = _chained(httpx.ConnectError("refused"), ConnectionRefusedError(errno.ECONNREFUSED, "refused"))

        assert error_code(exc) == "ECONNREFUSED"

    def test_dns_failure(self):
        exc = _chained(httpx.ConnectError("dns"), socket.gaierror(socket.EAI_NONAME, "Name or service not known"))

        assert error_code(exc) == "ENOTFOUND"

    def test_remote_disconnect(self):
        assert error_code(httpx.RemoteProtocolError("Server disconnected without sending a response.")) == "ECONNRESET"

    def test_other_protocol_error(self):
        assert error_code(httpx.RemoteProtocolError("illegal status line")) is None

    def test_unknown(self):
        assert error_code(httpx.NetworkError("??")) is None


class TestDecodeBody:
    """Tests for response body decoding."""

    def test_json(self):
        assert decode_body(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_text(self):
        assert decode_body(httpx.Response(200, text="2024-01-01 ERROR something")) == "2024-01-01 ERROR something"

    def test_empty(self):
        assert decode_body(httpx.Response(200)) is None

    def test_binary(self):
        body = decode_body(httpx.Response(200, content=b"\xff\xd8\xff\xe0\x00\x10JFIF"))

        assert isinstance(body, str)
