"""
Unit Test Fixtures.

All HTTP traffic goes through httpx.MockTransport. Unit tests never open
sockets.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from hass_cli.api import HomeAssistantAPI
from hass_cli.client import HomeAssistantClient
from hass_cli.core.config import Settings

BASE_URL = "http://hass.test:8123/api"
TOKEN = "test-token"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    """Complete connection settings."""
    return Settings(hass_api_url=BASE_URL, hass_api_token=TOKEN, _env_file=None)


@pytest.fixture
def empty_settings() -> Settings:
    """Settings with neither URL nor token."""
    return Settings(_env_file=None)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests captured by the mock transport, in order."""
    return []


@pytest.fixture
def make_transport(requests_seen: list[httpx.Request]) -> Callable[[Handler], httpx.MockTransport]:
    """
    Build a MockTransport that records every request before handling it.

    Usage:
        transport = make_transport(lambda request: httpx.Response(200, json=[]))
    """

    def _make(handler: Handler) -> httpx.MockTransport:
        def _recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.MockTransport(_recording)

    return _make


@pytest.fixture
def make_api(settings: Settings, make_transport) -> Callable[..., HomeAssistantAPI]:
    """Build a HomeAssistantAPI over a mock transport."""

    def _make(handler: Handler, api_settings: Settings | None = None) -> HomeAssistantAPI:
        return HomeAssistantAPI(api_settings or settings, transport=make_transport(handler))

    return _make


@pytest.fixture
def make_client(settings: Settings, make_transport) -> Callable[..., HomeAssistantClient]:
    """Build a HomeAssistantClient over a mock transport."""

    def _make(handler: Handler, client_settings: Settings | None = None) -> HomeAssistantClient:
        return HomeAssistantClient(client_settings or settings, transport=make_transport(handler))

    return _make


@pytest.fixture
def raising() -> Callable[[Exception], Handler]:
    """Build a handler that fails every request with the given exception."""

    def _make(exc: Exception) -> Handler:
        def _handler(request: httpx.Request) -> Any:
            raise exc

        return _handler

    return _make
