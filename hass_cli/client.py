"""
HTTP Client for the Home Assistant REST API.

Provides an async HTTP client bound to the configured base URL and bearer
token. Every attempt resolves to exactly one transport result:

    HttpResponse  - a status line was received (any status, 2xx or not)
    NoResponse    - the request went out but no response ever came back
    SendFailure   - the request could not be built or sent at all

Transport problems are never raised to callers. The classifier in
hass_cli.outcome turns these results into outcomes.
"""

import errno
import socket
from dataclasses import dataclass, field
from typing import Any

import httpx

from hass_cli.core.config import Settings
from hass_cli.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0

# errno-style names reported as NoResponse.code.
TIMEOUT_CODE = "ECONNABORTED"
DISCONNECT_CODE = "ECONNRESET"
UNRESOLVED_HOST_CODE = "ENOTFOUND"


@dataclass(frozen=True)
class HttpResponse:
    """A response with a status line, whatever the status."""

    status: int
    reason: str
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class NoResponse:
    """The request was dispatched but the connection produced no response."""

    message: str
    code: str | None = None


@dataclass(frozen=True)
class SendFailure:
    """The request was never dispatched."""

    message: str


TransportResult = HttpResponse | NoResponse | SendFailure


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON when possible, else as text. Empty is None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_code(exc: BaseException) -> str | None:
    """Derive a connection error code from an httpx transport exception."""
    if isinstance(exc, httpx.TimeoutException):
        return TIMEOUT_CODE

    seen: set[int] = set()
    cause = exc.__cause__ or exc.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        if isinstance(cause, socket.gaierror):
            return UNRESOLVED_HOST_CODE
        if isinstance(cause, OSError) and cause.errno in errno.errorcode:
            return errno.errorcode[cause.errno]
        cause = cause.__cause__ or cause.__context__

    if isinstance(exc, httpx.RemoteProtocolError) and "disconnected" in str(exc).lower():
        return DISCONNECT_CODE
    return None


def _message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class HomeAssistantClient:
    """
    HTTP client for Home Assistant REST API communication.

    Features:
    - Base URL and bearer token from Settings
    - Fixed request timeout (10 seconds)
    - Structured logging of requests/responses
    - Transport errors folded into tagged results instead of exceptions

    Usage:
        async with HomeAssistantClient(get_settings()) as client:
            result = await client.get("/states")
    """

    def __init__(
        self,
        settings: Settings,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Connection settings. Missing values are tolerated.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.settings = settings
        self.base_url = (settings.hass_api_url or "").rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.hass_api_token or ''}",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "HomeAssistantClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> TransportResult:
        """
        Make one HTTP request to Home Assistant.

        Args:
            method: HTTP method (GET, POST)
            path: API path relative to the base URL (e.g., /states)
            params: Query parameters; None values are dropped
            json: JSON request body

        Returns:
            HttpResponse, NoResponse or SendFailure
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}

        log_with_source(logger, "cli", "debug", "API request", method=method, path=path, params=query)

        # Header, URL and body encoding happen here; nothing has been sent yet.
        try:
            client = self._get_client()
            request = client.build_request(method, path, params=query or None, json=json)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            return self._not_sent(method, path, e)

        try:
            response = await client.send(request)
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            return self._not_sent(method, path, e)
        except httpx.TransportError as e:
            code = error_code(e)
            log_with_source(
                logger, "cli", "warning", "API request failed",
                method=method, path=path, error=_message(e), code=code,
            )
            return NoResponse(message=_message(e), code=code)

        log_with_source(
            logger, "cli", "debug", "API response",
            method=method, path=path, status_code=response.status_code,
        )

        return HttpResponse(
            status=response.status_code,
            reason=response.reason_phrase,
            body=decode_body(response),
            headers=dict(response.headers),
            content=response.content,
        )

    def _not_sent(self, method: str, path: str, exc: Exception) -> SendFailure:
        log_with_source(
            logger, "cli", "warning", "API request not sent",
            method=method, path=path, error=_message(exc),
        )
        return SendFailure(message=_message(exc))

    async def get(self, path: str, **kwargs: Any) -> TransportResult:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> TransportResult:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)
