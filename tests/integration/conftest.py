"""
Integration Test Fixtures.

Fixtures for integration tests - real sockets against a local HTTP server
standing in for Home Assistant.
"""

import socket
import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class DroppingHandler(BaseHTTPRequestHandler):
    """Accept service calls, then close the connection without answering."""

    handled = threading.Event()

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        if self.path.startswith("/api/services/"):
            self.handled.set()
            self.close_connection = True
            return
        self.send_response(404)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self) -> None:
        self.send_response(404)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format: str, *args) -> None:
        pass


@pytest.fixture
def dropping_server() -> Generator[tuple[str, threading.Event], None, None]:
    """
    Serve on a random local port and yield (base_url, handled_event).

    Usage:
        def test_x(dropping_server):
            base_url, handled = dropping_server
    """
    handled = threading.Event()
    handler = type("Handler", (DroppingHandler,), {"handled": handled})
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/api", handled
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def closed_port_url() -> str:
    """A base URL on a local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/api"
