"""
pytest configuration and fixtures.
"""

import socket
import threading
from pathlib import Path
from typing import Callable, Generator, List, Optional

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpconnector import ConnectorConfig, HTTPConnector
from httpconnector.app import create_router
from httpconnector.handlers import StaticContentLoader
from httpconnector.http import Router
from httpconnector.session import SessionManager
from httpconnector.users import InMemoryUserRepository


def build_form_request(path: str, body: str, cookie: Optional[str] = None) -> bytes:
    """Raw POST with a form-encoded body."""
    encoded = body.encode("utf-8")
    head = (
        f"POST {path} HTTP/1.1\r\n"
        "Host: localhost:8080\r\n"
        "Content-Type: application/x-www-form-urlencoded\r\n"
        f"Content-Length: {len(encoded)}\r\n"
    )
    if cookie:
        head += f"Cookie: {cookie}\r\n"
    return (head + "\r\n").encode("utf-8") + encoded


def build_get_request(target: str, cookie: Optional[str] = None) -> bytes:
    """Raw GET without a body."""
    head = f"GET {target} HTTP/1.1\r\nHost: localhost:8080\r\n"
    if cookie:
        head += f"Cookie: {cookie}\r\n"
    return (head + "\r\n").encode("utf-8")


@pytest.fixture
def form_request():
    """Factory for raw form POST requests."""
    return build_form_request


@pytest.fixture
def get_request():
    """Factory for raw GET requests."""
    return build_get_request


@pytest.fixture
def sample_get_request() -> bytes:
    """GET /login with credentials in the query string."""
    return (
        b"GET /login?account=gugu&password=password HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"Connection: keep-alive\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """POST /register with a form body."""
    return build_form_request("/register", "account=gugu&password=password&email=hkkang@woowahan.com")


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A small content root mirroring the bundled static/ layout."""
    (tmp_path / "css").mkdir()
    (tmp_path / "index.html").write_text("<h1>index</h1>", encoding="utf-8")
    (tmp_path / "login.html").write_text("<h1>login</h1>", encoding="utf-8")
    (tmp_path / "register.html").write_text("<h1>register</h1>", encoding="utf-8")
    (tmp_path / "401.html").write_text("<h1>401</h1>", encoding="utf-8")
    (tmp_path / "css" / "styles.css").write_text("body { margin: 0; }", encoding="utf-8")
    return tmp_path


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def sessions() -> SessionManager:
    return SessionManager()


@pytest.fixture
def router(users, sessions, static_dir) -> Router:
    """Application router with isolated users, sessions and content root."""
    return create_router(users, sessions, StaticContentLoader(static_dir))


@pytest.fixture
def config() -> ConnectorConfig:
    """Default test connector configuration."""
    return ConnectorConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        workers=2,
        timeout=5.0,
        log_level="WARNING",
    )


class TestServer:
    """Test server helper that runs the connector in a background thread."""

    __test__ = False

    def __init__(self, connector: HTTPConnector):
        self.connector = connector
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.connector.address[1]

    def start(self):
        """Start the connector in a background thread."""
        self._thread = threading.Thread(target=self.connector.run, daemon=True)
        self._thread.start()
        if not self.connector.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the connector."""
        self.connector.stop()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def send(self, raw: bytes) -> bytes:
        """Send raw request bytes and read until the server closes."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def start_server() -> Generator[Callable[..., TestServer], None, None]:
    """Factory that starts connectors and stops them after the test."""
    started: List[TestServer] = []

    def factory(config: ConnectorConfig, **kwargs) -> TestServer:
        server = TestServer(HTTPConnector(config, **kwargs))
        server.start()
        started.append(server)
        return server

    yield factory

    for server in started:
        server.stop()


@pytest.fixture
def test_server(start_server, config, static_dir, users, sessions) -> TestServer:
    """A running connector on an ephemeral port."""
    config.static_dir = str(static_dir)
    return start_server(config, users=users, sessions=sessions)
