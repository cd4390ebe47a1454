"""
Pytest configuration for vanadium tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import pytest
from typing import List, Optional, Tuple

from vanadium.config import ClientConfig
from vanadium.connection_pool import RequestContext
from vanadium.network.mock import MockNetworkBackend


CONFIG_ENV_VARS = (
    "VANADIUM_USER_AGENT",
    "VANADIUM_MAX_REDIRECTS",
    "VANADIUM_READ_CHUNK_SIZE",
    "VANADIUM_DEFAULT_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ClientConfig() independent of the caller's environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def build_response(
    status: int = 200,
    body: bytes = b"",
    headers: Optional[List[Tuple[str, str]]] = None,
    reason: str = "OK",
    content_length: bool = True,
) -> bytes:
    """Serialize a raw HTTP/1.1 response."""
    lines = [f"HTTP/1.1 {status} {reason}"]
    for name, value in headers or []:
        lines.append(f"{name}: {value}")
    if content_length:
        lines.append(f"Content-Length: {len(body)}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + body


def build_redirect(location: str, status: int = 301) -> bytes:
    return build_response(status, headers=[("Location", location)], reason="Moved")


@pytest.fixture
def http_response():
    """Factory for raw HTTP response bytes."""
    return build_response


@pytest.fixture
def http_redirect():
    """Factory for raw redirect response bytes."""
    return build_redirect


@pytest.fixture
def mock_backend():
    """A mock backend with nothing scripted."""
    return MockNetworkBackend()


@pytest.fixture
def config():
    return ClientConfig()


@pytest.fixture
def context(mock_backend, config):
    """A connection cache over the mock backend."""
    ctx = RequestContext(backend=mock_backend, config=config)
    yield ctx
    ctx.close()


@pytest.fixture
def sample_html():
    """Sample document for rendering tests."""
    return (
        "<html>\n"
        "<head><title>Example</title></head>\n"
        "<body><p>1 &lt; 2 &amp; 3 &gt; 2</p></body>\n"
        "</html>\n"
    )
