"""
Per-authority connection cache.

This module provides RequestContext, which owns one keep-alive
HTTP/1.1 connection per (host, port) and hands it out for every
request to that authority.
"""

import logging
from typing import Any, Dict, Optional

from .config import ClientConfig
from .exceptions import UnsupportedOperationError
from .http11 import HTTP11Connection
from .network import NetworkBackend, SocketBackend
from .url import Authority, NetworkUrl, Url

logger = logging.getLogger(__name__)


class RequestContext:
    """
    Connection cache keyed by authority.

    Every transport this cache opens is owned by it; callers borrow a
    connection for a single request/response exchange and must not keep
    it. There is no size bound and no eviction apart from replacing
    connections the server has closed. The cache is not thread-safe.
    """

    def __init__(
        self,
        backend: Optional[NetworkBackend] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize the cache.

        Args:
            backend: Network backend to open transports with
                     (defaults to SocketBackend)
            config: Client configuration (defaults to ClientConfig())
        """
        self._backend = backend if backend is not None else SocketBackend()
        self._config = config if config is not None else ClientConfig()

        # Connection storage: {(host, port) -> connection}
        self._connections: Dict[Authority, HTTP11Connection] = {}

        # Metrics
        self._total_connections_created = 0
        self._total_connections_closed = 0
        self._total_requests_handled = 0

    @property
    def config(self) -> ClientConfig:
        return self._config

    def get_or_create(self, url: Url) -> HTTP11Connection:
        """
        Get the cached connection for the locator's authority.

        A new connection (plain or TLS, per the locator) is opened and
        cached when the authority has none, or when the cached one was
        closed by the server.

        Args:
            url: A network locator

        Returns:
            The connection for url.authority

        Raises:
            UnsupportedOperationError: If url is not a network locator
            ConnectError: If a new connection cannot be established
        """
        if not isinstance(url, NetworkUrl):
            raise UnsupportedOperationError(f"no connection for non-network locator {url}")

        authority = url.authority
        connection = self._connections.get(authority)

        if connection is not None:
            if not connection.has_expired():
                logger.debug(f"Reusing connection to {url.host}:{url.port}")
                return connection

            logger.debug(f"Discarding closed connection to {url.host}:{url.port}")
            connection.close()
            del self._connections[authority]
            self._total_connections_closed += 1

        connection = self._connect(url)
        self._connections[authority] = connection
        self._total_connections_created += 1
        return connection

    def _connect(self, url: NetworkUrl) -> HTTP11Connection:
        stream = self._backend.connect_tcp(url.host, url.port)
        if url.secure:
            stream = self._backend.connect_tls(stream, url.host)

        logger.debug(
            f"Created new {'TLS' if url.secure else 'TCP'} connection to {url.host}:{url.port}"
        )
        return HTTP11Connection(stream, read_chunk_size=self._config.read_chunk_size)

    def record_request(self) -> None:
        self._total_requests_handled += 1

    def __contains__(self, authority: object) -> bool:
        return authority in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def close(self) -> None:
        """Close every cached connection."""
        for connection in self._connections.values():
            if not connection.is_closed:
                connection.close()
            self._total_connections_closed += 1
        self._connections.clear()
        logger.debug(f"Connection cache closed. Closed {self._total_connections_closed} connections")

    @property
    def metrics(self) -> Dict[str, Any]:
        """
        Get cache metrics.

        Returns:
            Dictionary with cache metrics
        """
        return {
            "total_connections": len(self._connections),
            "total_connections_created": self._total_connections_created,
            "total_connections_closed": self._total_connections_closed,
            "total_requests_handled": self._total_requests_handled,
            "authorities": sorted(f"{host}:{port}" for host, port in self._connections),
        }

    def __enter__(self) -> "RequestContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
