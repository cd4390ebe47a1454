"""
Network backend interface for vanadium.

This module defines the NetworkBackend interface that provides
abstractions for opening plain and TLS connections.
"""

from abc import ABC, abstractmethod
from .stream import NetworkStream


class NetworkBackend(ABC):
    """
    Interface for network backend implementations.

    The connection cache asks a backend for every new transport, which lets
    tests substitute in-memory streams for real sockets.
    """

    @abstractmethod
    def connect_tcp(self, host: str, port: int) -> NetworkStream:
        """
        Connect to a TCP endpoint.

        Args:
            host: The hostname or IP address to connect to.
            port: The port number to connect to.

        Returns:
            A NetworkStream representing the TCP connection.

        Raises:
            ConnectError: If the connection fails.
        """
        pass

    @abstractmethod
    def connect_tls(self, stream: NetworkStream, host: str) -> NetworkStream:
        """
        Upgrade a TCP stream to TLS.

        The server certificate is verified against a trusted root bundle
        and must match host. No client certificate is offered.

        Args:
            stream: The existing TCP NetworkStream to upgrade.
            host: The hostname for TLS certificate verification.

        Returns:
            A NetworkStream representing the TLS connection.

        Raises:
            ConnectError: If the handshake or certificate validation fails.
        """
        pass
