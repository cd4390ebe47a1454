"""
Network backend components for vanadium.

This module provides the low-level transport abstractions:
the stream interface, the socket backend and in-memory doubles.
"""

from .backend import NetworkBackend
from .stream import NetworkStream
from .sockets import SocketBackend, SocketStream, TLSStream
from .mock import MockNetworkBackend, MockNetworkStream
from .utils import (
    create_connection_socket,
    create_ssl_context,
    get_socket_info,
)

__all__ = [
    "NetworkBackend",
    "NetworkStream",
    "SocketBackend",
    "SocketStream",
    "TLSStream",
    "MockNetworkBackend",
    "MockNetworkStream",
    "create_connection_socket",
    "create_ssl_context",
    "get_socket_info",
]
