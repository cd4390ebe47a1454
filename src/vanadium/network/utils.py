"""
Network utilities for vanadium.

This module provides helper functions for socket creation
and TLS context setup.
"""

import socket
import ssl
from typing import List, Optional

import certifi


def create_connection_socket(host: str, port: int) -> socket.socket:
    """
    Open a blocking TCP connection to host:port.

    Args:
        host: Hostname or IP address
        port: Port number

    Returns:
        Connected socket object

    Raises:
        OSError: If name resolution or the connection fails
    """
    sock = socket.create_connection((host, port))

    # Requests are written in one piece; don't hold them back
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)

    return sock


def create_ssl_context(
    alpn_protocols: Optional[List[str]] = None,
    cafile: Optional[str] = None,
) -> ssl.SSLContext:
    """
    Create a client SSL context.

    Certificates are verified against the certifi root bundle unless
    cafile names another one. Hostname checking is always on and no
    client certificate is loaded.

    Args:
        alpn_protocols: Optional list of ALPN protocols to negotiate
        cafile: Path to an alternative CA bundle

    Returns:
        Configured SSL context
    """
    context = ssl.create_default_context(cafile=cafile or certifi.where())
    context.verify_mode = ssl.CERT_REQUIRED
    context.check_hostname = True

    if alpn_protocols:
        context.set_alpn_protocols(alpn_protocols)

    context.options |= ssl.OP_NO_COMPRESSION
    context.minimum_version = ssl.TLSVersion.TLSv1_2

    return context


def get_socket_info(sock: socket.socket) -> dict:
    """
    Get information about a socket.

    Args:
        sock: Socket object

    Returns:
        Dictionary with peername, sockname and fileno (None when unavailable)
    """
    info = {}

    try:
        info['peername'] = sock.getpeername()
    except OSError:
        info['peername'] = None

    try:
        info['sockname'] = sock.getsockname()
    except OSError:
        info['sockname'] = None

    try:
        info['fileno'] = sock.fileno()
    except OSError:
        info['fileno'] = None

    return info
