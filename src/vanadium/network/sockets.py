"""
Blocking socket transports for vanadium.

SocketStream carries plain TCP; TLSStream carries the same socket
wrapped in a verified TLS client session. SocketBackend builds both.
"""

import logging
import select
import socket
import ssl
from typing import Any, Dict, Optional

from ..exceptions import ConnectError
from .backend import NetworkBackend
from .stream import NetworkStream
from .utils import create_connection_socket, create_ssl_context, get_socket_info

logger = logging.getLogger(__name__)


class SocketStream(NetworkStream):
    """NetworkStream over a connected, blocking TCP socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._closed = False
        self._extra_info: Dict[str, Any] = get_socket_info(sock)
        self._extra_info["socket"] = sock
        self._extra_info["ssl_object"] = False

    @property
    def socket(self) -> socket.socket:
        return self._sock

    def read(self, max_bytes: int) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        return self._sock.recv(max_bytes)

    def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        self._sock.sendall(data)

    def flush(self) -> None:
        # sendall() leaves nothing pending
        pass

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._sock.close()

    def get_extra_info(self, name: str) -> Optional[Any]:
        if name == "is_readable":
            return self._is_readable()
        return self._extra_info.get(name)

    def _is_readable(self) -> bool:
        # An idle keep-alive socket becomes readable when the peer closes it
        if self._closed:
            return False
        readable, _, _ = select.select([self._sock], [], [], 0)
        return bool(readable)

    @property
    def is_closed(self) -> bool:
        return self._closed


class TLSStream(SocketStream):
    """NetworkStream over a TLS-wrapped socket."""

    def __init__(self, sock: ssl.SSLSocket) -> None:
        super().__init__(sock)
        self._extra_info["ssl_object"] = True
        self._extra_info["server_hostname"] = sock.server_hostname


class SocketBackend(NetworkBackend):
    """
    Network backend built on the standard socket and ssl modules.

    All operations block; there are no timeouts.
    """

    def __init__(self, ssl_context: Optional[ssl.SSLContext] = None) -> None:
        self._ssl_context = ssl_context

    @property
    def ssl_context(self) -> ssl.SSLContext:
        if self._ssl_context is None:
            self._ssl_context = create_ssl_context(alpn_protocols=["http/1.1"])
        return self._ssl_context

    def connect_tcp(self, host: str, port: int) -> SocketStream:
        try:
            sock = create_connection_socket(host, port)
        except OSError as e:
            raise ConnectError(f"cannot connect to {host}:{port}: {e}", cause=e)

        logger.debug(f"TCP connection established to {host}:{port}")
        return SocketStream(sock)

    def connect_tls(self, stream: NetworkStream, host: str) -> TLSStream:
        if not isinstance(stream, SocketStream):
            raise TypeError("TLS can only be started on a SocketStream")

        try:
            tls_sock = self.ssl_context.wrap_socket(stream.socket, server_hostname=host)
        except (OSError, ValueError) as e:
            # ssl.SSLError (handshake, certificate) is an OSError subclass
            stream.close()
            raise ConnectError(f"TLS handshake with {host} failed: {e}", cause=e)

        logger.debug(f"TLS established with {host} ({tls_sock.version()})")
        return TLSStream(tls_sock)
