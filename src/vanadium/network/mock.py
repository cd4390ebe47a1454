"""
Mock network implementations for testing.

This module provides mock implementations of NetworkStream and NetworkBackend
that can be used for unit testing without requiring actual network connections.
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from ..exceptions import ConnectError
from .backend import NetworkBackend
from .stream import NetworkStream


class MockNetworkStream(NetworkStream):
    """
    Mock network stream for testing.

    This implementation simulates a network stream in memory,
    allowing tests to verify network behavior without actual I/O.
    """

    def __init__(self, data: bytes = b""):
        """
        Initialize the mock stream.

        Args:
            data: Initial data to be available for reading.
        """
        self._data = data
        self._position = 0
        self._closed = False
        self._extra_info: Dict[str, Any] = {}
        self._write_buffer: List[bytes] = []
        self.flush_count = 0
        self.read_sizes: List[int] = []

    def read(self, max_bytes: int) -> bytes:
        """
        Read up to max_bytes of the scripted data.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            raise RuntimeError("Stream is closed")

        self.read_sizes.append(max_bytes)
        end = min(self._position + max_bytes, len(self._data))
        result = self._data[self._position:end]
        self._position = end
        return result

    def write(self, data: bytes) -> None:
        """
        Record data written to the mock stream.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            raise RuntimeError("Stream is closed")

        self._write_buffer.append(data)

    def flush(self) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        self.flush_count += 1

    def close(self) -> None:
        """Close the mock stream."""
        self._closed = True

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._extra_info.get(name)

    @property
    def is_closed(self) -> bool:
        """Check if the mock stream is closed."""
        return self._closed

    @property
    def written_data(self) -> bytes:
        """Get all data that was written to the stream."""
        return b"".join(self._write_buffer)

    @property
    def unread_data(self) -> bytes:
        """Scripted data the reader has not consumed yet."""
        return self._data[self._position:]

    def set_extra_info(self, name: str, value: Any) -> None:
        self._extra_info[name] = value

    def add_data(self, data: bytes) -> None:
        """
        Add data to be available for reading.

        Args:
            data: The data to add.
        """
        self._data += data


class MockNetworkBackend(NetworkBackend):
    """
    Mock network backend for testing.

    Every connect_tcp call builds a fresh MockNetworkStream preloaded with
    the bytes scripted for that authority, so tests can count how many
    transports the code under test constructed.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, int], bytes]] = None):
        """
        Initialize the mock backend.

        Args:
            responses: Raw response bytes to serve, keyed by (host, port).
        """
        self._responses: Dict[Tuple[str, int], bytes] = dict(responses or {})
        self._refused: Set[Tuple[str, int]] = set()
        self.streams: List[MockNetworkStream] = []
        self.connections: List[Tuple[str, int]] = []
        self.tls_hosts: List[str] = []

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def connect_tcp(self, host: str, port: int) -> MockNetworkStream:
        """
        Create a mock TCP connection.

        Raises:
            ConnectError: If the authority was refused.
        """
        key = (host, port)
        if key in self._refused:
            raise ConnectError(f"cannot connect to {host}:{port}: connection refused")

        stream = MockNetworkStream(self._responses.get(key, b""))
        stream.set_extra_info("socket", len(self.streams))
        stream.set_extra_info("peername", key)
        stream.set_extra_info("sockname", ("127.0.0.1", 12345))
        stream.set_extra_info("ssl_object", False)

        self.streams.append(stream)
        self.connections.append(key)
        return stream

    def connect_tls(self, stream: NetworkStream, host: str) -> NetworkStream:
        """
        Mark a mock stream as TLS.

        The same stream object is returned so scripted data stays readable.
        """
        if isinstance(stream, MockNetworkStream):
            stream.set_extra_info("ssl_object", True)
            stream.set_extra_info("server_hostname", host)
        self.tls_hosts.append(host)
        return stream

    def add_response(self, host: str, port: int, data: bytes) -> None:
        """
        Script more response bytes for an authority.

        Applies to streams opened later and to the most recent open stream.
        """
        key = (host, port)
        self._responses[key] = self._responses.get(key, b"") + data
        for stream, stream_key in zip(reversed(self.streams), reversed(self.connections)):
            if stream_key == key:
                stream.add_data(data)
                break

    def refuse(self, host: str, port: int) -> None:
        """Make later connections to host:port fail with ConnectError."""
        self._refused.add((host, port))

    def reset(self) -> None:
        """Reset all mock connections."""
        self._responses.clear()
        self._refused.clear()
        self.streams.clear()
        self.connections.clear()
        self.tls_hosts.clear()
