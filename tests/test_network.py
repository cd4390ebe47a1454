"""
Tests for network interfaces, socket transports and mock implementations.
"""

import socket
import ssl

import pytest

from vanadium.exceptions import ConnectError
from vanadium.network import (
    MockNetworkBackend,
    MockNetworkStream,
    NetworkBackend,
    NetworkStream,
    SocketBackend,
    SocketStream,
    TLSStream,
    create_ssl_context,
)


class TestMockNetworkStream:
    """Test cases for MockNetworkStream."""

    def test_read_write_basic(self):
        """Test basic read and write operations."""
        stream = MockNetworkStream()

        stream.write(b"hello world")
        assert stream.written_data == b"hello world"

        stream.add_data(b"hello world")
        assert stream.read(5) == b"hello"
        assert stream.read(100) == b" world"

    def test_read_empty_stream(self):
        """Test reading from an empty stream."""
        stream = MockNetworkStream()
        assert stream.read(10) == b""

    def test_unread_data(self):
        stream = MockNetworkStream(b"abcdef")
        stream.read(2)
        assert stream.unread_data == b"cdef"

    def test_flush_counted(self):
        stream = MockNetworkStream()
        stream.flush()
        assert stream.flush_count == 1

    def test_closed_stream(self):
        """Test operations on a closed stream."""
        stream = MockNetworkStream(b"data")
        stream.close()

        assert stream.is_closed
        with pytest.raises(RuntimeError):
            stream.read(1)
        with pytest.raises(RuntimeError):
            stream.write(b"x")

    def test_extra_info(self):
        stream = MockNetworkStream()
        assert stream.get_extra_info("peername") is None
        stream.set_extra_info("peername", ("example.com", 80))
        assert stream.get_extra_info("peername") == ("example.com", 80)

    def test_implements_interface(self):
        assert isinstance(MockNetworkStream(), NetworkStream)


class TestMockNetworkBackend:
    """Test cases for MockNetworkBackend."""

    def test_new_stream_per_connect(self):
        backend = MockNetworkBackend()
        first = backend.connect_tcp("example.com", 80)
        second = backend.connect_tcp("example.com", 80)

        assert first is not second
        assert backend.connection_count == 2
        assert backend.connections == [("example.com", 80), ("example.com", 80)]

    def test_scripted_responses(self):
        backend = MockNetworkBackend({("example.com", 80): b"HTTP/1.1 200 OK\r\n"})
        stream = backend.connect_tcp("example.com", 80)
        assert stream.read(1024) == b"HTTP/1.1 200 OK\r\n"
        assert backend.connect_tcp("other.com", 80).read(1024) == b""

    def test_add_response_reaches_open_stream(self):
        backend = MockNetworkBackend()
        stream = backend.connect_tcp("example.com", 80)
        backend.add_response("example.com", 80, b"more")
        assert stream.read(10) == b"more"

    def test_tls(self):
        backend = MockNetworkBackend()
        stream = backend.connect_tcp("example.com", 443)
        tls_stream = backend.connect_tls(stream, "example.com")

        assert tls_stream is stream
        assert tls_stream.get_extra_info("ssl_object") is True
        assert tls_stream.get_extra_info("server_hostname") == "example.com"
        assert backend.tls_hosts == ["example.com"]

    def test_refuse(self):
        backend = MockNetworkBackend()
        backend.refuse("example.com", 80)
        with pytest.raises(ConnectError):
            backend.connect_tcp("example.com", 80)
        assert backend.connection_count == 0

    def test_reset(self):
        backend = MockNetworkBackend({("a", 1): b"x"})
        backend.connect_tcp("a", 1)
        backend.reset()
        assert backend.connection_count == 0
        assert backend.connect_tcp("a", 1).read(1) == b""

    def test_implements_interface(self):
        assert isinstance(MockNetworkBackend(), NetworkBackend)


class TestSocketStream:
    """Test SocketStream over a local socket pair."""

    @pytest.fixture
    def socket_pair(self):
        left, right = socket.socketpair()
        yield left, right
        left.close()
        right.close()

    def test_read_write(self, socket_pair):
        left, right = socket_pair
        stream = SocketStream(left)

        stream.write(b"ping")
        stream.flush()
        assert right.recv(4) == b"ping"

        right.sendall(b"pong")
        assert stream.read(4) == b"pong"

    def test_extra_info(self, socket_pair):
        left, _ = socket_pair
        stream = SocketStream(left)
        assert stream.get_extra_info("ssl_object") is False
        assert stream.get_extra_info("socket") is left
        assert stream.get_extra_info("unknown") is None

    def test_tls_extra_info(self, socket_pair):
        left, _ = socket_pair
        tls_sock = create_ssl_context().wrap_socket(
            left, server_hostname="example.com", do_handshake_on_connect=False
        )
        stream = TLSStream(tls_sock)
        try:
            assert stream.get_extra_info("ssl_object") is True
            assert stream.get_extra_info("server_hostname") == "example.com"
            assert stream.get_extra_info("socket") is tls_sock
        finally:
            stream.close()

    def test_is_readable_after_peer_close(self, socket_pair):
        left, right = socket_pair
        stream = SocketStream(left)

        assert stream.get_extra_info("is_readable") is False
        right.close()
        assert stream.get_extra_info("is_readable") is True
        assert stream.read(10) == b""

    def test_close(self, socket_pair):
        left, _ = socket_pair
        stream = SocketStream(left)
        stream.close()
        stream.close()

        assert stream.is_closed
        with pytest.raises(RuntimeError):
            stream.read(1)
        with pytest.raises(RuntimeError):
            stream.write(b"x")


class TestSocketBackend:
    """Test SocketBackend against local endpoints."""

    def test_connect_refused(self):
        probe = socket.socket()
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()

        with pytest.raises(ConnectError) as exc_info:
            SocketBackend().connect_tcp("127.0.0.1", port)
        assert isinstance(exc_info.value.cause, OSError)

    def test_connect_tcp(self):
        server = socket.socket()
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        try:
            stream = SocketBackend().connect_tcp("127.0.0.1", server.getsockname()[1])
            peer, _ = server.accept()
            try:
                stream.write(b"hello")
                assert peer.recv(5) == b"hello"
            finally:
                peer.close()
                stream.close()
        finally:
            server.close()

    def test_tls_requires_socket_stream(self):
        with pytest.raises(TypeError):
            SocketBackend().connect_tls(MockNetworkStream(), "example.com")


class TestSSLContext:
    """Test TLS context settings."""

    def test_verifies_certificates(self):
        context = create_ssl_context()
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2

    def test_loads_root_bundle(self):
        assert create_ssl_context().cert_store_stats()["x509_ca"] > 0
