"""
HTTP/1.1 connection implementation for vanadium.

This module implements the HTTP11Connection class that manages
HTTP/1.1 protocol communication over a NetworkStream.
"""

import logging
import time
from enum import Enum
from typing import Any, Dict, List, Optional

import h11

from .exceptions import (
    ConnectError,
    MissingContentLengthError,
    ProtocolError,
    UnsupportedEncodingError,
)
from .http_primitives import Headers, Request, Response, get_header
from .network.stream import NetworkStream

logger = logging.getLogger(__name__)

# Bodies framed by these headers are not supported
UNSUPPORTED_ENCODING_HEADERS = (b"transfer-encoding", b"content-encoding")


class ConnectionState(Enum):
    """States of an HTTP/1.1 connection."""
    NEW = "new"           # Connection created, not yet used
    ACTIVE = "active"     # Connection handling a request
    IDLE = "idle"         # Connection available for reuse
    CLOSED = "closed"     # Connection closed, cannot be reused


class HTTP11Connection:
    """
    HTTP/1.1 connection manager.

    This class manages a single keep-alive HTTP/1.1 connection over a
    NetworkStream. Incoming bytes are buffered by h11, which never hands
    out more than one response at a time: anything the transport delivered
    past the current response stays queued for the next exchange.
    """

    DEFAULT_READ_CHUNK_SIZE = 65536  # 64KB chunks

    def __init__(self, stream: NetworkStream, read_chunk_size: Optional[int] = None):
        """
        Initialize HTTP/1.1 connection.

        Args:
            stream: The NetworkStream to use for communication
            read_chunk_size: Bytes requested from the stream per read
        """
        self._stream = stream
        self._h11_connection = h11.Connection(h11.CLIENT)
        self._state = ConnectionState.NEW
        self._read_chunk_size = read_chunk_size or self.DEFAULT_READ_CHUNK_SIZE

        # Metrics
        self._request_count = 0
        self._bytes_sent = 0
        self._bytes_received = 0
        self._total_request_time = 0.0
        self._errors_count = 0
        self._last_request_time: Optional[float] = None

        logger.debug("HTTP/1.1 connection initialized")

    @property
    def stream(self) -> NetworkStream:
        return self._stream

    def handle_request(self, request: Request) -> Response:
        """
        Handle a complete HTTP request/response cycle.

        Args:
            request: The HTTP request to send

        Returns:
            The HTTP response, with its whole body read

        Raises:
            ConnectError: If the connection is not usable or the transport fails
            ProtocolError: If the response is malformed or unsupported
        """
        self._acquire_connection()

        start_time = time.monotonic()
        self._request_count += 1
        self._last_request_time = time.time()

        try:
            self._send_request(request)
            response = self._receive_response()
        except Exception as e:
            self._errors_count += 1
            logger.debug(f"Request {self._request_count} failed: {e}")
            # The byte stream is out of step; it cannot carry another request
            self.close()
            raise

        duration = time.monotonic() - start_time
        self._total_request_time += duration
        logger.debug(
            f"Request {self._request_count}: {request.method.decode()} "
            f"{request.target.decode()} -> {response.status_code} ({duration:.3f}s)"
        )

        self._release_connection()
        return response

    def _send_request(self, request: Request) -> None:
        """
        Serialize the request with h11 and write it out.

        Args:
            request: The request to send
        """
        try:
            data = self._h11_connection.send(
                h11.Request(
                    method=request.method,
                    target=request.target,
                    headers=request.headers,
                )
            )
            data += self._h11_connection.send(h11.EndOfMessage())
        except h11.LocalProtocolError as e:
            raise ProtocolError(f"invalid request: {e}", cause=e)

        try:
            self._stream.write(data)
            self._stream.flush()
        except OSError as e:
            raise ConnectError(f"failed to send request: {e}", cause=e)

        self._bytes_sent += len(data)

    def _receive_response(self) -> Response:
        """
        Receive a complete HTTP response.

        Returns:
            The HTTP response with its body
        """
        event = self._next_event()
        while isinstance(event, h11.InformationalResponse):
            logger.debug(f"Skipping interim {event.status_code} response")
            event = self._next_event()

        if not isinstance(event, h11.Response):
            raise ProtocolError(f"expected a response, got {type(event).__name__}")

        status_code = event.status_code
        reason = bytes(event.reason)
        headers: Headers = [
            (bytes(name).lower(), bytes(value).strip()) for name, value in event.headers
        ]
        self._check_framing(headers)

        chunks: List[bytes] = []
        while True:
            event = self._next_event()
            if isinstance(event, h11.Data):
                chunks.append(bytes(event.data))
            elif isinstance(event, h11.EndOfMessage):
                break
            else:
                raise ProtocolError(f"unexpected {type(event).__name__} in response body")

        return Response(
            status_code=status_code,
            headers=headers,
            content=b"".join(chunks),
            reason=reason,
        )

    def _check_framing(self, headers: Headers) -> None:
        """
        Reject bodies this client cannot decode.

        Raises:
            UnsupportedEncodingError: If a transfer or content encoding is used
            MissingContentLengthError: If no content-length is declared
        """
        for name in UNSUPPORTED_ENCODING_HEADERS:
            value = get_header(headers, name)
            if value is not None:
                raise UnsupportedEncodingError(name.decode(), value.decode("latin-1"))

        if get_header(headers, b"content-length") is None:
            raise MissingContentLengthError()

    def _next_event(self) -> Any:
        """
        Get the next h11 event, reading from the stream as needed.

        Raises:
            ProtocolError: If the peer sends malformed data or closes early
            ConnectError: If the transport fails
        """
        while True:
            try:
                event = self._h11_connection.next_event()
            except h11.RemoteProtocolError as e:
                # h11 itself refuses transfer codings other than chunked
                if e.error_status_hint == 501:
                    raise UnsupportedEncodingError("transfer-encoding", str(e)) from e
                raise ProtocolError(f"malformed response: {e}", cause=e)

            if event is h11.NEED_DATA:
                try:
                    data = self._stream.read(self._read_chunk_size)
                except OSError as e:
                    raise ConnectError(f"failed to read response: {e}", cause=e)
                if not data:
                    raise ProtocolError("Connection closed unexpectedly")
                self._h11_connection.receive_data(data)
                self._bytes_received += len(data)
                continue

            if isinstance(event, h11.ConnectionClosed):
                raise ProtocolError("Connection closed by server")

            return event

    def _acquire_connection(self) -> None:
        """
        Acquire connection for use.

        Raises:
            ConnectError: If connection is not available
        """
        if self._state == ConnectionState.CLOSED:
            raise ConnectError("Connection is closed")

        if self._state == ConnectionState.ACTIVE:
            raise ConnectError("Connection is busy")

        self._state = ConnectionState.ACTIVE

    def _release_connection(self) -> None:
        """Return to idle if the connection can carry another request."""
        if self._state != ConnectionState.ACTIVE:
            return

        if self._can_reuse_connection():
            self._h11_connection.start_next_cycle()
            self._state = ConnectionState.IDLE
        else:
            logger.debug("Server does not keep the connection alive; closing")
            self.close()

    def _can_reuse_connection(self) -> bool:
        """Both sides finished the exchange and neither asked to close."""
        return (
            self._h11_connection.our_state is h11.DONE
            and self._h11_connection.their_state is h11.DONE
        )

    def close(self) -> None:
        """
        Close the connection and cleanup resources.
        """
        if self._state != ConnectionState.CLOSED:
            self._state = ConnectionState.CLOSED
            self._stream.close()
            logger.debug(f"Connection closed after {self._request_count} requests")

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_closed(self) -> bool:
        """Check if connection is closed."""
        return self._state == ConnectionState.CLOSED or self._stream.is_closed

    @property
    def is_idle(self) -> bool:
        """Check if connection is idle and available for reuse."""
        return self._state == ConnectionState.IDLE

    def has_expired(self) -> bool:
        """
        Check if the connection can no longer carry a request.

        An idle connection with readable data was closed by the server
        (or sent bytes nobody asked for); either way it is unusable.
        """
        if self.is_closed:
            return True
        if self._state == ConnectionState.IDLE:
            return bool(self._stream.get_extra_info("is_readable"))
        return False

    @property
    def metrics(self) -> Dict[str, Any]:
        """
        Get connection metrics.

        Returns:
            Dictionary with connection metrics
        """
        return {
            "request_count": self._request_count,
            "bytes_sent": self._bytes_sent,
            "bytes_received": self._bytes_received,
            "total_request_time": self._total_request_time,
            "errors_count": self._errors_count,
            "last_request_time": self._last_request_time,
            "average_request_time": (
                self._total_request_time / self._request_count
                if self._request_count > 0 else 0.0
            ),
            "state": self._state.value,
        }
