"""
Network stream interface for vanadium.

This module defines the NetworkStream interface that every transport
implements: a blocking duplex byte stream. Buffering is left to callers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NetworkStream(ABC):
    """
    Interface for network streams with blocking I/O operations.

    Plain TCP and TLS transports both implement this interface, so nothing
    past the connection cache needs to know which one it is talking to.
    """

    @abstractmethod
    def read(self, max_bytes: int) -> bytes:
        """
        Read data from the stream.

        Args:
            max_bytes: Maximum number of bytes to read.

        Returns:
            The data read from the stream, or b"" once the peer has closed it.

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write all of data to the stream.

        Raises:
            RuntimeError: If the stream is closed.
            OSError: If a network error occurs.
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Push any pending written data to the peer."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the stream and release the underlying socket."""
        pass

    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.

        Args:
            name: The name of the information to retrieve. Common values include:
                 - "peername": The remote endpoint address
                 - "sockname": The local endpoint address
                 - "ssl_object": Whether the stream is TLS encrypted
                 - "server_hostname": The name the certificate was checked against
                 - "is_readable": Whether data or EOF is waiting to be read

        Returns:
            The requested information or None if not available.
        """
        pass

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the stream is closed."""
        pass
