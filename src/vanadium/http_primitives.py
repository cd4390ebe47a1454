"""
HTTP primitives for vanadium.

This module defines the data structures exchanged with an HTTP/1.1
connection. All classes are immutable to simplify reasoning.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

# Type aliases for better readability
Headers = List[Tuple[bytes, bytes]]
StatusCode = int

REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def get_header(headers: Headers, name: Union[str, bytes]) -> Optional[bytes]:
    """
    Look up the first header called name, case-insensitively.

    Returns:
        The header value, or None if absent
    """
    name = _to_bytes(name).lower()
    for header_name, value in headers:
        if header_name.lower() == name:
            return value
    return None


@dataclass(frozen=True)
class Request:
    """
    Immutable HTTP request representation.

    Requests never carry a body; only the method, the request target
    and the header list go on the wire.
    """

    method: bytes
    target: bytes
    headers: Headers = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not isinstance(self.method, bytes):
            raise ValueError("method must be bytes")

        if not isinstance(self.target, bytes) or not self.target.startswith(b"/"):
            raise ValueError("target must be bytes starting with '/'")

        for name, value in self.headers:
            if not isinstance(name, bytes) or not isinstance(value, bytes):
                raise ValueError("header names and values must be bytes")

    @classmethod
    def create(
        cls,
        method: Union[str, bytes],
        target: Union[str, bytes],
        headers: Optional[List[Tuple[Union[str, bytes], Union[str, bytes]]]] = None,
    ) -> "Request":
        """
        Create a Request with proper type conversion.

        Args:
            method: HTTP method (GET, HEAD, ...)
            target: Request target, an absolute path
            headers: Optional list of (name, value) header tuples

        Returns:
            New Request instance
        """
        converted = [(_to_bytes(name), _to_bytes(value)) for name, value in headers or []]
        return cls(method=_to_bytes(method), target=_to_bytes(target), headers=converted)

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        return get_header(self.headers, name)


@dataclass(frozen=True)
class Response:
    """
    Immutable HTTP response representation.

    Header names are lower-case and values trimmed, as parsed off the
    wire. content holds exactly content-length bytes.
    """

    status_code: StatusCode
    headers: Headers = field(default_factory=list)
    content: bytes = b""
    reason: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.status_code, int) or not 100 <= self.status_code <= 999:
            raise ValueError("status_code must be an int between 100 and 999")

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        return get_header(self.headers, name)

    @property
    def is_redirect(self) -> bool:
        """True for the statuses a redirect driver should follow."""
        return self.status_code in REDIRECT_STATUS_CODES

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
