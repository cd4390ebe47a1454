"""
Locator model for vanadium.

A locator is one of three immutable forms: a network resource
(http/https), a local file, or inline data. Redirects never mutate
a locator; they produce a new one.
"""

from dataclasses import dataclass, replace
from typing import Tuple, Union

from .exceptions import (
    MalformedUrlError,
    UnsupportedOperationError,
    UnsupportedSchemeError,
)

VIEW_SOURCE_PREFIX = "view-source:"
DEFAULT_PORTS = {"http": 80, "https": 443}

Authority = Tuple[str, int]


@dataclass(frozen=True)
class NetworkUrl:
    """An http or https locator. The path always starts with '/'."""

    secure: bool
    view_source: bool
    host: str
    port: int
    path: str

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise MalformedUrlError(f"path must start with '/': {self.path!r}")
        if not 0 <= self.port <= 65535:
            raise MalformedUrlError(f"port out of range: {self.port}")

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"

    @property
    def authority(self) -> Authority:
        """The (host, port) pair connections are cached under."""
        return (self.host, self.port)

    def __str__(self) -> str:
        prefix = VIEW_SOURCE_PREFIX if self.view_source else ""
        return f"{prefix}{self.scheme}://{host_header(self)}{self.path}"


@dataclass(frozen=True)
class FileUrl:
    """A locator for a local UTF-8 text file."""

    view_source: bool
    path: str

    def __str__(self) -> str:
        prefix = VIEW_SOURCE_PREFIX if self.view_source else ""
        return f"{prefix}file://{self.path}"


@dataclass(frozen=True)
class DataUrl:
    """A locator carrying its content inline."""

    view_source: bool
    media_type: str
    content: str

    def __str__(self) -> str:
        prefix = VIEW_SOURCE_PREFIX if self.view_source else ""
        return f"{prefix}data:{self.media_type},{self.content}"


Url = Union[NetworkUrl, FileUrl, DataUrl]


def parse_url(raw: str) -> Url:
    """
    Parse a locator string.

    Accepted forms are ``[view-source:]http(s)://host[:port]/path``,
    ``[view-source:]file://path`` and ``[view-source:]data:type,content``.

    Args:
        raw: The locator text

    Returns:
        The parsed locator

    Raises:
        UnsupportedSchemeError: If the scheme is not supported
        MalformedUrlError: If the text is not a valid locator
    """
    view_source = raw.startswith(VIEW_SOURCE_PREFIX)
    if view_source:
        raw = raw[len(VIEW_SOURCE_PREFIX):]

    if raw.startswith("data:"):
        media_type, sep, content = raw[len("data:"):].partition(",")
        if not sep:
            raise MalformedUrlError(f"data URL without ',': {raw!r}")
        return DataUrl(view_source=view_source, media_type=media_type, content=content)

    if raw.startswith("file://"):
        return FileUrl(view_source=view_source, path=raw[len("file://"):])

    scheme, sep, rest = raw.partition("://")
    if not sep:
        raise MalformedUrlError(f"missing '://' in {raw!r}")
    if scheme not in DEFAULT_PORTS:
        raise UnsupportedSchemeError(scheme)

    if "/" not in rest:
        rest += "/"
    host, path = rest.split("/", 1)

    port = DEFAULT_PORTS[scheme]
    if ":" in host:
        host, port_text = host.split(":", 1)
        port = _parse_port(port_text)

    if not host:
        raise MalformedUrlError(f"missing host in {raw!r}")

    return NetworkUrl(
        secure=scheme == "https",
        view_source=view_source,
        host=host,
        port=port,
        path="/" + path,
    )


def follow(current: Url, location: str) -> Url:
    """
    Resolve a redirect location against the current locator.

    A location starting with '/' stays on the same scheme and authority;
    anything else is parsed as an absolute locator. Redirected content is
    never shown as source, so view_source is reset.

    Raises:
        UnsupportedOperationError: If current is not a network locator
    """
    if not isinstance(current, NetworkUrl):
        raise UnsupportedOperationError(f"cannot follow a redirect from {current}")

    if not location.startswith("/"):
        return parse_url(location)

    return replace(current, view_source=False, path=location)


def host_header(url: NetworkUrl) -> str:
    """Host header value: the port is included only when non-default."""
    if url.port == DEFAULT_PORTS[url.scheme]:
        return url.host
    return f"{url.host}:{url.port}"


def _parse_port(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise MalformedUrlError(f"invalid port: {text!r}")
    port = int(text)
    if port > 65535:
        raise MalformedUrlError(f"port out of range: {port}")
    return port
