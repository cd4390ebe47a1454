"""
vanadium - a minimal text-mode user-agent

Resolves a URL into a transport, issues a single HTTP/1.1 request
(following redirects), and renders a text approximation of the document.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .config import ClientConfig
from .url import DataUrl, FileUrl, NetworkUrl, Url, follow, parse_url
from .http_primitives import Request, Response
from .http11 import HTTP11Connection, ConnectionState
from .connection_pool import RequestContext
from .fetch import Ok, Redirect, fetch
from .loader import load
from .render import render, render_source
from .exceptions import (
    VanadiumError,
    UrlError,
    UnsupportedSchemeError,
    MalformedUrlError,
    UnsupportedOperationError,
    ConnectError,
    ProtocolError,
    UnsupportedEncodingError,
    MissingContentLengthError,
    MissingLocationError,
    InvalidEncodingError,
    RedirectError,
    RedirectCycleError,
    TooManyRedirectsError,
    FileReadError,
)

__all__ = [
    "ClientConfig",
    "DataUrl",
    "FileUrl",
    "NetworkUrl",
    "Url",
    "follow",
    "parse_url",
    "Request",
    "Response",
    "HTTP11Connection",
    "ConnectionState",
    "RequestContext",
    "Ok",
    "Redirect",
    "fetch",
    "load",
    "render",
    "render_source",
    "VanadiumError",
    "UrlError",
    "UnsupportedSchemeError",
    "MalformedUrlError",
    "UnsupportedOperationError",
    "ConnectError",
    "ProtocolError",
    "UnsupportedEncodingError",
    "MissingContentLengthError",
    "MissingLocationError",
    "InvalidEncodingError",
    "RedirectError",
    "RedirectCycleError",
    "TooManyRedirectsError",
    "FileReadError",
]
