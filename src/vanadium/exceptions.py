"""
Custom exceptions for vanadium.

This module defines the exception hierarchy used throughout
the user-agent. None of these errors are recovered internally:
each one aborts the current load.
"""

from typing import Optional


class VanadiumError(Exception):
    """Base exception for all vanadium errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class UrlError(VanadiumError):
    """Raised when a locator cannot be parsed or used."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"URL error: {message}", cause)


class UnsupportedSchemeError(UrlError):
    """Raised for schemes other than http, https, file and data."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unsupported scheme {scheme!r}")
        self.scheme = scheme


class MalformedUrlError(UrlError):
    """Raised when a locator is syntactically invalid."""


class UnsupportedOperationError(UrlError):
    """Raised when an operation is applied to the wrong kind of locator."""


class ConnectError(VanadiumError):
    """Raised when a socket cannot be opened or the TLS handshake fails."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Connection error: {message}", cause)


class ProtocolError(VanadiumError):
    """Raised when there's an error with HTTP protocol handling."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)


class UnsupportedEncodingError(ProtocolError):
    """Raised when a response uses a transfer or content encoding."""

    def __init__(self, header: str, value: str) -> None:
        super().__init__(f"unsupported {header}: {value}")
        self.header = header
        self.value = value


class MissingContentLengthError(ProtocolError):
    """Raised when a response does not declare its content-length."""

    def __init__(self) -> None:
        super().__init__("missing content-length header")


class MissingLocationError(ProtocolError):
    """Raised when a redirect response has no location header."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"{status_code} response without location header")
        self.status_code = status_code


class InvalidEncodingError(ProtocolError):
    """Raised when a response body is not valid UTF-8."""


class RedirectError(VanadiumError):
    """Base class for redirect chain failures."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Redirect error: {message}", cause)


class RedirectCycleError(RedirectError):
    """Raised when a redirect points back into the current chain."""

    def __init__(self, url: str) -> None:
        super().__init__(f"redirect cycle back to {url}")
        self.url = url


class TooManyRedirectsError(RedirectError):
    """Raised when the redirect chain exceeds its maximum length."""

    def __init__(self, max_redirects: int) -> None:
        super().__init__(f"more than {max_redirects} redirects")
        self.max_redirects = max_redirects


class FileReadError(VanadiumError):
    """Raised when a local file cannot be read as UTF-8 text."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"File error: {message}", cause)
