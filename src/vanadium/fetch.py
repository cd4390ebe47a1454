"""
Fetching a single locator.

fetch() turns one locator into either a document body or a redirect
target. It never follows redirects itself; see vanadium.loader.
"""

import logging
from dataclasses import dataclass
from typing import Union
from urllib.parse import quote

from typing_extensions import assert_never

from .connection_pool import RequestContext
from .exceptions import FileReadError, InvalidEncodingError, MissingLocationError
from .http_primitives import Request, Response
from .url import DataUrl, FileUrl, NetworkUrl, Url, host_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    """A fetched document body."""

    body: str


@dataclass(frozen=True)
class Redirect:
    """A redirect response and its location header."""

    location: str


FetchResult = Union[Ok, Redirect]


def fetch(url: Url, context: RequestContext) -> FetchResult:
    """
    Fetch one locator.

    Args:
        url: The locator to fetch
        context: Connection cache used for network locators

    Returns:
        Ok with the decoded body, or Redirect with the location header

    Raises:
        FileReadError: If a file locator cannot be read as UTF-8
        ConnectError: If the connection cannot be established
        ProtocolError: If the response is malformed or unsupported
    """
    if isinstance(url, FileUrl):
        return Ok(read_file(url.path))
    if isinstance(url, DataUrl):
        return Ok(url.content)
    if isinstance(url, NetworkUrl):
        return fetch_network(url, context)
    assert_never(url)


def read_file(path: str) -> str:
    """Read a whole file as UTF-8 text, line endings untouched."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileReadError(f"{path} is not valid UTF-8", cause=e)
    except OSError as e:
        raise FileReadError(f"cannot read {path}: {e.strerror or e}", cause=e)


# Characters a request target may carry as they are; the rest is
# percent-encoded from UTF-8.
TARGET_SAFE_CHARS = "!$&'()*+,;=:@/?#[]%"


def build_request(url: NetworkUrl, user_agent: str) -> Request:
    """The GET request sent for a network locator."""
    return Request.create(
        method="GET",
        target=quote(url.path, safe=TARGET_SAFE_CHARS),
        headers=[
            ("Host", host_header(url)),
            ("Connection", "keep-alive"),
            ("User-Agent", user_agent),
        ],
    )


def fetch_network(url: NetworkUrl, context: RequestContext) -> FetchResult:
    connection = context.get_or_create(url)
    request = build_request(url, context.config.user_agent)

    logger.debug(f"GET {url}")
    response = connection.handle_request(request)
    context.record_request()

    return classify_response(response)


def classify_response(response: Response) -> FetchResult:
    """
    Turn a complete response into a fetch result.

    Raises:
        MissingLocationError: If a redirect has no location header
        InvalidEncodingError: If the location or body is not valid UTF-8
    """
    if response.is_redirect:
        location = response.get_header("location")
        if location is None:
            raise MissingLocationError(response.status_code)
        try:
            return Redirect(location.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(f"location header is not valid UTF-8: {e}", cause=e)

    try:
        return Ok(response.content.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(f"response body is not valid UTF-8: {e}", cause=e)
