"""
Loading a locator through its redirect chain.

load() fetches a locator, follows redirects until a document body
arrives, and renders that body.
"""

import logging
from typing import List, Optional

from typing_extensions import assert_never

from .connection_pool import RequestContext
from .exceptions import RedirectCycleError, TooManyRedirectsError, VanadiumError
from .fetch import Ok, Redirect, fetch
from .render import render, render_source
from .url import Url, follow

logger = logging.getLogger(__name__)


def load(
    url: Url,
    context: RequestContext,
    max_redirects: Optional[int] = None,
) -> str:
    """
    Fetch a locator, following redirects, and render the result.

    The rendering mode comes from url.view_source alone; locators reached
    through redirects never change it.

    Args:
        url: The locator to load
        context: Connection cache shared by every request of the chain
        max_redirects: Maximum chain length (defaults to the context's config)

    Returns:
        The rendered text, or the numbered source when view_source is set

    Raises:
        RedirectCycleError: If a redirect leads back into the chain
        TooManyRedirectsError: If the chain grows past max_redirects
        VanadiumError: Any fetch failure, unchanged
    """
    if max_redirects is None:
        max_redirects = context.config.max_redirects

    visited: List[Url] = [url]
    current = url

    try:
        while True:
            result = fetch(current, context)

            if isinstance(result, Ok):
                body = result.body
                break
            elif not isinstance(result, Redirect):
                assert_never(result)

            target = follow(current, result.location)
            if target in visited:
                raise RedirectCycleError(str(target))
            if len(visited) >= max_redirects:
                raise TooManyRedirectsError(max_redirects)

            logger.debug(f"Redirect {len(visited)}: {current} -> {target}")
            visited.append(target)
            current = target
    except VanadiumError as e:
        logger.error(f"Loading {current} failed: {e}")
        raise

    if url.view_source:
        return render_source(body)
    return render(body)
