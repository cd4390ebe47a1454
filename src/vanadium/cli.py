"""
Command-line entry point for vanadium.

Usage: vanadium [URL] [--max-redirects N] [--user-agent UA] [-v]
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ClientConfig
from .connection_pool import RequestContext
from .exceptions import VanadiumError
from .loader import load
from .url import parse_url

logger = logging.getLogger(__name__)


def build_parser(config: ClientConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vanadium",
        description="Fetch a URL and print a text rendering of it.",
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=config.default_url,
        help=(
            "http(s)://, file:// or data: URL, optionally prefixed with "
            f"view-source: (default: {config.default_url})"
        ),
    )
    parser.add_argument(
        "--max-redirects",
        type=int,
        default=None,
        help=f"maximum redirect chain length (default: {config.max_redirects})",
    )
    parser.add_argument(
        "--user-agent",
        default=None,
        help=f"User-Agent header value (default: {config.user_agent})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log connections, requests and redirects to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        0 on success, 1 if loading failed, 2 for invalid configuration
    """
    try:
        config = ClientConfig()
    except ValueError as e:
        print(f"vanadium: {e}", file=sys.stderr)
        return 2

    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = config.with_overrides(
            max_redirects=args.max_redirects,
            user_agent=args.user_agent,
        )
    except ValueError as e:
        print(f"vanadium: {e}", file=sys.stderr)
        return 2

    try:
        with RequestContext(config=config) as context:
            output = load(parse_url(args.url), context)
    except VanadiumError as e:
        print(f"vanadium: {args.url}: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
