"""
HTTP fetching and feed parsing.

This package handles upstream requests and turns Atom/RSS documents
into RawFeed objects.
"""

from .fetcher import FetchResult, build_client, fetch_url, post_json
from .feed_parser import parse_feed, parse_feed_text

__all__ = [
    "FetchResult",
    "build_client",
    "fetch_url",
    "post_json",
    "parse_feed",
    "parse_feed_text",
]
