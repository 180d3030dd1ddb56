"""
Source adapters.

Each adapter turns one upstream service into a SourceResult or None.
"""

from .mirror import fetch_mirror
from .paragraph import fetch_paragraph
from .website import FeedLookupError, fetch_website, get_site_feed

__all__ = [
    "fetch_mirror",
    "fetch_paragraph",
    "fetch_website",
    "get_site_feed",
    "FeedLookupError",
]
