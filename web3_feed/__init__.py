"""
web3-feed - article aggregation for blockchain identities.

This package collects posts for an address or domain from a
contenthash-resolved website feed, Mirror.xyz and Paragraph.com,
normalizes them into one item schema and returns a merged,
time-ordered, bounded result.

Main entry point is the CLI via `web3-feed articles` command.

Example:
    $ web3-feed articles 0xf1268b5eae72617ddb2cfcaa82d379155b675dfd --limit 10
"""

__all__ = ["__version__", "aggregate", "AggregateQuery", "AggregateResult", "get_site_feed", "sanitize"]
__version__ = "0.1.0"

from .aggregator import aggregate
from .core.text import sanitize
from .core.types import AggregateQuery, AggregateResult
from .sources.website import get_site_feed
