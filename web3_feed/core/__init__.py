"""
Core domain models and pure logic.

This package contains data types, text cleanup, identity rules,
normalization and deduplication. Nothing here performs I/O.
"""

from .types import AggregateQuery, AggregateResult, ArticleItem, Platform, SiteInfo
from .text import sanitize, shorten_handle
from .dedup import dedup_items

__all__ = [
    "AggregateQuery",
    "AggregateResult",
    "ArticleItem",
    "Platform",
    "SiteInfo",
    "sanitize",
    "shorten_handle",
    "dedup_items",
]
