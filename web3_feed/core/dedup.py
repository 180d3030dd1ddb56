"""
Deduplication of merged source items.

A feed can list the same post twice (an entry re-published under the same
URL, or the index and the RSS feed overlapping). Items are removed based on:
1. Exact link matches within the same platform
2. Optionally, fuzzy title similarity within the same platform

Items from different platforms are never compared, so a post cross-posted
to Mirror and Paragraph keeps both copies and both sites.
"""

from __future__ import annotations

from rapidfuzz import fuzz

from .types import ArticleItem, Platform


def dedup_items(items: list[ArticleItem], threshold: int | None = None) -> list[ArticleItem]:
    """Remove duplicate items, keeping the first occurrence.

    Args:
        items: Merged items from every adapter
        threshold: Similarity threshold (0-100) for fuzzy title matching;
            None disables title matching entirely

    Returns:
        Deduplicated list of items, preserving original order
    """
    seen_links: set[tuple[Platform, str]] = set()
    titles: dict[Platform, list[str]] = {}
    kept: list[ArticleItem] = []

    for item in items:
        link_key = (item.platform, item.link)
        if item.link and link_key in seen_links:
            continue
        platform_titles = titles.setdefault(item.platform, [])
        if threshold is not None and item.title and _is_similar_title(item.title, platform_titles, threshold):
            continue
        if item.link:
            seen_links.add(link_key)
        if item.title:
            platform_titles.append(item.title)
        kept.append(item)

    return kept


def _is_similar_title(title: str, titles: list[str], threshold: int) -> bool:
    for existing in titles:
        if fuzz.ratio(title, existing) >= threshold:
            return True
    return False
