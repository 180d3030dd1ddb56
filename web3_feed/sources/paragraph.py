"""
Paragraph.com source.

Paragraph has no address-to-feed mapping, so the adapter works in two
phases:
1. Ask the Firefly article index for the address's posts and read the
   Paragraph username out of the first post URL that carries one
2. Fetch that user's RSS feed; when it is unavailable, fall back to the
   posts already returned by the index

Username extraction is driven by the patterns in SourceConfig. Paragraph
post URLs look like ``paragraph.com/@name/slug``; custom-domain blogs
have no ``@`` and the host itself is used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
import time

import httpx

from ..config import SourceConfig
from ..core.normalize import paragraph_record_item, platform_feed_item, platform_feed_site
from ..core.types import ArticleItem, FireflyArticleRecord, Platform, SiteInfo, SourceResult
from ..fetch.feed_parser import parse_feed
from ..logging_utils import log_event
from .firefly import PLATFORM_PARAGRAPH, fetch_articles

logger = logging.getLogger(__name__)


@dataclass
class ParagraphLookup:
    """Outcome of the index phase: the username and index-derived items."""

    username: str = ""
    items: list[ArticleItem] = field(default_factory=list)


def extract_username(url: str, cfg: SourceConfig) -> str:
    """Read a Paragraph username from a post URL.

    Examples:
        >>> extract_username("paragraph.com/@pioneering-spirit/post", SourceConfig())
        'pioneering-spirit'
        >>> extract_username("blog.example.com/post", SourceConfig())
        'blog.example.com'
    """
    if not url:
        return ""
    if "@" in url:
        match = re.search(cfg.paragraph_handle_pattern, url)
    else:
        match = re.match(cfg.paragraph_host_pattern, url)
    if match is None:
        return ""
    return match.group(1) or ""


def lookup_from_records(
    records: list[FireflyArticleRecord],
    address: str,
    cfg: SourceConfig,
    fetched_at: int,
) -> ParagraphLookup:
    """Find the username and build fallback items from index records.

    Only Paragraph records (platform 2) are considered. The first non-empty
    username wins; later records never replace it.
    """
    paragraph_records = [r for r in records if r.platform == PLATFORM_PARAGRAPH]

    username = ""
    for record in paragraph_records:
        url = record.content_body.get("url")
        if isinstance(url, str) and url:
            username = extract_username(url, cfg)
            if username:
                break

    handle = username or address
    items = [
        paragraph_record_item(record, handle, cfg.paragraph_base_url, cfg.description_length, fetched_at)
        for record in paragraph_records
    ]
    return ParagraphLookup(username=username, items=items)


async def fetch_paragraph(address: str, client: httpx.AsyncClient, cfg: SourceConfig) -> SourceResult | None:
    fetched_at = int(time.time() * 1000)
    records = await fetch_articles(address, cfg.paragraph_lookup_limit, client, cfg)
    lookup = lookup_from_records(records, address, cfg, fetched_at)
    if not lookup.username:
        log_event(logger, "No Paragraph username found", event="paragraph_skipped", address=address)
        return None

    username = lookup.username
    default_name = f"{username}'s Paragraph"
    default_link = f"{cfg.paragraph_base_url}/@{username}"

    feed = await parse_feed(f"{cfg.paragraph_rss_url}/@{username}", client)
    if feed is None:
        log_event(
            logger,
            "Paragraph feed unavailable, using index records",
            event="paragraph_index_fallback",
            username=username,
            items=len(lookup.items),
        )
        return SourceResult(
            site=SiteInfo(platform=Platform.PARAGRAPH, name=default_name, link=default_link),
            items=lookup.items,
        )

    site = platform_feed_site(feed, Platform.PARAGRAPH, default_name, default_link)
    items = [platform_feed_item(raw, Platform.PARAGRAPH, cfg.description_length) for raw in feed.items]
    return SourceResult(site=site, items=items)
