"""
Atom/RSS fetching and parsing into RawFeed.

feedparser already unifies most of the RSS and Atom vocabulary (guid/id,
summary/description, content:encoded/content, media:group title and
description). This module only decides precedence between the timestamp
fields, flattens enclosures and media extensions, and guarantees that any
failure surfaces as ``None`` instead of an exception.
"""

from __future__ import annotations

import calendar
import logging
import re
import time
from typing import Any

import feedparser
import httpx

from ..core.types import RawFeed, RawFeedItem
from ..logging_utils import log_event
from .fetcher import fetch_url

logger = logging.getLogger(__name__)

FEED_URL_RE = re.compile(r"^https?://[^\s$.?#].[^\s]*", re.IGNORECASE)

# Podcast/itunes extension keys copied through as-is (":" becomes "_").
EXTENSION_KEYS = (
    "podcast_transcript",
    "itunes_summary",
    "itunes_author",
    "itunes_explicit",
    "itunes_duration",
    "itunes_season",
    "itunes_episode",
    "itunes_episodetype",
    "itunes_image",
)


async def parse_feed(url: str, client: httpx.AsyncClient) -> RawFeed | None:
    """Fetch ``url`` and parse it as a feed.

    Returns None for a non-http(s) URL (without any request), a failed
    fetch, or a body that is not a recognizable feed.
    """
    if not isinstance(url, str) or not FEED_URL_RE.match(url):
        return None

    result = await fetch_url(client, url)
    if result.text is None:
        log_event(logger, "Feed fetch failed", logging.WARNING, event="feed_fetch_failed", url=url, error=result.error)
        return None

    try:
        return parse_feed_text(result.text)
    except Exception as exc:  # noqa: BLE001
        log_event(logger, "Feed parse failed", logging.WARNING, event="feed_parse_failed", url=url, error=str(exc))
        return None


def parse_feed_text(text: str, now_ms: int | None = None) -> RawFeed | None:
    """Parse feed markup already in memory.

    Args:
        text: RSS 2.0 or Atom document
        now_ms: Fetch time in epoch ms used for entries without dates

    Returns:
        RawFeed, or None when the document has no channel/feed element
    """
    parsed = feedparser.parse(text)
    channel = parsed.get("feed") or {}
    entries = parsed.get("entries") or []
    if not parsed.get("version") and not entries:
        return None

    fetched_at = now_ms if now_ms is not None else int(time.time() * 1000)
    return RawFeed(
        title=channel.get("title", "") or "",
        description=channel.get("subtitle", "") or "",
        link=channel.get("link", "") or "",
        image=_feed_image(channel),
        category=_terms(channel.get("tags")),
        items=[_parse_entry(entry, fetched_at) for entry in entries],
    )


def _parse_entry(entry: dict[str, Any], fetched_at: int) -> RawFeedItem:
    created_ts = _epoch_ms(entry.get("created_parsed"))
    published_ts = _epoch_ms(entry.get("published_parsed"))
    updated_ts = _epoch_ms(entry.get("updated_parsed"))

    item = RawFeedItem(
        id=entry.get("id"),
        title=entry.get("title", "") or "",
        description=entry.get("summary", "") or "",
        link=entry.get("link", "") or "",
        author=entry.get("author"),
        published=_first(created_ts, published_ts, fetched_at),
        created=_first(updated_ts, published_ts, created_ts, fetched_at),
        category=_terms(entry.get("tags")),
        content=_content(entry),
        enclosures=list(entry.get("enclosures") or []),
    )

    thumbnails = entry.get("media_thumbnail") or []
    if thumbnails:
        item.media["thumbnail"] = thumbnails
        item.enclosures.extend(thumbnails)
    media_content = entry.get("media_content") or []
    if media_content:
        item.media["thumbnail"] = media_content
        item.enclosures.extend(media_content)

    if item.content:
        item.extensions["content_encoded"] = item.content
    for key in EXTENSION_KEYS:
        if entry.get(key):
            item.extensions[key] = entry[key]
    return item


def _feed_image(channel: dict[str, Any]) -> str:
    image = channel.get("image") or {}
    if isinstance(image, dict):
        href = image.get("href") or image.get("url")
        if href:
            return href
    return channel.get("icon", "") or ""


def _content(entry: dict[str, Any]) -> str | None:
    content = entry.get("content") or []
    for block in content:
        value = block.get("value")
        if value:
            return value
    return None


def _terms(tags: list[dict[str, Any]] | None) -> list[str]:
    return [tag["term"] for tag in tags or [] if tag.get("term")]


def _epoch_ms(value: time.struct_time | None) -> int | None:
    if value is None:
        return None
    return calendar.timegm(value) * 1000


def _first(*values: int | None) -> int:
    for value in values:
        if value is not None:
            return value
    return 0
