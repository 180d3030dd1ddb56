"""
Website (contenthash) source.

A domain whose on-chain record carries a contenthash usually points at a
static site. Its feed is found in three steps:
1. Map the domain to a fetchable origin (eth.limo, .cc, .build gateways)
2. Ask the WordPress reader API for the origin's subscribe URL
3. Parse that URL as Atom/RSS

``get_site_feed`` exposes the lookup on its own and raises FeedLookupError;
``fetch_website`` is the aggregator adapter and degrades to None instead.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import SourceConfig
from ..core.identity import REGEX_DOTBIT, is_ens_name, is_valid_url, resolve_fetch_origin
from ..core.normalize import website_item, website_site
from ..core.text import sanitize
from ..core.types import RawFeed, SourceResult
from ..fetch.feed_parser import parse_feed
from ..fetch.fetcher import fetch_url
from ..logging_utils import log_event

logger = logging.getLogger(__name__)

NOT_FOUND = "Not Found"
EMPTY_QUERY = "Empty Query"
INVALID_QUERY = "Invalid Query"


class FeedLookupError(ValueError):
    """Raised when a site feed cannot be located or parsed."""


async def discover_feed_url(origin: str, client: httpx.AsyncClient, cfg: SourceConfig) -> str | None:
    """Return the first subscribe URL the discovery service knows for ``origin``."""
    result = await fetch_url(client, cfg.feed_discovery_url, params={"url": origin})
    data = result.json()
    if not isinstance(data, dict):
        log_event(
            logger,
            "Feed discovery failed",
            logging.WARNING,
            event="feed_discovery_failed",
            origin=origin,
            error=result.error or "invalid json",
        )
        return None
    feeds = data.get("feeds") or []
    if not feeds or not isinstance(feeds[0], dict):
        return None
    return feeds[0].get("subscribe_URL") or None


async def load_site_feed(query: str, client: httpx.AsyncClient, cfg: SourceConfig) -> RawFeed:
    """Locate and parse the feed for a domain or URL.

    Raises:
        FeedLookupError: With one of the EMPTY_QUERY, INVALID_QUERY or
            NOT_FOUND messages
    """
    if not query:
        raise FeedLookupError(EMPTY_QUERY)
    if "https" in query and not is_valid_url(query) and not is_ens_name(query) and not REGEX_DOTBIT.match(query):
        raise FeedLookupError(INVALID_QUERY)

    feed_url = await discover_feed_url(resolve_fetch_origin(query), client, cfg)
    if not feed_url:
        raise FeedLookupError(NOT_FOUND)

    feed = await parse_feed(feed_url, client)
    if feed is None or not feed.items:
        raise FeedLookupError(NOT_FOUND)
    return feed


async def get_site_feed(
    query: str,
    client: httpx.AsyncClient,
    cfg: SourceConfig,
    mode: str = "list",
    limit: int = 10,
) -> dict[str, Any]:
    """Look up a site's feed and render it as a JSON-ready listing.

    Args:
        query: Domain, ENS-style name or URL
        client: Shared async client
        cfg: Source endpoints
        mode: "list" drops heavy item fields, "full" keeps them
        limit: Maximum number of items returned

    Returns:
        Dict with title, description, link, image and items
    """
    feed = await load_site_feed(query, client, cfg)
    cap = cfg.description_length

    items = []
    for raw in feed.items[:limit]:
        data = raw.to_dict(mode)
        data["body"] = (raw.description or "").strip()
        data["description"] = sanitize(raw.description, cap)
        if raw.title:
            data["title"] = sanitize(raw.title, cap)
        items.append(data)

    return {
        "title": sanitize(feed.title, cap),
        "description": sanitize(feed.description, cap),
        "link": feed.link,
        "image": feed.image,
        "items": items,
    }


async def fetch_website(
    domain: str,
    client: httpx.AsyncClient,
    cfg: SourceConfig,
) -> SourceResult | None:
    """Aggregator adapter: every feed item tagged ``website``.

    The feed is not truncated here; the aggregator limits the merged set.
    """
    try:
        feed = await load_site_feed(domain, client, cfg)
    except FeedLookupError as exc:
        log_event(logger, "Website feed unavailable", event="website_skipped", domain=domain, reason=str(exc))
        return None

    cap = cfg.description_length
    return SourceResult(
        site=website_site(feed, cap),
        items=[website_item(raw, cap) for raw in feed.items],
    )
