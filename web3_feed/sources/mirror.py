"""Mirror.xyz source: the public Atom feed of an address or ENS name."""

from __future__ import annotations

import logging

import httpx

from ..config import SourceConfig
from ..core.normalize import platform_feed_item, platform_feed_site
from ..core.text import shorten_handle
from ..core.types import Platform, SourceResult
from ..fetch.feed_parser import parse_feed
from ..logging_utils import log_event

logger = logging.getLogger(__name__)


def mirror_feed_url(handle: str, cfg: SourceConfig) -> str:
    return f"{cfg.mirror_base_url}/{handle}/feed/atom"


async def fetch_mirror(handle: str, client: httpx.AsyncClient, cfg: SourceConfig) -> SourceResult | None:
    feed = await parse_feed(mirror_feed_url(handle, cfg), client)
    if feed is None:
        log_event(logger, "Mirror feed unavailable", event="mirror_skipped", handle=handle)
        return None

    site = platform_feed_site(
        feed,
        Platform.MIRROR,
        default_name=f"{shorten_handle(handle)}'s Mirror",
        default_link=f"{cfg.mirror_base_url}/{handle}",
    )
    items = [platform_feed_item(raw, Platform.MIRROR, cfg.description_length) for raw in feed.items]
    return SourceResult(site=site, items=items)
