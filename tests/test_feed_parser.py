"""Tests for Atom/RSS parsing into RawFeed."""

from __future__ import annotations

import asyncio

import httpx

from web3_feed.fetch.feed_parser import parse_feed, parse_feed_text

from conftest import MIRROR_ATOM, PARAGRAPH_RSS, WEBSITE_RSS

NOW_MS = 1_700_000_000_000
MARCH_1 = 1709251200000
MARCH_2 = 1709337600000
MARCH_3 = 1709424000000


def test_parse_atom_feed_metadata_and_entries():
    feed = parse_feed_text(MIRROR_ATOM, now_ms=NOW_MS)

    assert feed is not None
    assert feed.title == "Brad's Mirror"
    assert feed.description == "Notes from Brad"
    assert feed.link == "https://mirror.xyz/bradgao.eth"
    assert len(feed.items) == 2

    first = feed.items[0]
    assert first.title == "Mirror Post"
    assert first.link == "https://mirror.xyz/bradgao.eth/mirror-post"
    assert first.description == "Short summary"
    assert first.id == "https://mirror.xyz/bradgao.eth/mirror-post"
    assert "Full mirror body" in first.content


def test_atom_timestamps_prefer_updated_for_created():
    feed = parse_feed_text(MIRROR_ATOM, now_ms=NOW_MS)
    first, second = feed.items

    assert first.published == MARCH_1
    assert first.created == MARCH_2
    # no <updated>: created falls back to <published>
    assert second.created == second.published == 1704067200000


def test_rss_feed_items_and_extensions():
    feed = parse_feed_text(WEBSITE_RSS, now_ms=NOW_MS)

    assert feed.title == "Vitalik & Friends"
    assert feed.category == ["crypto"]
    item = feed.items[0]
    assert item.id == "site-post"
    assert item.published == MARCH_3
    assert item.created == MARCH_3
    assert item.category == ["ethereum"]
    assert item.media["thumbnail"][0]["url"] == "https://vitalik.eth.limo/thumb.png"
    enclosure_urls = [e.get("href") or e.get("url") for e in item.enclosures]
    assert "https://vitalik.eth.limo/audio.mp3" in enclosure_urls
    assert "https://vitalik.eth.limo/thumb.png" in enclosure_urls


def test_rss_content_encoded_is_content():
    feed = parse_feed_text(PARAGRAPH_RSS, now_ms=NOW_MS)
    item = feed.items[0]

    assert "Long form paragraph" in item.content
    assert item.extensions["content_encoded"] == item.content
    assert item.description == "undefined"


def test_entries_without_dates_use_fetch_time():
    text = """<?xml version="1.0"?>
<rss version="2.0"><channel><title>T</title>
<item><title>Undated</title><link>https://example.com/a</link></item>
</channel></rss>"""
    feed = parse_feed_text(text, now_ms=NOW_MS)

    assert feed.items[0].published == NOW_MS
    assert feed.items[0].created == NOW_MS


def test_non_feed_document_returns_none():
    assert parse_feed_text("<html><body>Nope</body></html>") is None
    assert parse_feed_text("not xml at all") is None


def test_parse_feed_rejects_non_http_url_without_request(make_client):
    client, router = make_client({})

    async def _run():
        async with client:
            return [
                await parse_feed("ftp://example.com/feed", client),
                await parse_feed("example.com/feed", client),
                await parse_feed("", client),
            ]

    assert asyncio.run(_run()) == [None, None, None]
    assert router.requests == []


def test_parse_feed_returns_none_on_http_error(make_client):
    client, _ = make_client({"https://example.com/feed": httpx.Response(500, text="boom")})

    async def _run():
        async with client:
            return await parse_feed("https://example.com/feed", client)

    assert asyncio.run(_run()) is None


def test_parse_feed_returns_none_on_network_error(make_client):
    client, _ = make_client({"https://example.com/feed": httpx.ConnectError("refused")})

    async def _run():
        async with client:
            return await parse_feed("https://example.com/feed", client)

    assert asyncio.run(_run()) is None


def test_parse_feed_success(make_client):
    client, router = make_client({"https://mirror.xyz/": httpx.Response(200, text=MIRROR_ATOM)})

    async def _run():
        async with client:
            return await parse_feed("https://mirror.xyz/bradgao.eth/feed/atom", client)

    feed = asyncio.run(_run())
    assert feed is not None
    assert [i.title for i in feed.items] == ["Mirror Post", "Older Mirror Post"]
    assert router.urls() == ["https://mirror.xyz/bradgao.eth/feed/atom"]
