"""
Per-dialect mapping into ArticleItem and SiteInfo.

Each upstream shape gets its own function so precedence rules stay
explicit: a site feed discovered for a website, an Atom/RSS feed on
Mirror or Paragraph, and a Paragraph-shaped record from the Firefly
article index. Nothing here does I/O.
"""

from __future__ import annotations

from .text import sanitize
from .types import ArticleItem, FireflyArticleRecord, Platform, RawFeed, RawFeedItem, SiteInfo

# Some upstream feeds serialize a missing description as this literal.
UNDEFINED_LITERAL = "undefined"


def clean_undefined(value: str | None) -> str:
    if not value or value == UNDEFINED_LITERAL:
        return ""
    return value


def website_item(raw: RawFeedItem, cap: int) -> ArticleItem:
    """Map a discovered site-feed entry; body is the raw summary."""
    return ArticleItem(
        title=sanitize(raw.title, cap),
        link=raw.link,
        description=sanitize(raw.description, cap),
        published=raw.published,
        body=(raw.description or "").strip(),
        platform=Platform.WEBSITE,
    )


def website_site(feed: RawFeed, cap: int) -> SiteInfo:
    return SiteInfo(
        platform=Platform.WEBSITE,
        name=sanitize(feed.title, cap),
        description=sanitize(feed.description, cap),
        image=feed.image or "",
        link=feed.link or "",
    )


def platform_feed_item(raw: RawFeedItem, platform: Platform, cap: int) -> ArticleItem:
    """Map a Mirror or Paragraph feed entry; body prefers long-form content."""
    description = clean_undefined(raw.description)
    return ArticleItem(
        title=sanitize(raw.title),
        link=raw.link,
        description=sanitize(description, cap),
        published=raw.published,
        body=raw.content or description,
        platform=platform,
    )


def platform_feed_site(
    feed: RawFeed,
    platform: Platform,
    default_name: str,
    default_link: str,
) -> SiteInfo:
    return SiteInfo(
        platform=platform,
        name=feed.title or default_name,
        description=clean_undefined(feed.description),
        image=feed.image or "",
        link=feed.link or default_link,
    )


def paragraph_record_item(
    record: FireflyArticleRecord,
    handle: str,
    paragraph_base_url: str,
    cap: int,
    fetched_at: int,
) -> ArticleItem:
    """Map a Paragraph record (platform 2) from the article index.

    The record's own url wins for the link; otherwise the link is built
    from ``handle`` (the discovered username, or the address) and the slug.
    """
    content = record.content_body
    url = content.get("url") or ""
    if url:
        link = url if url.startswith(("http://", "https://")) else f"https://{url}"
    else:
        link = f"{paragraph_base_url}/@{handle}/{content.get('slug', '')}"

    markdown = content.get("markdown") or ""
    published = fetched_at
    if record.content_timestamp:
        published = int(record.content_timestamp) * 1000

    return ArticleItem(
        title=sanitize(content.get("title")),
        link=link,
        description=sanitize(clean_undefined(markdown), cap),
        published=published,
        body=markdown,
        platform=Platform.PARAGRAPH,
    )
