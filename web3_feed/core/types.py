"""
Core data types for the web3 article feed.

This module defines the data structures that flow through the pipeline:
- RawFeed / RawFeedItem: Generic Atom/RSS shape produced by the feed parser
- FireflyArticleRecord: One record from the Firefly article index
- ArticleItem / SiteInfo: Canonical output shapes shared by every source
- SourceResult / SourceOutcome: What an adapter produced, and how it settled
- AggregateQuery / AggregateResult: Aggregator input and output
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Platform(str, Enum):
    """Content source tag carried by every item and site."""

    WEBSITE = "website"
    MIRROR = "mirror"
    PARAGRAPH = "paragraph"


# Fields removed from feed items when only a lightweight listing is requested.
LIST_MODE_DROPPED = ("content", "enclosures", "category", "media")


@dataclass
class RawFeedItem:
    """One entry of a parsed Atom/RSS feed.

    Attributes:
        id: guid (RSS) or id (Atom)
        title: Entry title, possibly overridden by media:group
        description: summary (Atom) or description (RSS), raw markup
        link: Entry URL
        author: Author name or dc:creator
        published: Epoch ms, created > pubDate/published > fetch time
        created: Epoch ms, updated > pubDate/published > created > fetch time
        category: Category terms
        content: Long-form content (content:encoded or Atom content)
        enclosures: Enclosure, media:thumbnail and media:content entries
        media: Thumbnail metadata from the media namespace
        extensions: Podcast/itunes fields keyed with "_" instead of ":"
    """

    title: str = ""
    description: str = ""
    link: str = ""
    published: int = 0
    created: int = 0
    id: str | None = None
    author: str | None = None
    category: list[str] = field(default_factory=list)
    content: str | None = None
    enclosures: list[Any] = field(default_factory=list)
    media: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    def to_dict(self, mode: str = "list") -> dict[str, Any]:
        """Render the item for a site-feed listing.

        id and author are never exposed. In "list" mode the heavy fields
        (content, enclosures, category, media) are dropped as well.
        """
        data = asdict(self)
        extensions = data.pop("extensions")
        data.pop("id")
        data.pop("author")
        data.update(extensions)
        if mode == "list":
            for key in LIST_MODE_DROPPED:
                data.pop(key, None)
        return data


@dataclass
class RawFeed:
    """Feed-level metadata plus its entries."""

    title: str = ""
    description: str = ""
    link: str = ""
    image: str = ""
    category: list[str] = field(default_factory=list)
    items: list[RawFeedItem] = field(default_factory=list)


@dataclass
class FireflyArticleRecord:
    """A record from the Firefly article index.

    content_body arrives as a JSON string and is stored decoded. Its shape
    depends on platform: 1 is Mirror (``{"content": {"title", "body"}}``),
    2 is Paragraph (``{"title", "url", "slug", "markdown"}``).
    """

    platform: int
    original_id: str
    content_timestamp: int | None
    content_body: dict[str, Any]


@dataclass
class ArticleItem:
    """Canonical article shape returned to callers.

    Attributes:
        title: Article headline
        link: Absolute URL of the article
        description: Sanitized, length-capped summary
        published: Publication time in epoch milliseconds
        body: Raw long-form content, uncapped
        platform: Source the article came from
    """

    title: str
    link: str
    description: str
    published: int
    body: str
    platform: Platform


@dataclass
class SiteInfo:
    """Publication metadata for one contributing platform."""

    platform: Platform
    name: str
    description: str = ""
    image: str = ""
    link: str = ""


@dataclass
class SourceResult:
    """What one adapter produced: its site plus normalized items."""

    site: SiteInfo
    items: list[ArticleItem] = field(default_factory=list)


@dataclass
class SourceOutcome:
    """Settled outcome of one adapter task.

    Either result or error is populated, never both. Both are None when
    the adapter had nothing to contribute.
    """

    platform: Platform
    result: SourceResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None and bool(self.result.items)


@dataclass
class AggregateQuery:
    """Aggregator input as received from the caller."""

    address: str = ""
    domain: str = ""
    contenthash: str = ""
    limit: int | None = None


@dataclass
class AggregateResult:
    """Merged, sorted and bounded output.

    error is only set to carry the "Invalid Param" indicator.
    """

    sites: list[SiteInfo] = field(default_factory=list)
    items: list[ArticleItem] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "sites": [_plain(asdict(site)) for site in self.sites],
            "items": [_plain(asdict(item)) for item in self.items],
        }
        if self.error is not None:
            data["error"] = self.error
        return data


def _plain(data: dict[str, Any]) -> dict[str, Any]:
    platform = data.get("platform")
    if isinstance(platform, Platform):
        data["platform"] = platform.value
    return data
