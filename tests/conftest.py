"""Shared fixtures: canned upstream payloads and a routed mock HTTP client."""

from __future__ import annotations

import json

import httpx
import pytest

from web3_feed.config import AppConfig

PARAGRAPH_ADDRESS = "0xf1268b5eae72617ddb2cfcaa82d379155b675dfd"

MIRROR_ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Brad's Mirror</title>
  <subtitle>Notes from Brad</subtitle>
  <link href="https://mirror.xyz/bradgao.eth"/>
  <id>https://mirror.xyz/bradgao.eth</id>
  <updated>2024-03-05T00:00:00Z</updated>
  <entry>
    <title>Mirror Post</title>
    <id>https://mirror.xyz/bradgao.eth/mirror-post</id>
    <link href="https://mirror.xyz/bradgao.eth/mirror-post"/>
    <published>2024-03-01T00:00:00Z</published>
    <updated>2024-03-02T00:00:00Z</updated>
    <summary>Short summary</summary>
    <content type="html">&lt;p&gt;Full mirror body&lt;/p&gt;</content>
  </entry>
  <entry>
    <title>Older Mirror Post</title>
    <id>https://mirror.xyz/bradgao.eth/older</id>
    <link href="https://mirror.xyz/bradgao.eth/older"/>
    <published>2024-01-01T00:00:00Z</published>
    <summary>Older summary</summary>
  </entry>
</feed>
"""

PARAGRAPH_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Pioneering Spirit</title>
    <description>undefined</description>
    <link>https://paragraph.com/@pioneering-spirit</link>
    <item>
      <title>Paragraph Post</title>
      <link>https://paragraph.com/@pioneering-spirit/paragraph-post</link>
      <guid>paragraph-post</guid>
      <pubDate>Sat, 02 Mar 2024 00:00:00 GMT</pubDate>
      <description>undefined</description>
      <content:encoded><![CDATA[<p>Long form paragraph</p>]]></content:encoded>
    </item>
  </channel>
</rss>
"""

WEBSITE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Vitalik &amp; Friends</title>
    <description>Dankrad &lt;b&gt;and&lt;/b&gt; others</description>
    <link>https://vitalik.eth.limo</link>
    <category>crypto</category>
    <item>
      <title>Site Post</title>
      <link>https://vitalik.eth.limo/general/2024/03/03/post.html</link>
      <guid>site-post</guid>
      <author>vitalik@example.com (Vitalik)</author>
      <pubDate>Sun, 03 Mar 2024 00:00:00 GMT</pubDate>
      <description>  A   post about things  </description>
      <category>ethereum</category>
      <media:thumbnail url="https://vitalik.eth.limo/thumb.png"/>
      <enclosure url="https://vitalik.eth.limo/audio.mp3" type="audio/mpeg" length="10"/>
    </item>
  </channel>
</rss>
"""


def rss_feed(*items: tuple[str, str]) -> str:
    """Minimal RSS 2.0 document from (title, RFC 822 pubDate) pairs, in the given order."""
    entries = "".join(
        f"<item><title>{title}</title>"
        f"<link>https://x.eth.limo/{title.lower().replace(' ', '-')}</link>"
        f"<pubDate>{date}</pubDate><description>{title} summary</description></item>"
        for title, date in items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?><rss version="2.0"><channel>'
        f"<title>X</title><link>https://x.eth.limo</link>{entries}</channel></rss>"
    )


# Oldest first: feed order is the reverse of publication order.
ASCENDING_RSS = rss_feed(
    ("Oldest", "Mon, 01 Jan 2024 00:00:00 GMT"),
    ("Middle", "Thu, 01 Feb 2024 00:00:00 GMT"),
    ("Newest", "Fri, 01 Mar 2024 00:00:00 GMT"),
)


def firefly_payload(*records: dict) -> dict:
    return {"data": list(records)}


def paragraph_record(
    title: str,
    url: str | None = None,
    slug: str = "post",
    timestamp: int | None = 1709164800,
    markdown: str = "Hello **world**",
) -> dict:
    body = {"title": title, "slug": slug, "markdown": markdown}
    if url is not None:
        body["url"] = url
    return {
        "platform": 2,
        "original_id": slug,
        "content_timestamp": timestamp,
        "content_body": json.dumps(body),
    }


def mirror_record(title: str) -> dict:
    return {
        "platform": 1,
        "original_id": "mirror-id",
        "content_timestamp": 1709164800,
        "content_body": json.dumps({"content": {"title": title, "body": "mirror body"}}),
    }


class Router:
    """Routes requests by URL prefix and records every request seen."""

    def __init__(self, routes: dict[str, httpx.Response | Exception]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        for prefix, response in self.routes.items():
            if url.startswith(prefix):
                if isinstance(response, Exception):
                    raise response
                return response
        return httpx.Response(404, text="not found")

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def make_client():
    """Build an AsyncClient backed by a Router; returns (client, router)."""

    def _make(routes: dict[str, httpx.Response | Exception]):
        router = Router(routes)
        client = httpx.AsyncClient(transport=httpx.MockTransport(router))
        return client, router

    return _make


@pytest.fixture
def cfg() -> AppConfig:
    config = AppConfig()
    config.profile.enabled = False
    return config
