"""
Client for the Firefly article index.

The index is queried by wallet address and returns recent posts across
Mirror (platform 1) and Paragraph (platform 2). Each record embeds the
post as a JSON string in ``content_body``; records whose body does not
decode are skipped one by one so a single bad record never empties the
batch.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..config import SourceConfig
from ..core.types import FireflyArticleRecord
from ..fetch.fetcher import post_json
from ..logging_utils import log_event

logger = logging.getLogger(__name__)

PLATFORM_PARAGRAPH = 2


async def fetch_articles(
    address: str,
    limit: int,
    client: httpx.AsyncClient,
    cfg: SourceConfig,
) -> list[FireflyArticleRecord]:
    """Return decoded index records for ``address``; empty on any failure."""
    result = await post_json(client, cfg.firefly_article_url, {"addresses": [address], "limit": limit})
    payload = result.json()
    if payload is None:
        log_event(
            logger,
            "Article index unavailable",
            logging.WARNING,
            event="firefly_failed",
            address=address,
            error=result.error or "invalid json",
        )
        return []
    return parse_records(payload)


def parse_records(payload: Any) -> list[FireflyArticleRecord]:
    """Decode the ``data`` array of an index response."""
    if not isinstance(payload, dict):
        return []
    raw_records = payload.get("data") or []
    if not isinstance(raw_records, list):
        return []

    records: list[FireflyArticleRecord] = []
    for raw in raw_records:
        record = _parse_record(raw)
        if record is not None:
            records.append(record)
    return records


def _parse_record(raw: Any) -> FireflyArticleRecord | None:
    if not isinstance(raw, dict):
        return None

    body = raw.get("content_body")
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as exc:
            log_event(
                logger,
                "Skipping record with malformed content_body",
                logging.WARNING,
                event="firefly_record_skipped",
                original_id=raw.get("original_id"),
                error=str(exc),
            )
            return None
    if not isinstance(body, dict):
        return None

    try:
        platform = int(raw.get("platform"))
    except (TypeError, ValueError):
        return None

    timestamp = raw.get("content_timestamp")
    try:
        timestamp = int(timestamp) if timestamp is not None else None
    except (TypeError, ValueError):
        timestamp = None

    return FireflyArticleRecord(
        platform=platform,
        original_id=str(raw.get("original_id") or ""),
        content_timestamp=timestamp,
        content_body=body,
    )
