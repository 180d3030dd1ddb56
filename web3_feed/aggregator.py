"""
Aggregation of every source for one address/domain.

This module coordinates a single request:
1. Normalize and validate the query (empty result when nothing is usable)
2. Resolve the missing half of address/domain through the profile API
3. Run the eligible adapters concurrently and wait for all of them
4. Merge their items and sites in adapter order
5. Deduplicate, sort newest first, apply the global limit
6. Drop sites whose items did not survive the limit

Adapters fail in isolation: an exception or an empty result from one
source only removes that source's contribution.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

import httpx

from .config import DEFAULT_CONFIG, AppConfig, FetchConfig
from .core.dedup import dedup_items
from .core.identity import is_ens_name, is_valid_ethereum_address, is_valid_solana_address
from .core.types import (
    AggregateQuery,
    AggregateResult,
    ArticleItem,
    Platform,
    SiteInfo,
    SourceOutcome,
    SourceResult,
)
from .fetch.fetcher import build_client
from .logging_utils import log_event, request_context
from .sources.mirror import fetch_mirror
from .sources.paragraph import fetch_paragraph
from .sources.profile import resolve_identity
from .sources.website import fetch_website

INVALID_PARAM = "Invalid Param"


def clamp_limit(limit: int | None, cfg: FetchConfig) -> int:
    """Apply the default and the hard cap to a requested limit."""
    if limit is None or limit <= 0:
        return min(cfg.default_limit, cfg.max_limit)
    return min(limit, cfg.max_limit)


def normalize_query(query: AggregateQuery) -> AggregateQuery:
    """Trim inputs and lowercase hex addresses (base58 is case-sensitive)."""
    address = (query.address or "").strip()
    if address.lower().startswith("0x"):
        address = address.lower()
    return AggregateQuery(
        address=address,
        domain=(query.domain or "").strip(),
        contenthash=(query.contenthash or "").strip(),
        limit=query.limit,
    )


async def aggregate(
    query: AggregateQuery,
    cfg: AppConfig | None = None,
    client: httpx.AsyncClient | None = None,
    logger: logging.Logger | None = None,
) -> AggregateResult:
    """Collect articles for an address/domain from every eligible source.

    Args:
        query: Address, domain, contenthash switch and limit
        cfg: Application configuration (defaults when None)
        client: Shared async client; one is opened for the call when None
        logger: Logger for events

    Returns:
        AggregateResult; empty (optionally with the "Invalid Param"
        indicator) when the query has no usable identifier
    """
    cfg = cfg or DEFAULT_CONFIG
    logger = logger or logging.getLogger("web3_feed")
    query = normalize_query(query)
    limit = clamp_limit(query.limit, cfg.fetch)

    has_address = is_valid_ethereum_address(query.address) or is_valid_solana_address(query.address)
    has_site = bool(query.contenthash and query.domain)
    if not (has_address or has_site):
        supplied = bool(query.address or query.domain or query.contenthash)
        log_event(logger, "No usable identifier", event="aggregate_empty", address=query.address, domain=query.domain)
        return AggregateResult(error=INVALID_PARAM if supplied else None)

    with request_context(address=query.address, domain=query.domain):
        if client is None:
            async with build_client(cfg.fetch) as owned_client:
                return await _aggregate(query, limit, cfg, owned_client, logger)
        return await _aggregate(query, limit, cfg, client, logger)


async def _aggregate(
    query: AggregateQuery,
    limit: int,
    cfg: AppConfig,
    client: httpx.AsyncClient,
    logger: logging.Logger,
) -> AggregateResult:
    address, domain = query.address, query.domain
    if cfg.profile.enabled and not (address and domain):
        resolved = await resolve_identity(address, domain, client, cfg.sources)
        address, domain = resolved.address, resolved.domain

    tasks: list[tuple[Platform, Awaitable[SourceResult | None]]] = []
    if query.contenthash and domain:
        tasks.append((Platform.WEBSITE, fetch_website(domain, client, cfg.sources)))
    if is_valid_ethereum_address(address):
        handle = domain if is_ens_name(domain) else address
        tasks.append((Platform.MIRROR, fetch_mirror(handle, client, cfg.sources)))
        tasks.append((Platform.PARAGRAPH, fetch_paragraph(address, client, cfg.sources)))

    log_event(
        logger,
        "Aggregate start",
        event="aggregate_start",
        address=address,
        domain=domain,
        sources=[platform.value for platform, _ in tasks],
        limit=limit,
    )
    outcomes = await gather_outcomes(tasks)
    for outcome in outcomes:
        if outcome.error:
            log_event(
                logger,
                "Source failed",
                logging.WARNING,
                event="source_failed",
                platform=outcome.platform.value,
                error=outcome.error,
            )

    result = merge_outcomes(outcomes, limit, cfg)
    log_event(
        logger,
        "Aggregate complete",
        event="aggregate_complete",
        sites=[site.platform.value for site in result.sites],
        total=len(result.items),
    )
    return result


async def gather_outcomes(
    tasks: list[tuple[Platform, Awaitable[SourceResult | None]]],
) -> list[SourceOutcome]:
    """Run adapters concurrently and wait until every one has settled.

    Results come back in task order regardless of completion order.
    """
    settled = await asyncio.gather(*(coro for _, coro in tasks), return_exceptions=True)
    outcomes: list[SourceOutcome] = []
    for (platform, _), value in zip(tasks, settled):
        if isinstance(value, BaseException):
            outcomes.append(SourceOutcome(platform=platform, error=f"{type(value).__name__}: {value}"))
        else:
            outcomes.append(SourceOutcome(platform=platform, result=value))
    return outcomes


def merge_outcomes(outcomes: list[SourceOutcome], limit: int, cfg: AppConfig) -> AggregateResult:
    """Merge settled outcomes into the final bounded result."""
    items: list[ArticleItem] = []
    sites: list[SiteInfo] = []
    for outcome in outcomes:
        if not outcome.ok:
            continue
        items.extend(outcome.result.items)
        sites.append(outcome.result.site)

    if cfg.dedup.enabled:
        items = dedup_items(items, cfg.dedup.title_similarity_threshold)

    # sorted() is stable, so equal timestamps keep adapter order.
    items = sorted(items, key=lambda item: item.published, reverse=True)[:limit]

    platforms = {item.platform for item in items}
    sites = [site for site in sites if site.platform in platforms]
    return AggregateResult(sites=sites, items=items)
