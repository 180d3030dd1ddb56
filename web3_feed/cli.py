"""
Command-line interface for web3-feed.

Uses Typer to expose the aggregator and the standalone site-feed lookup.
Supports loading .env files and an optional YAML config.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .aggregator import aggregate
from .config import load_config
from .core.types import AggregateQuery
from .fetch.fetcher import build_client
from .logging_utils import setup_logging
from .sources.website import FeedLookupError, get_site_feed

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def articles(
    address: str = typer.Argument("", help="Ethereum or Solana address."),
    domain: str = typer.Option("", "--domain", "-d", help="ENS or DNS name of the identity."),
    contenthash: str = typer.Option(
        "", "--contenthash", help="Contenthash of the domain; enables the website source."
    ),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum number of items."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Write a log file into this directory."
    ),
):
    """Aggregate Mirror, Paragraph and website articles for an identity.

    Args:
        address: Wallet address to look up
        domain: Name associated with the address
        contenthash: Presence enables the website source for ``domain``
        limit: Maximum number of items in the merged result
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the log file
    """
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    logger = setup_logging(cfg.logging, log_dir)

    query = AggregateQuery(address=address, domain=domain, contenthash=contenthash, limit=limit)
    result = asyncio.run(aggregate(query, cfg, logger=logger))
    console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))


@app.command()
def feed(
    query: str = typer.Argument(..., help="Domain, ENS name or site URL."),
    mode: str = typer.Option("list", "--mode", "-m", help="Item detail: list or full."),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of items."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Look up the syndication feed of a website."""
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    setup_logging(cfg.logging)

    try:
        data = asyncio.run(_site_feed(query, mode, limit, cfg))
    except FeedLookupError as exc:
        console.print(f"[red]{exc}[/red]: {query}")
        raise typer.Exit(code=1) from exc
    console.print_json(json.dumps(data, ensure_ascii=False, default=str))


async def _site_feed(query: str, mode: str, limit: int, cfg) -> dict:
    async with build_client(cfg.fetch) as client:
        return await get_site_feed(query, client, cfg.sources, mode=mode, limit=limit)


if __name__ == "__main__":
    app()
