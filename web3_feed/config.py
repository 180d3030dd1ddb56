"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings and the request limit bounds
- SourceConfig: Upstream service URLs and URL patterns (read-only)
- DedupConfig: Cross-source deduplication settings
- ProfileConfig: Identity profile resolution settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for HTTP fetching.

    Attributes:
        timeout_seconds: HTTP request timeout applied to every upstream call
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
        default_limit: Item limit used when the caller gives none
        max_limit: Hard cap on the item limit
    """

    timeout_seconds: float = 10.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    trust_env: bool = True
    default_limit: int = 10
    max_limit: int = 10


@dataclass(frozen=True)
class SourceConfig:
    """Upstream endpoints and patterns shared by every adapter.

    Built once and never mutated while serving requests.

    Attributes:
        mirror_base_url: Mirror.xyz origin
        paragraph_base_url: Paragraph.com origin used for profile links
        paragraph_rss_url: Paragraph RSS endpoint prefix (username appended)
        firefly_article_url: Firefly article index endpoint
        feed_discovery_url: WordPress reader endpoint that maps a site to its feed
        profile_api_url: web3.bio name service endpoint
        paragraph_handle_pattern: Regex capturing the username from a
            ``paragraph.com/@name`` URL
        paragraph_host_pattern: Regex capturing the host of a custom domain URL
        description_length: Display length for sanitized descriptions
        paragraph_lookup_limit: Records requested from the article index when
            discovering a Paragraph username. Sent as the index ``limit``
            for every request; the caller's item limit is not forwarded
    """

    mirror_base_url: str = "https://mirror.xyz"
    paragraph_base_url: str = "https://paragraph.com"
    paragraph_rss_url: str = "https://api.paragraph.com/blogs/rss"
    firefly_article_url: str = "https://api.firefly.land/article/v1/article"
    feed_discovery_url: str = "https://public-api.wordpress.com/rest/v1.1/read/feed/"
    profile_api_url: str = "https://api.web3.bio/ns"
    paragraph_handle_pattern: str = r"paragraph\.(?:com|xyz)/@([a-zA-Z0-9_.-]+)"
    paragraph_host_pattern: str = r"^(?:https?://)?(?:[^@/\n]+@)?(?:www\.)?([^:/\n]+)"
    description_length: int = 140
    paragraph_lookup_limit: int = 20


@dataclass
class DedupConfig:
    """Configuration for deduplication of merged items.

    Attributes:
        enabled: Whether to perform deduplication
        title_similarity_threshold: Fuzzy match threshold (0-100) for titles of the
            same platform; None keeps link matching only
    """

    enabled: bool = True
    title_similarity_threshold: int | None = None


@dataclass
class ProfileConfig:
    """Configuration for identity profile resolution.

    Attributes:
        enabled: Resolve missing address/domain through the profile API
    """

    enabled: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "web3_feed.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            known = {k: v for k, v in value.items() if k in data[key]}
            data[key].update(known)
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        sources=SourceConfig(**data["sources"]),
        dedup=DedupConfig(**data["dedup"]),
        profile=ProfileConfig(**data["profile"]),
        logging=LoggingConfig(**data["logging"]),
    )
