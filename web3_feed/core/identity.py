"""
Address, name-service and domain rules.

Covers three questions the aggregator asks about its input:
- Is this a usable Ethereum or Solana address?
- Which name service does a search term belong to (for profile lookup)?
- Which origin should be handed to feed discovery for a domain?
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from eth_utils import is_address

REGEX_ENS = re.compile(r".*?\.(eth|xyz|app|luxe|kred|art|ceo|club)$", re.IGNORECASE)
REGEX_LENS = re.compile(r".*\.lens$", re.IGNORECASE)
REGEX_DOTBIT = re.compile(r".*\.bit$", re.IGNORECASE)
REGEX_ETH = re.compile(r"^0x[a-fA-F0-9]{40}$")
REGEX_BTC = re.compile(r"^[13][a-km-zA-HJ-NP-Z1-9]{25,34}$")
REGEX_SNS = re.compile(r".*\.sol$", re.IGNORECASE)
REGEX_SOLANA = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
REGEX_TWITTER = re.compile(r"^[A-Za-z0-9_]{1,15}$")
REGEX_FARCASTER = re.compile(r"^[A-Za-z0-9_-]{1,61}(?:\.eth)?(?:\.farcaster)?$", re.IGNORECASE)
REGEX_UNSTOPPABLE = re.compile(
    r".*\.(crypto|888|nft|blockchain|bitcoin|dao|x|klever|hi|zil|kresus|polygon"
    r"|wallet|binanceus|anime|go|manga|eth)$",
    re.IGNORECASE,
)
REGEX_SPACEID = re.compile(r".*\.(bnb|arb)$", re.IGNORECASE)
REGEX_CROSSBELL = re.compile(r".*\.csb$", re.IGNORECASE)
REGEX_DOMAIN = re.compile(
    r"(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z0-9][a-z0-9-]{0,61}[a-z0-9]"
)

# zero address, low-entropy vanity bodies, and the 0x...dead burn address
REGEX_UNUSABLE_ETH = re.compile(r"^0x0*.$|0x[123468abef]*$|0x0*dead$", re.IGNORECASE)

# Ordered: the first matching rule names the platform.
SEARCH_PLATFORM_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (REGEX_ENS, "ens"),
    (REGEX_ETH, "ethereum"),
    (REGEX_LENS, "lens"),
    (REGEX_UNSTOPPABLE, "unstoppableDomains"),
    (REGEX_SPACEID, "space_id"),
    (REGEX_CROSSBELL, "crossbell"),
    (REGEX_DOTBIT, "dotbit"),
    (REGEX_SNS, "sns"),
    (REGEX_BTC, "bitcoin"),
    (REGEX_SOLANA, "solana"),
    (REGEX_TWITTER, "twitter"),
    (REGEX_FARCASTER, "farcaster"),
)


def is_valid_ethereum_address(address: str | None) -> bool:
    if not address or not REGEX_ETH.match(address) or not is_address(address):
        return False
    return REGEX_UNUSABLE_ETH.search(address) is None


def is_valid_solana_address(address: str | None) -> bool:
    return bool(address) and REGEX_SOLANA.match(address) is not None


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_ens_name(value: str) -> bool:
    return bool(value) and REGEX_ENS.match(value) is not None


def detect_search_platform(term: str) -> str:
    """Return the profile API platform segment for a search term."""
    if term:
        for pattern, platform in SEARCH_PLATFORM_RULES:
            if pattern.match(term):
                return platform
    return "next.id"


def resolve_fetch_origin(query: str) -> str:
    """Map a domain to the origin handed to feed discovery.

    ENS-style names go through the eth.limo gateway, .bit through .cc and
    .sol through .build. Other domain-looking input becomes an https origin.

    Examples:
        >>> resolve_fetch_origin("vitalik.eth")
        'vitalik.eth.limo'
        >>> resolve_fetch_origin("example.com")
        'https://example.com'
    """
    if REGEX_ENS.match(query):
        return f"{query}.limo"
    if REGEX_DOTBIT.match(query):
        return f"{query}.cc"
    if REGEX_SNS.match(query):
        return f"{query}.build"
    if REGEX_DOMAIN.search(query):
        if query.startswith(("https://", "http://")):
            return query
        return f"https://{query}"
    return query
