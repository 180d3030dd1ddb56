"""Identity profile lookup (name <-> address) through the web3.bio API."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx

from ..config import SourceConfig
from ..core.identity import detect_search_platform
from ..fetch.fetcher import fetch_url
from ..logging_utils import log_event

logger = logging.getLogger(__name__)


@dataclass
class ResolvedIdentity:
    address: str
    domain: str


async def resolve_identity(
    address: str,
    domain: str,
    client: httpx.AsyncClient,
    cfg: SourceConfig,
) -> ResolvedIdentity:
    """Fill in whichever of address/domain is missing.

    When both are supplied they are returned untouched and no request is
    made. Lookup failures fall back to the inputs.
    """
    if address and domain:
        return ResolvedIdentity(address=address, domain=domain)

    term = domain or address
    platform = detect_search_platform(domain) if domain else "ens"
    result = await fetch_url(client, f"{cfg.profile_api_url}/{platform}/{term}")
    profile = result.json()
    if not isinstance(profile, dict):
        log_event(
            logger,
            "Profile lookup failed",
            logging.WARNING,
            event="profile_failed",
            term=term,
            error=result.error or "invalid json",
        )
        return ResolvedIdentity(address=address, domain=domain)

    resolved_address = _text(profile.get("address")) or address
    if resolved_address.startswith("0x"):
        resolved_address = resolved_address.lower()
    return ResolvedIdentity(
        address=resolved_address,
        domain=_text(profile.get("identity")) or domain,
    )


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
