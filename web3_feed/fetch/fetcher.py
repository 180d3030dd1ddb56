"""
Async HTTP fetching for upstream feed and API calls.

Every helper returns a FetchResult instead of raising, so a slow or broken
upstream only ever costs the adapter that asked for it. There are no
retries: a failed fetch is final for the current request.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any

import httpx

from ..config import FetchConfig


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None

    def json(self) -> Any:
        """Decode the body as JSON, returning None when it is not JSON."""
        if self.text is None:
            return None
        try:
            return json.loads(self.text)
        except json.JSONDecodeError:
            return None


def build_client(cfg: FetchConfig) -> httpx.AsyncClient:
    """Create the client shared by all adapters of one request."""
    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        headers={"User-Agent": cfg.user_agent},
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )


async def fetch_url(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None = None,
) -> FetchResult:
    """GET a URL and return its body text.

    Args:
        client: Shared async client
        url: The URL to fetch
        params: Optional query parameters

    Returns:
        FetchResult with text on a 2xx response, error otherwise
    """
    try:
        resp = await client.get(url, params=params)
    except Exception as exc:  # noqa: BLE001
        return FetchResult(url=url, status_code=None, text=None, error=f"{type(exc).__name__}: {exc}")
    return _to_result(url, resp)


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
) -> FetchResult:
    """POST a JSON payload and return the response body text."""
    try:
        resp = await client.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
    except Exception as exc:  # noqa: BLE001
        return FetchResult(url=url, status_code=None, text=None, error=f"{type(exc).__name__}: {exc}")
    return _to_result(url, resp)


def _to_result(url: str, resp: httpx.Response) -> FetchResult:
    if resp.is_success:
        return FetchResult(url=url, status_code=resp.status_code, text=resp.text, error=None)
    return FetchResult(
        url=url,
        status_code=resp.status_code,
        text=None,
        error=f"HTTP Error: {resp.status_code}",
    )
