"""
Text cleanup for titles and descriptions coming from feeds and the index API.

Upstream fields mix HTML, entities, escaped control characters and runs of
whitespace. ``sanitize`` turns them into a single display line and
optionally cuts it to a display length.
"""

from __future__ import annotations

import html
import re

from bs4 import BeautifulSoup

ELLIPSIS = "…"

# backslash, backspace, form feed, newline, carriage return, tab, vertical tab
ESCAPE_RE = re.compile(r"[\\\b\f\n\r\t\v]")
WHITESPACE_RE = re.compile(r"\s{2,}")

# Every pass that changes the text makes it shorter, so this is only a backstop.
_MAX_PASSES = 16


def sanitize(raw: object, cap: int | None = None) -> str:
    """Strip markup and noise from ``raw`` and optionally truncate it.

    Non-string input yields an empty string. The cleaning pass is applied
    until the text stops changing, which makes the function idempotent.

    Args:
        raw: Text to clean, usually HTML from a feed
        cap: Maximum length before an ellipsis is appended

    Returns:
        The cleaned text; at most ``cap + 1`` characters when ``cap`` is set

    Examples:
        >>> sanitize("<p>Hello &amp;  <b>bye</b></p>")
        'Hello & bye'
        >>> sanitize("abcdef", cap=3)
        'abc…'
    """
    if not isinstance(raw, str):
        return ""

    text = raw
    for _ in range(_MAX_PASSES):
        cleaned = _clean_once(text)
        if cleaned == text:
            break
        text = cleaned

    if cap is not None and len(text) > cap:
        return text[: max(cap, 0)] + ELLIPSIS
    return text


def _clean_once(text: str) -> str:
    if "<" in text:
        text = BeautifulSoup(text, "html.parser").get_text()
    text = ESCAPE_RE.sub("", text).strip()
    text = WHITESPACE_RE.sub(" ", text)
    return html.unescape(text).strip()


def shorten_handle(value: str, length: int = 12) -> str:
    """Shorten an address or long name for display, e.g. ``0xf126...5dfd``."""
    if not value:
        return ""
    if len(value) <= length:
        return value
    chars = length // 2 - 2
    if value.startswith("0x"):
        return f"{value[:chars + 2]}...{value[len(value) - chars:]}"
    return f"{value[:chars + 1]}...{value[len(value) - (chars + 1):]}"
