"""
Source Utilities - Common utilities and helpers for source adapters.

This module provides helpers that most adapters need: URL prefixing
against a source origin, literal text cleanup, episode range expansion
and safe navigation through decoded JSON payloads.
"""

import re
import logging
from typing import Any, Callable, List, Optional
from urllib.parse import parse_qs, urlparse

from anisources.core.models import EpisodeRef


logger = logging.getLogger(__name__)

# Placeholder poster for sources whose cards carry no image
DEFAULT_POSTER = "https://s4.anilist.co/file/anilistcdn/character/large/default.jpg"

_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Check if URL carries a scheme and host."""
        parsed = urlparse(url)
        return bool(parsed.scheme and parsed.netloc)

    @staticmethod
    def prefix_origin(url: str, origin: str) -> str:
        """
        Make a URL absolute against a source origin.

        Absolute URLs are returned unchanged, protocol-relative URLs get
        an https scheme, and anything else is joined to the origin with
        exactly one slash. Empty input stays empty.

        Args:
            url: URL or path as found in the document
            origin: Scheme and host of the source, e.g. https://aniworld.to

        Returns:
            Absolute URL, or an empty string
        """
        url = url.strip()
        if not url:
            return ""
        if URLHelper.is_absolute(url):
            return url
        if url.startswith("//"):
            return f"https:{url}"
        if not origin:
            return url
        return f"{origin.rstrip('/')}/{url.lstrip('/')}"

    @staticmethod
    def get_query_param(url: str, param: str, default: str = "") -> str:
        """Extract query parameter from URL."""
        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        return params.get(param, [default])[0]


class TextCleaner:
    """Utility class for cleaning text content."""

    # Removed literally, never as tags
    SYNOPSIS_NOISE = ("<br>", "<i>", "</i>")

    @staticmethod
    def clean_synopsis(text: str) -> str:
        """
        Remove the literal substrings <br>, <i> and </i>.

        Nothing else is touched: other markup, entities and whitespace
        survive unchanged.
        """
        for noise in TextCleaner.SYNOPSIS_NOISE:
            text = text.replace(noise, "")
        return text

    @staticmethod
    def strip_tags(text: str) -> str:
        """Remove anything that looks like an HTML tag."""
        return re.sub(r"<[^>]+>", "", text)

    @staticmethod
    def remove_prefix(text: str, prefix: str) -> str:
        """Remove every occurrence of a label such as 'Ep ' and trim."""
        return text.replace(prefix, "").strip()


def expand_episode_range(text: str, href_for: Callable[[int], str]) -> List[EpisodeRef]:
    """
    Expand pagination text like "1-100" into one EpisodeRef per episode.

    The start is clamped to 1. Text that is not a numeric range, or a
    range whose end precedes its start, yields no entries.

    Args:
        text: Anchor text of a pagination link
        href_for: Builds the episode href from an episode number

    Returns:
        Episode references in ascending order
    """
    match = _RANGE_PATTERN.match(text or "")
    if not match:
        logger.debug(f"Not an episode range: {text!r}")
        return []

    start = max(1, int(match.group(1)))
    end = int(match.group(2))

    return [EpisodeRef(number=str(n), href=href_for(n)) for n in range(start, end + 1)]


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """
    Walk nested dicts and lists without raising.

    Returns default as soon as a key or index is missing or the
    current value has the wrong shape.
    """
    current = data
    for key in path:
        if isinstance(current, dict) and not isinstance(key, int):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, list) and isinstance(key, int):
            if not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            return default
    return current if current is not None else default


def first_int(text: str) -> Optional[int]:
    """First run of digits in text, or None."""
    match = re.search(r"\d+", text or "")
    return int(match.group(0)) if match else None


# Export utility classes and functions
__all__ = [
    "DEFAULT_POSTER",
    "URLHelper",
    "TextCleaner",
    "expand_episode_range",
    "dig",
    "first_int",
]
