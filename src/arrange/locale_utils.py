"""Locale utilities for tag normalization and Babel lookups.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "language_of",
    "normalize_locale",
]

# language, optionally followed by a territory: en, en_US, en-us, EN-us, ...
_LOCALE_TAG_RE = re.compile(r"^([A-Za-z]+)(?:[_-]([A-Za-z]+))?$")


def normalize_locale(locale_code: str) -> str | None:
    """Convert a locale tag to the POSIX form used for Babel lookups.

    Accepts ``language`` or ``language`` + ``_``/``-`` + ``territory`` in any
    letter case. The language is lowercased and the territory uppercased so
    that "en-us", "EN_US" and "en_US" all map to the same cache key.

    Args:
        locale_code: Locale tag (e.g., "en", "en-US", "it_it")

    Returns:
        POSIX-formatted locale code (e.g., "en_US"), or None if the tag
        does not have the language[_territory] shape.

    Example:
        >>> normalize_locale("en-us")
        'en_US'
        >>> normalize_locale("IT")
        'it'
        >>> normalize_locale("not a locale") is None
        True
    """
    match = _LOCALE_TAG_RE.match(locale_code)
    if match is None:
        return None

    language = match.group(1).lower()
    territory = match.group(2)
    if territory:
        return f"{language}_{territory.upper()}"
    return language


def language_of(locale_code: str) -> str:
    """Return the language part of a normalized locale code.

    Example:
        >>> language_of("en_US")
        'en'
    """
    return locale_code.split("_", 1)[0]


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Normalized locale code (POSIX format)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code)


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects."""
    get_babel_locale.cache_clear()
