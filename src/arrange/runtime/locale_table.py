"""Locale tables for date formatting.

A LocaleTable holds the month, weekday and AM/PM names the Date formatter
needs. Tables are built from Babel's CLDR data and shared by reference.

Architecture:
    - LocaleTable: Immutable name table (frozen dataclass)
    - get_locale_table(): Cached lookup with fallback
      full tag -> language -> default locale
    - Unknown or malformed tags log a warning and fall back; lookup never fails

Thread Safety:
    Tables are immutable. The table cache is protected by an RLock.

Python 3.13+. Uses Babel for CLDR data.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock

from babel import UnknownLocaleError

from arrange.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from arrange.locale_utils import get_babel_locale, language_of, normalize_locale

__all__ = [
    "LocaleTable",
    "clear_locale_table_cache",
    "get_locale_table",
    "locale_table_cache_size",
]

logger = logging.getLogger(__name__)

# Babel numbers weekdays from Monday (0) to Sunday (6); tables start on Sunday.
_SUNDAY_FIRST = (6, 0, 1, 2, 3, 4, 5)


@dataclass(frozen=True, slots=True)
class LocaleTable:
    """Immutable set of names used to render dates.

    Attributes:
        code: Normalized locale code the table was built for (e.g., "en", "it")
        ampm_labels: (AM label, PM label)
        month_names: Full month names, January first
        month_names_short: Abbreviated month names, January first
        weekday_names: Full weekday names, Sunday first
        weekday_names_short: Abbreviated weekday names, Sunday first
    """

    code: str
    ampm_labels: tuple[str, str]
    month_names: tuple[str, ...]
    month_names_short: tuple[str, ...]
    weekday_names: tuple[str, ...]
    weekday_names_short: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate table dimensions."""
        if len(self.month_names) != 12 or len(self.month_names_short) != 12:
            msg = f"Locale table '{self.code}' needs 12 month names"
            raise ValueError(msg)
        if len(self.weekday_names) != 7 or len(self.weekday_names_short) != 7:
            msg = f"Locale table '{self.code}' needs 7 weekday names"
            raise ValueError(msg)

    @classmethod
    def from_babel(cls, locale_code: str) -> "LocaleTable":
        """Build a table from Babel CLDR data.

        Args:
            locale_code: Normalized locale code

        Returns:
            LocaleTable for the locale

        Raises:
            babel.core.UnknownLocaleError: If the locale is unknown to Babel
            ValueError: If the locale code is invalid
        """
        babel_locale = get_babel_locale(locale_code)

        months = babel_locale.months["format"]
        days = babel_locale.days["format"]
        periods = babel_locale.day_periods["format"]["abbreviated"]

        return cls(
            code=locale_code,
            ampm_labels=(periods.get("am", "AM"), periods.get("pm", "PM")),
            month_names=tuple(months["wide"][month] for month in range(1, 13)),
            month_names_short=tuple(months["abbreviated"][month] for month in range(1, 13)),
            weekday_names=tuple(days["wide"][day] for day in _SUNDAY_FIRST),
            weekday_names_short=tuple(days["abbreviated"][day] for day in _SUNDAY_FIRST),
        )


_cache: OrderedDict[str, LocaleTable] = OrderedDict()
_cache_lock = RLock()


def _build_table(locale_code: str | None) -> LocaleTable:
    """Build the table for a tag, walking the fallback chain."""
    normalized = normalize_locale(locale_code) if locale_code else None

    if normalized is None:
        if locale_code:
            logger.warning(
                "Invalid locale format '%s'. Falling back to %s", locale_code, DEFAULT_LOCALE
            )
        return LocaleTable.from_babel(DEFAULT_LOCALE)

    candidates = [normalized]
    if language_of(normalized) != normalized:
        candidates.append(language_of(normalized))

    for candidate in candidates:
        try:
            return LocaleTable.from_babel(candidate)
        except (UnknownLocaleError, ValueError) as e:
            logger.debug("No locale data for '%s': %s", candidate, e)

    logger.warning("Unknown locale '%s'. Falling back to %s", locale_code, DEFAULT_LOCALE)
    return LocaleTable.from_babel(DEFAULT_LOCALE)


def get_locale_table(locale_code: str | None = None) -> LocaleTable:
    """Look up the locale table for a tag.

    Lookup order: exact tag (normalized), then language only, then the
    default locale. Always succeeds.

    Thread Safety:
        Concurrent calls with the same tag return the same instance.

    Args:
        locale_code: Locale tag such as "en", "en_US" or "it-IT"
            (case-insensitive). None or "" selects the default locale.

    Returns:
        Shared LocaleTable instance

    Example:
        >>> get_locale_table("en-us").month_names[0]
        'January'
        >>> get_locale_table("it").weekday_names_short[0]
        'dom'
    """
    normalized = normalize_locale(locale_code) if locale_code else DEFAULT_LOCALE
    # Malformed tags get their own key so the fallback warning is logged once
    cache_key = normalized if normalized is not None else f"?{locale_code}"

    with _cache_lock:
        if cache_key in _cache:
            _cache.move_to_end(cache_key)
            return _cache[cache_key]

    table = _build_table(locale_code)

    # Double-check: another thread may have built the same table meanwhile
    with _cache_lock:
        if cache_key in _cache:
            return _cache[cache_key]

        if len(_cache) >= MAX_LOCALE_CACHE_SIZE:
            _cache.popitem(last=False)

        _cache[cache_key] = table
        return table


def clear_locale_table_cache() -> None:
    """Clear cached locale tables (use in tests)."""
    with _cache_lock:
        _cache.clear()


def locale_table_cache_size() -> int:
    """Get current number of cached locale tables."""
    with _cache_lock:
        return len(_cache)
