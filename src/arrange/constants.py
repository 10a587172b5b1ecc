"""Shared constants for arrange.

Centralizes defaults used by both the syntax layer (grammar building,
pattern compilation) and the runtime layer (formatting, application).
Placing constants here avoids circular imports between the two packages.

Constants are grouped by domain:
- Delimiters: Default expression boundaries
- Locale: Default locale table
- Input limits: Bounds on numbers accepted by the grammar and formatters

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Delimiters
    "DEFAULT_OPEN_CHAR",
    "DEFAULT_CLOSE_CHAR",
    # Locale
    "DEFAULT_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_INTEGER_DIGITS",
    "MAX_FRACTION_DIGITS",
    "MAX_JSON_INDENT",
]

# ============================================================================
# DELIMITERS
# ============================================================================

DEFAULT_OPEN_CHAR: str = "{"
DEFAULT_CLOSE_CHAR: str = "}"

# ============================================================================
# LOCALE
# ============================================================================

# Used when no locale is configured and as the last fallback for unknown tags.
DEFAULT_LOCALE: str = "en"

# Maximum cached LocaleTable instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Longest digit run accepted for selector indices, alignment widths and
# numeric format parameters. Longer runs fail the grammar, so the whole
# expression is kept as literal text.
MAX_INTEGER_DIGITS: int = 9

# Largest precision accepted by the Exponential, Fixed, General and
# Precision number modes (matches the ECMAScript range).
MAX_FRACTION_DIGITS: int = 100

# Structured dumps indent by at most this many characters.
MAX_JSON_INDENT: int = 10
