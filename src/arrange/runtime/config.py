"""Engine configuration.

Provides a single frozen dataclass holding every option an Arranger is built
from. Deriving a new engine means replacing fields on a copy; a config never
changes after construction.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from arrange.constants import DEFAULT_CLOSE_CHAR, DEFAULT_LOCALE, DEFAULT_OPEN_CHAR
from arrange.runtime.formatter import ValueFormatter

__all__ = ["ArrangeConfig"]


@dataclass(frozen=True, slots=True)
class ArrangeConfig:
    """Immutable configuration for an Arranger.

    All fields have defaults; ``ArrangeConfig()`` is the default engine.

    Attributes:
        open_char: Character opening an expression (default: ``{``)
        close_char: Character closing an expression (default: ``}``)
        locale: Locale tag for date names, e.g. ``en``, ``en_US``, ``it-IT``
            (case-insensitive; unknown tags fall back to the language, then
            to ``en``)
        extra_formatters: Formatters tried before the built-ins, in order
        disable_cache: Compile every pattern afresh instead of memoizing

    Example:
        >>> config = ArrangeConfig(open_char="<", close_char=">")
        >>> config.open_char
        '<'
        >>> ArrangeConfig(open_char="{", close_char="{")
        Traceback (most recent call last):
            ...
        ValueError: open_char and close_char must differ, got '{' twice
    """

    open_char: str = DEFAULT_OPEN_CHAR
    close_char: str = DEFAULT_CLOSE_CHAR
    locale: str = DEFAULT_LOCALE
    extra_formatters: Iterable[ValueFormatter] = ()
    disable_cache: bool = False

    def __post_init__(self) -> None:
        """Validate delimiters and freeze the formatter sequence.

        Raises:
            ValueError: If a delimiter is not one non-whitespace character,
                or both delimiters are the same character
            TypeError: If an extra formatter is not a ValueFormatter
        """
        for field_name in ("open_char", "close_char"):
            char = getattr(self, field_name)
            if not isinstance(char, str) or len(char) != 1 or char.isspace():
                msg = f"{field_name} must be a single non-whitespace character, got {char!r}"
                raise ValueError(msg)
        if self.open_char == self.close_char:
            msg = f"open_char and close_char must differ, got {self.open_char!r} twice"
            raise ValueError(msg)

        formatters = tuple(self.extra_formatters)
        for formatter in formatters:
            if not isinstance(formatter, ValueFormatter):
                msg = f"extra_formatters must contain ValueFormatter instances, got {formatter!r}"
                raise TypeError(msg)
        # Frozen dataclass: bypass __setattr__ to normalize the field
        object.__setattr__(self, "extra_formatters", formatters)
