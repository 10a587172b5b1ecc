"""Compiled templates and the template applier.

A Template is the immutable result of compiling one pattern: its token
sequence plus the locale table the engine had at compile time. Applying it
resolves each expression against the caller's arguments, formats the value
through the expression's candidates and aligns the result.

Rendering rules per expression:
    - MISSING or None renders nothing
    - the first candidate that accepts the value's type tag and returns a
      string wins; a FormattingError contributes its fallback text
    - if every candidate declines, nothing is rendered
    - positive alignment pads on the left, negative on the right

Thread Safety:
    Templates are frozen. Each apply call owns a fresh AutoNumber counter,
    so one template may be applied concurrently and reentrantly.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arrange.errors import FormattingError
from arrange.lazy import LazyFormatted
from arrange.runtime.resolver import AutoNumber, resolve
from arrange.runtime.value_types import MISSING, type_tag_of
from arrange.syntax.ast import Expression, TextElement, Token

if TYPE_CHECKING:
    from arrange.runtime.locale_table import LocaleTable

__all__ = ["Template", "align", "format_value"]

logger = logging.getLogger(__name__)


def align(text: str, width: int) -> str:
    """Pad text with spaces to a signed width.

    Example:
        >>> align("ab", 3)
        ' ab'
        >>> align("ab", -3)
        'ab '
        >>> align("abcd", 3)
        'abcd'
    """
    if width > 0:
        return text.rjust(width)
    if width < 0:
        return text.ljust(-width)
    return text


def format_value(expression: Expression, value: object, locale: LocaleTable) -> str | None:
    """Render a resolved value through an expression's format candidates.

    Args:
        expression: Expression whose candidates are tried in order
        value: Resolved value (not None, not MISSING)
        locale: Locale table passed to formatters

    Returns:
        Rendered text, or None if every candidate declined
    """
    type_tag = type_tag_of(value)
    for candidate in expression.candidates:
        formatter = candidate.formatter
        if not formatter.accepts(type_tag):
            continue
        try:
            text = formatter.format(value, type_tag, candidate.args, locale)
        except FormattingError as e:
            logger.debug("%s fell back for %s: %s", formatter.name, expression.source, e)
            return e.fallback_value
        if text is not None:
            return text
    return None


@dataclass(frozen=True, slots=True)
class Template:
    """Compiled pattern, reusable with any argument list.

    Attributes:
        tokens: Literal and expression tokens in pattern order
        locale: Locale table used by date formatting
        pattern: Source pattern text

    Example:
        >>> from arrange import compile
        >>> template = compile("{}-{}")
        >>> template.arrange("a", 1)
        'a-1'
    """

    tokens: tuple[Token, ...]
    locale: LocaleTable
    pattern: str = ""

    def apply(self, args: Sequence[object]) -> str:
        """Render the template against a list of positional arguments."""
        step = AutoNumber()
        parts: list[str] = []

        for token in self.tokens:
            if TextElement.guard(token):
                parts.append(token.value)
                continue

            value = resolve(token.selector, args, step)
            if value is MISSING or value is None:
                continue

            text = format_value(token, value, self.locale)
            if text is not None:
                parts.append(align(text, token.alignment))

        return "".join(parts)

    def arrange(self, *args: object) -> str:
        """Render the template against positional arguments."""
        return self.apply(args)

    def lazy(self, *args: object) -> LazyFormatted:
        """Bind arguments now, render on ``str()``."""
        return LazyFormatted(self, args)

    @property
    def expressions(self) -> tuple[Expression, ...]:
        """Expression tokens in pattern order."""
        return tuple(token for token in self.tokens if Expression.guard(token))
