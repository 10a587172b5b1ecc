"""Value formatter descriptors.

A value formatter renders one class of values for one family of format specs.
The engine keeps formatters in an ordered chain (FormatterRegistry); at compile
time every formatter whose grammar accepts a spec becomes a candidate, and at
apply time the first candidate that accepts the value's type tag and returns
a string wins.

Descriptor contract:
    name           Identifier used by the registry (``in``, ``get``)
    grammar        Compiled regex full-matched against the spec, or None to
                   accept every spec (including the empty one)
    allowed_types  Frozenset of TypeTag the formatter handles, or None for all
    preprocess()   Turns the grammar match into parsed args; returns NO_MATCH
                   to reject the spec after all
    format()       Renders the value; returns None to decline (the applier
                   then tries the next candidate) or raises FormattingError
                   carrying a fallback text

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from arrange.enums import TypeTag
from arrange.runtime.value_types import NO_MATCH

if TYPE_CHECKING:
    from arrange.runtime.locale_table import LocaleTable

__all__ = ["CallableFormatter", "FormatFunction", "ValueFormatter"]

# Grammar used in place of a missing one so preprocess always sees a Match.
_ANY_SPEC = re.compile(r".*", re.DOTALL)

type FormatFunction = Callable[[object, TypeTag, object, LocaleTable], str | None]


class ValueFormatter:
    """Base class for value formatters.

    Subclasses set the class attributes and implement format(); preprocess()
    is optional.
    """

    name: str = "ValueFormatter"
    grammar: re.Pattern[str] | None = None
    allowed_types: frozenset[TypeTag] | None = None

    def preprocess(self, match: re.Match[str]) -> object:
        """Turn a grammar match into parsed format args.

        Returns the match itself by default. Return NO_MATCH to reject.
        """
        return match

    def matches(self, format_spec: str) -> object:
        """Parse a format spec for this formatter.

        Args:
            format_spec: Spec text without the leading colon

        Returns:
            Parsed args, or NO_MATCH if this formatter rejects the spec
        """
        grammar = self.grammar if self.grammar is not None else _ANY_SPEC
        match = grammar.fullmatch(format_spec)
        if match is None:
            return NO_MATCH
        return self.preprocess(match)

    def accepts(self, type_tag: TypeTag) -> bool:
        """Check whether values of this type may be formatted."""
        return self.allowed_types is None or type_tag in self.allowed_types

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        """Render a value.

        Args:
            value: Resolved value (never None or MISSING)
            type_tag: Precomputed type tag of the value
            args: Parsed args returned by matches()
            locale: Locale table of the template

        Returns:
            Rendered text, or None to let the next candidate try

        Raises:
            FormattingError: Rendering failed; its fallback_value is emitted
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"{type(self).__name__}(name={self.name!r})"


class CallableFormatter(ValueFormatter):
    """Value formatter assembled from plain callables.

    Lets callers extend the chain without subclassing.

    Example:
        >>> upper = CallableFormatter(
        ...     lambda value, tag, args, locale: str(value).upper(),
        ...     name="Upper",
        ...     grammar=r"U",
        ...     allowed_types=[TypeTag.STRING],
        ... )
        >>> upper.matches("U") is not NO_MATCH
        True
        >>> upper.matches("X") is NO_MATCH
        True
    """

    def __init__(
        self,
        format_value: FormatFunction,
        *,
        name: str | None = None,
        grammar: str | re.Pattern[str] | None = None,
        allowed_types: Iterable[TypeTag] | None = None,
        preprocess: Callable[[re.Match[str]], object] | None = None,
    ) -> None:
        """Create a formatter from callables.

        Args:
            format_value: ``(value, type_tag, args, locale) -> str | None``
            name: Formatter name (default: the callable's __name__)
            grammar: Regex (string or compiled) full-matched against specs;
                None accepts every spec
            allowed_types: Type tags handled; None accepts every type
            preprocess: ``(match) -> args | NO_MATCH``; default passes the
                match through
        """
        self.name = name if name is not None else getattr(format_value, "__name__", "custom")
        self.grammar = re.compile(grammar) if isinstance(grammar, str) else grammar
        self.allowed_types = frozenset(allowed_types) if allowed_types is not None else None
        self._format_value = format_value
        self._preprocess = preprocess

    def preprocess(self, match: re.Match[str]) -> object:
        """Delegate to the preprocess callable, if any."""
        if self._preprocess is None:
            return match
        return self._preprocess(match)

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        """Delegate to the format callable."""
        return self._format_value(value, type_tag, args, locale)
