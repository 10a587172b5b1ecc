"""Token types produced by the pattern compiler.

A compiled pattern is a flat sequence of TextElement and Expression tokens.
All nodes are frozen so a compiled template can be shared freely.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeIs

if TYPE_CHECKING:
    from arrange.runtime.formatter import ValueFormatter

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Selector
    "Key",
    "Selector",
    # Format
    "FormatCandidate",
    # Tokens
    "TextElement",
    "Expression",
    "Token",
]

# A selector key: integer index or field name.
type Key = int | str


@dataclass(frozen=True, slots=True)
class Selector:
    """Parsed selector: the key path inside an expression.

    Attributes:
        keys: Ordered keys; empty for the auto-numbered ``{}``
        is_property: True when the selector starts with a dot or its first
            key is a name. Such selectors search every positional argument
            instead of indexing the argument list.

    Example:
        ``{0.name}``  -> Selector(keys=(0, "name"), is_property=False)
        ``{name.0}``  -> Selector(keys=("name", 0), is_property=True)
        ``{}``        -> Selector(keys=(), is_property=False)
    """

    keys: tuple[Key, ...] = ()
    is_property: bool = False

    @property
    def is_auto(self) -> bool:
        """True for the empty selector, resolved by auto-numbering."""
        return not self.keys


@dataclass(frozen=True, slots=True)
class FormatCandidate:
    """A formatter whose grammar accepted a format spec, with its parsed args.

    Attributes:
        formatter: Value formatter to try
        args: Result of the formatter's preprocess step (may be None)
    """

    formatter: ValueFormatter
    args: object = None


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text run. Adjacent runs are merged at compile time."""

    value: str

    @staticmethod
    def guard(token: object) -> TypeIs[TextElement]:
        """Type guard for TextElement."""
        return isinstance(token, TextElement)


@dataclass(frozen=True, slots=True)
class Expression:
    """One bracketed unit: ``{selector,alignment:format-spec}``.

    Attributes:
        selector: Key path to resolve against the arguments
        alignment: Signed pad width; positive pads left (right-aligns),
            negative pads right, zero leaves the value as is
        candidates: Formatters matching the format spec, in precedence order
        source: Original expression text as written in the pattern
    """

    selector: Selector = field(default_factory=Selector)
    alignment: int = 0
    candidates: tuple[FormatCandidate, ...] = ()
    source: str = ""

    @staticmethod
    def guard(token: object) -> TypeIs[Expression]:
        """Type guard for Expression."""
        return isinstance(token, Expression)


type Token = TextElement | Expression
