"""Regular-expression grammar for arrange patterns.

Builds, once per delimiter pair, the matchers used to tokenize a pattern:

    key         identifier | integer | quoted
    selector    [dot] key (dot key)*          (may be empty)
    alignment   [ "," integer ]
    format      [ ":" (char-but-delimiter | open open | close close)+ ]
    expression  open selector alignment format close
    token       open open | close close | expression

Whitespace is tolerated around every sub-part of an expression. All the
whitespace runs between sub-parts are possessive (``\\s*+``), so a long run of
blanks inside a malformed expression is scanned once instead of being
re-partitioned between neighbouring runs on failure.

Quoted keys use the surrounding quote character, doubled, as the escape:
``'it''s'`` is the key ``it's``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from arrange.constants import MAX_INTEGER_DIGITS

__all__ = [
    "IDENTIFIER",
    "INTEGER",
    "QUOTED",
    "Grammar",
    "build_grammar",
]

IDENTIFIER: str = r"[a-zA-Z$_][a-zA-Z$_0-9]*"
INTEGER: str = rf"[+-]?[0-9]{{1,{MAX_INTEGER_DIGITS}}}"
QUOTED: str = r"""(?:'(?:[^']|'')*'|"(?:[^"]|"")*")"""

_KEY: str = rf"(?:{IDENTIFIER}|{INTEGER}|{QUOTED})"
_DOT: str = r"(?:\s*+\.\s*+)"
_SELECTOR: str = rf"(?:{_DOT}?{_KEY}(?:{_DOT}{_KEY})*)?"
_ALIGNMENT: str = rf"(?:,{INTEGER})?"


@dataclass(frozen=True, slots=True)
class Grammar:
    """Compiled matchers for one delimiter pair.

    Attributes:
        open_char: Character opening an expression
        close_char: Character closing an expression
        key_re: Matches a single selector key (use with finditer/findall)
        expression_re: Full-matches one expression, capturing the
            ``selector``, ``alignment`` and ``format`` groups
        token_re: Matches an escaped delimiter pair or a whole expression
    """

    open_char: str
    close_char: str
    key_re: re.Pattern[str]
    expression_re: re.Pattern[str]
    token_re: re.Pattern[str]

    @property
    def escaped_open(self) -> str:
        """Doubled open delimiter (literal open character)."""
        return self.open_char * 2

    @property
    def escaped_close(self) -> str:
        """Doubled close delimiter (literal close character)."""
        return self.close_char * 2

    def unescape_format(self, format_spec: str) -> str:
        """Turn doubled delimiters inside a format spec into single ones."""
        return format_spec.replace(self.escaped_open, self.open_char).replace(
            self.escaped_close, self.close_char
        )


@functools.lru_cache(maxsize=32)
def build_grammar(open_char: str, close_char: str) -> Grammar:
    """Build (or fetch) the grammar for a delimiter pair.

    Thread-safe via lru_cache internal locking.

    Args:
        open_char: Single character opening an expression
        close_char: Single character closing an expression

    Returns:
        Grammar with compiled matchers

    Example:
        >>> grammar = build_grammar("{", "}")
        >>> bool(grammar.expression_re.fullmatch("{ 0 ,3 :X4 }"))
        True
        >>> bool(grammar.expression_re.fullmatch("{0.}"))
        False
    """
    open_ = re.escape(open_char)
    close = re.escape(close_char)
    escaped_open = open_ + open_
    escaped_close = close + close

    format_ = rf"(?::(?:[^{open_}{close}]|{escaped_open}|{escaped_close})+)?"

    expression = (
        rf"{open_}\s*+{_SELECTOR}\s*+{_ALIGNMENT}\s*+{format_}\s*+{close}"
    )
    expression_capturing = (
        rf"{open_}\s*+(?P<selector>{_SELECTOR})\s*+(?P<alignment>{_ALIGNMENT})"
        rf"\s*+(?P<format>{format_})\s*+{close}"
    )
    token = rf"{escaped_open}|{escaped_close}|{expression}"

    return Grammar(
        open_char=open_char,
        close_char=close_char,
        key_re=re.compile(_KEY),
        expression_re=re.compile(expression_capturing),
        token_re=re.compile(token),
    )
