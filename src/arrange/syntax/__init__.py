"""Pattern syntax: grammar, tokens and the pattern compiler.

Compile-time half of arrange. Has no dependency on the runtime package;
format specs are matched through the FormatMatcher protocol.

Python 3.13+. Zero external dependencies.
"""

from .ast import Expression, FormatCandidate, Key, Selector, TextElement, Token
from .grammar import Grammar, build_grammar
from .parser import FormatMatcher, PatternCompiler
from .selector import parse_alignment, parse_key, parse_selector, unquote_string

__all__ = [
    "Expression",
    "FormatCandidate",
    "FormatMatcher",
    "Grammar",
    "Key",
    "PatternCompiler",
    "Selector",
    "TextElement",
    "Token",
    "build_grammar",
    "parse_alignment",
    "parse_key",
    "parse_selector",
    "unquote_string",
]
