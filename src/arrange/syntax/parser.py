"""Pattern compiler: splits a raw pattern into literal and expression tokens.

Fault tolerance:
    The compiler never raises on malformed input. Any substring that does not
    match the token grammar (unbalanced or stray delimiters, invalid selector
    characters, digit runs that are too long, trailing garbage after a key
    list) is kept verbatim as literal text, so every pattern is renderable.

Format specs are matched against a FormatMatcher (normally the engine's
FormatterRegistry) at compile time; every accepting formatter is kept so the
applier can fall through when one declines at apply time.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import Protocol

from arrange.syntax.ast import Expression, FormatCandidate, TextElement, Token
from arrange.syntax.grammar import Grammar
from arrange.syntax.selector import parse_alignment, parse_selector

__all__ = ["FormatMatcher", "PatternCompiler"]


class FormatMatcher(Protocol):
    """Anything that can turn a format spec into ordered candidates."""

    def match(self, format_spec: str) -> tuple[FormatCandidate, ...]:
        """Return every candidate accepting the spec, in precedence order."""
        ...  # pragma: no cover  # Protocol stub - not executable


class PatternCompiler:
    """Tokenizes patterns for one grammar and one formatter chain.

    Stateless apart from its configuration; safe to share across threads.

    Example:
        >>> from arrange.runtime.builtins import get_shared_registry
        >>> from arrange.syntax.grammar import build_grammar
        >>> compiler = PatternCompiler(build_grammar("{", "}"), get_shared_registry())
        >>> [type(t).__name__ for t in compiler.tokenize("a{{b{0}c")]
        ['TextElement', 'Expression', 'TextElement']
    """

    __slots__ = ("_grammar", "_matcher")

    def __init__(self, grammar: Grammar, matcher: FormatMatcher) -> None:
        """Initialize compiler.

        Args:
            grammar: Delimiter-specific grammar
            matcher: Format-spec matcher (formatter registry)
        """
        self._grammar = grammar
        self._matcher = matcher

    @property
    def grammar(self) -> Grammar:
        """Grammar used for tokenizing."""
        return self._grammar

    def tokenize(self, pattern: str) -> tuple[Token, ...]:
        """Split a pattern into tokens.

        Escaped delimiter pairs become literal characters and adjacent
        literal runs are merged, so the output alternates at most once
        between text and expressions per expression.

        Args:
            pattern: Raw pattern string

        Returns:
            Ordered token tuple
        """
        grammar = self._grammar
        tokens: list[Token] = []
        text: list[str] = []

        def flush() -> None:
            joined = "".join(text)
            text.clear()
            if joined:
                tokens.append(TextElement(joined))

        position = 0
        for match in grammar.token_re.finditer(pattern):
            text.append(pattern[position : match.start()])
            position = match.end()

            run = match.group(0)
            if run == grammar.escaped_open:
                text.append(grammar.open_char)
            elif run == grammar.escaped_close:
                text.append(grammar.close_char)
            elif (expression := self.parse_expression(run)) is not None:
                flush()
                tokens.append(expression)
            else:
                text.append(run)

        text.append(pattern[position:])
        flush()

        return tuple(tokens)

    def parse_expression(self, source: str) -> Expression | None:
        """Parse a full expression run into an Expression token.

        Args:
            source: Text matched by the token grammar as an expression

        Returns:
            Expression with selector, alignment and format candidates,
            or None if the text is not a complete expression
        """
        match = self._grammar.expression_re.fullmatch(source)
        if match is None:
            return None

        return Expression(
            selector=parse_selector(self._grammar, match.group("selector")),
            alignment=parse_alignment(match.group("alignment")),
            candidates=self.parse_format(match.group("format")),
            source=source,
        )

    def parse_format(self, format_text: str) -> tuple[FormatCandidate, ...]:
        """Match the format part (``:spec``, possibly empty) against the chain.

        The leading colon is removed and doubled delimiters are collapsed
        before matching.
        """
        format_spec = self._grammar.unescape_format(format_text[1:])
        return self._matcher.match(format_spec)
