"""Selector and alignment parsing.

Works on substrings already validated by the expression grammar, so every
helper here assumes well-formed input and never fails.

Python 3.13+. Zero external dependencies.
"""

from arrange.syntax.ast import Key, Selector
from arrange.syntax.grammar import Grammar

__all__ = ["parse_alignment", "parse_key", "parse_selector", "unquote_string"]


def unquote_string(quoted: str) -> str:
    """Strip the surrounding quotes and collapse doubled quote characters.

    Example:
        >>> unquote_string("'it''s'")
        "it's"
        >>> unquote_string('"a""b"')
        'a"b'
    """
    quote = quoted[0]
    return quoted[1:-1].replace(quote * 2, quote)


def parse_key(raw: str) -> Key:
    """Normalize one matched key into an int or a name.

    Example:
        >>> parse_key("-2")
        -2
        >>> parse_key("'a b'")
        'a b'
        >>> parse_key("name")
        'name'
    """
    if raw[0] in "0123456789+-":
        return int(raw)
    if raw[0] in "'\"":
        return unquote_string(raw)
    return raw


def parse_selector(grammar: Grammar, text: str) -> Selector:
    """Parse the selector substring of an expression.

    Dots and whitespace between keys are skipped by matching keys only.

    Args:
        grammar: Grammar the expression was matched with
        text: Selector substring (may be empty or padded with whitespace)

    Returns:
        Parsed Selector
    """
    text = text.strip()
    if not text:
        return Selector()

    keys = tuple(parse_key(match.group(0)) for match in grammar.key_re.finditer(text))
    is_property = text.startswith(".") or isinstance(keys[0], str)
    return Selector(keys=keys, is_property=is_property)


def parse_alignment(text: str) -> int:
    """Parse the alignment substring (``,N``); 0 when absent."""
    if not text:
        return 0
    return int(text[1:])
