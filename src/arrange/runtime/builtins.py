"""Built-in value formatters and the default formatter chain.

Precedence order of the default chain:
    NumberFormat    ``B D E F G O P X`` (see arrange.runtime.numbers)
    JsonFormat      ``JS`` / ``JSON`` with optional indent
    ToStringFormat  ``S``
    DateFormat      any other non-empty spec (see arrange.runtime.dates)
    DefaultFormat   every spec (catch-all)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import json
import re
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from arrange.constants import MAX_INTEGER_DIGITS, MAX_JSON_INDENT
from arrange.enums import TypeTag
from arrange.errors import FormattingError
from arrange.runtime.dates import DateFormatter
from arrange.runtime.formatter import ValueFormatter
from arrange.runtime.numbers import NumberFormatter
from arrange.runtime.registry import FormatterRegistry
from arrange.syntax.selector import unquote_string

if TYPE_CHECKING:
    from arrange.runtime.locale_table import LocaleTable

__all__ = [
    "DefaultFormatter",
    "JsonFormatter",
    "StringFormatter",
    "create_default_registry",
    "dump_json",
    "get_shared_registry",
]

type JsonIndent = int | str | None


def _json_default(value: object) -> object:
    """Convert values the json module cannot serialize natively."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _effective_indent(indent: JsonIndent) -> int | str | None:
    """Clamp an indent the way structured dumps expect.

    Integers are capped at MAX_JSON_INDENT and below 1 mean compact output;
    strings are cut to MAX_JSON_INDENT characters and empty means compact.
    """
    if indent is None:
        return None
    if isinstance(indent, int):
        return min(indent, MAX_JSON_INDENT) if indent >= 1 else None
    return indent[:MAX_JSON_INDENT] or None


def dump_json(value: object, indent: JsonIndent = None) -> str:
    """Serialize a value to JSON text.

    Compact output has no spaces; indented output puts one space after
    each colon.

    Raises:
        FormattingError: If the value cannot be serialized; the fallback
            value is ``str(value)``

    Example:
        >>> dump_json({"a": [1, 2]})
        '{"a":[1,2]}'
        >>> print(dump_json([1], 2))
        [
          1
        ]
    """
    effective = _effective_indent(indent)
    separators = (",", ":") if effective is None else (",", ": ")
    try:
        return json.dumps(
            value,
            indent=effective,
            separators=separators,
            default=_json_default,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise FormattingError(f"JSON serialization failed: {e}", str(value)) from e


class JsonFormatter(ValueFormatter):
    """Serializes any value to JSON; ``JSON 2`` or ``JSON '--'`` set the indent."""

    name = "JsonFormat"
    grammar = re.compile(
        rf"""JS(?:ON)?\s*([+-]?[0-9]{{1,{MAX_INTEGER_DIGITS}}}|"(?:[^"]|"")*"|'(?:[^']|'')*')?\s*""",
        re.IGNORECASE,
    )

    def preprocess(self, match: re.Match[str]) -> JsonIndent:
        raw = match.group(1)
        if raw is None:
            return None
        if raw[0] in "'\"":
            return unquote_string(raw)
        return int(raw)

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        indent = args if isinstance(args, int | str) else None
        return dump_json(value, indent)


class StringFormatter(ValueFormatter):
    """Renders the plain textual form of any value (``S``)."""

    name = "ToStringFormat"
    grammar = re.compile(r"S\s*", re.IGNORECASE)

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        return "" if value is None else str(value)


class DefaultFormatter(ValueFormatter):
    """Catch-all used when no earlier candidate renders the value.

    Strings pass through, numbers, booleans and dates use their plain text
    and everything else is dumped as compact JSON, falling back to plain
    text when serialization fails.
    """

    name = "DefaultFormat"

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        match type_tag:
            case TypeTag.STRING | TypeTag.NUMBER | TypeTag.BOOLEAN | TypeTag.DATE:
                return str(value)
            case _:
                return dump_json(value)


def create_default_registry() -> FormatterRegistry:
    """Create a new FormatterRegistry with the built-in formatters.

    Each call returns a fresh, unfrozen instance that callers may extend.

    Example:
        >>> registry = create_default_registry()
        >>> "DateFormat" in registry
        True
        >>> len(registry)
        5
    """
    return FormatterRegistry(
        [
            NumberFormatter(),
            JsonFormatter(),
            StringFormatter(),
            DateFormatter(),
            DefaultFormatter(),
        ]
    )


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: FormatterRegistry | None = None


def get_shared_registry() -> FormatterRegistry:
    """Get a shared, frozen FormatterRegistry with the built-in formatters.

    Immutability:
        The returned registry is FROZEN; register() and prepend() raise
        TypeError. Use copy() or create_default_registry() to customize.

    Example:
        >>> shared = get_shared_registry()
        >>> shared.frozen
        True
        >>> shared.copy().frozen
        False
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
    return _SHARED_REGISTRY
