"""Core value types for the arrange runtime.

Defines the fundamental types used throughout resolution and formatting:
    - MISSING: Outcome of a selector that cannot be resolved
    - NO_MATCH: Outcome of a formatter whose format spec grammar rejects a spec
    - type_tag_of(): Closed classification of a runtime value (TypeTag)

MISSING is deliberately distinct from None: None is a value the caller
supplied, MISSING means the selector found nothing.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Final, Literal

from arrange.enums import TypeTag

__all__ = [
    "MISSING",
    "NO_MATCH",
    "Missing",
    "NoMatch",
    "type_tag_of",
]


class _Sentinel(Enum):
    """Singleton markers that can never collide with caller data."""

    MISSING = "MISSING"
    NO_MATCH = "NO_MATCH"

    def __repr__(self) -> str:
        """Return the bare sentinel name."""
        return self.value

    def __bool__(self) -> bool:
        """Sentinels are falsy."""
        return False


MISSING: Final = _Sentinel.MISSING
NO_MATCH: Final = _Sentinel.NO_MATCH

type Missing = Literal[_Sentinel.MISSING]
type NoMatch = Literal[_Sentinel.NO_MATCH]


def type_tag_of(value: object) -> TypeTag:
    """Classify a value for formatter candidate filtering.

    Order matters: bool is a subclass of int, str is a Sequence.

    Args:
        value: Resolved value

    Returns:
        TypeTag describing the value

    Example:
        >>> type_tag_of(True)
        <TypeTag.BOOLEAN: 'boolean'>
        >>> type_tag_of([1, 2])
        <TypeTag.ARRAY: 'array'>
    """
    match value:
        case None:
            return TypeTag.NULL
        case bool():
            return TypeTag.BOOLEAN
        case int() | float() | Decimal():
            return TypeTag.NUMBER
        case str():
            return TypeTag.STRING
        case date():
            return TypeTag.DATE
        case Mapping():
            return TypeTag.MAPPING
        case bytes() | bytearray():
            return TypeTag.OTHER
        case Sequence():
            return TypeTag.ARRAY
        case _:
            return TypeTag.OTHER
