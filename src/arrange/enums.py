"""Enumerations for arrange type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TypeTag(StrEnum):
    """Closed classification of a resolved value.

    Computed once per resolved value and used to filter formatter candidates
    by their allowed types.

    StrEnum provides automatic string conversion: str(TypeTag.NUMBER) == "number"
    """

    NUMBER = "number"
    """int, float or Decimal (bool excluded)"""

    STRING = "string"
    """str"""

    BOOLEAN = "boolean"
    """bool"""

    DATE = "date"
    """datetime.date or datetime.datetime"""

    ARRAY = "array"
    """Any non-string sequence: list, tuple, ..."""

    MAPPING = "mapping"
    """Any mapping: dict, MappingProxyType, ..."""

    NULL = "null"
    """None"""

    OTHER = "other"
    """Everything else (custom objects, sets, bytes, ...)"""


class DateElement(StrEnum):
    """Field letters understood by the Date formatter.

    Each member is the letter that, repeated, forms a date token
    (``yyyy``, ``MM``, ``dd``, ...).
    """

    DAY = "d"
    MONTH = "M"
    FRACTION = "f"
    FRACTION_TRIMMED = "F"
    HOUR_12 = "h"
    HOUR_24 = "H"
    MINUTE = "m"
    SECOND = "s"
    AMPM = "t"
    TIMEZONE_NAME = "K"
    YEAR = "y"
    UTC_OFFSET = "z"


__all__ = [
    "DateElement",
    "TypeTag",
]
