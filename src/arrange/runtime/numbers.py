"""Numeric value formatter.

Format spec grammar (case-insensitive mode letter):

    mode [ "+" ] [ digits ]

    B  binary integer        D  decimal integer
    O  octal integer         X  hexadecimal integer
    E  exponential           F  fixed
    P  precision             G  general (shorter of E and P)

Integer modes round half up to an integer, render it in the mode's base and
zero-pad the digits to the requested width; the sign goes in front of the
padding (``{:B+5}`` of -3.14 is ``-00011``). Non-integer modes produce the
textual shapes of ECMAScript's toExponential/toFixed/toPrecision
(``3.14e+1``), rounding half away from zero on the exact binary value of
floats. When no precision is given, the shortest round-trip digits are used.

Letters in the output follow the case of the mode letter. NaN and the
infinities render as ``NaN``, ``Infinity`` and ``-Infinity``; a forced sign
adds ``+`` to positive infinity only.

Strings are accepted and read like a leading numeric literal (``"12px"`` is
12); unreadable strings format as ``NaN``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING

from arrange.constants import MAX_FRACTION_DIGITS, MAX_INTEGER_DIGITS
from arrange.enums import TypeTag
from arrange.runtime.formatter import ValueFormatter

if TYPE_CHECKING:
    from arrange.runtime.locale_table import LocaleTable

__all__ = [
    "NumberFormatArgs",
    "NumberFormatter",
    "number_to_string",
    "parse_float",
    "to_exponential",
    "to_fixed",
    "to_precision",
]

type Number = int | float | Decimal

_INTEGER_BASES: dict[str, str] = {"B": "b", "D": "d", "O": "o", "X": "x"}

# Leading numeric literal, as read by a lenient float parser
_NUMERIC_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)

# Fixed notation switches to plain number text from this magnitude on
_FIXED_LIMIT = Decimal("1e21")


def parse_float(text: str) -> float:
    """Read the leading numeric literal of a string; NaN if there is none.

    Example:
        >>> parse_float("  12.5px")
        12.5
        >>> parse_float("-Infinity")
        -inf
        >>> parse_float("abc")
        nan
    """
    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        return float("nan")
    return float(match.group(1))


def _exact(number: Number) -> Decimal:
    """Exact decimal value (floats keep every binary digit)."""
    return number if isinstance(number, Decimal) else Decimal(number)


def _shortest(number: Number) -> Decimal:
    """Shortest decimal that round-trips to the same number."""
    if isinstance(number, float):
        return Decimal(repr(number))
    return _exact(number)


def _significant_digits(value: Decimal) -> tuple[str, int]:
    """Significant digits of |value| without trailing zeros, and its exponent.

    The exponent is that of the leading digit (scientific notation).
    """
    digits = "".join(map(str, value.as_tuple().digits)).rstrip("0")
    if not digits:
        return "0", 0
    return digits, value.adjusted()


def _working_precision(value: Decimal, extra: int) -> int:
    """Digits needed to hold value exactly, plus ``extra``."""
    return max(len(value.as_tuple().digits), value.adjusted() + 1) + extra


def _round_significant(value: Decimal, count: int) -> tuple[str, int]:
    """Round |value| to ``count`` significant digits, half up.

    Returns:
        (exactly ``count`` digits, exponent of the leading digit)
    """
    value = abs(value)
    if not value:
        return "0" * count, 0

    exponent = value.adjusted()
    with localcontext() as ctx:
        ctx.prec = _working_precision(value, count + 2)
        scaled = value.scaleb(count - 1 - exponent).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )
    coefficient = int(scaled)
    if coefficient >= 10**count:
        coefficient //= 10
        exponent += 1
    return str(coefficient), exponent


def _exponential_text(digits: str, exponent: int) -> str:
    """Render ``d.ddd`` + ``e±n``."""
    mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
    sign = "+" if exponent >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def _sign(value: Decimal) -> str:
    """Minus for strictly negative values (negative zero has none)."""
    return "-" if value < 0 else ""


def number_to_string(number: Number) -> str:
    """Shortest round-trip text, switching to exponent form outside 1e-7..1e21.

    Example:
        >>> number_to_string(3.14)
        '3.14'
        >>> number_to_string(1e21)
        '1e+21'
        >>> number_to_string(0.0000001)
        '1e-7'
        >>> number_to_string(-0.0)
        '0'
    """
    value = _shortest(number)
    digits, exponent = _significant_digits(value)
    count = len(digits)
    point = exponent + 1

    if count <= point <= 21:
        text = digits + "0" * (point - count)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        text = _exponential_text(digits, exponent)
    return _sign(value) + text


def to_exponential(number: Number, fraction_digits: int | None = None) -> str:
    """Exponential notation with a given count of fraction digits.

    Example:
        >>> to_exponential(31.4)
        '3.14e+1'
        >>> to_exponential(31.4, 3)
        '3.140e+1'
    """
    value = _exact(number)
    if fraction_digits is None:
        digits, exponent = _significant_digits(_shortest(number))
    else:
        digits, exponent = _round_significant(value, fraction_digits + 1)
    return _sign(value) + _exponential_text(digits, exponent)


def to_fixed(number: Number, fraction_digits: int | None = None) -> str:
    """Fixed-point notation with a given count of fraction digits (default 0).

    Example:
        >>> to_fixed(3.14)
        '3'
        >>> to_fixed(3.14, 4)
        '3.1400'
        >>> to_fixed(2.5)
        '3'
    """
    value = _exact(number)
    if abs(value) >= _FIXED_LIMIT:
        return number_to_string(number)

    places = fraction_digits or 0
    with localcontext() as ctx:
        ctx.prec = _working_precision(value, places + 2)
        rounded = abs(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return _sign(value) + f"{rounded:f}"


def to_precision(number: Number, precision: int | None = None) -> str:
    """Round to a count of significant digits, in fixed or exponent form.

    Example:
        >>> to_precision(3.14, 1)
        '3'
        >>> to_precision(123456, 2)
        '1.2e+5'
        >>> to_precision(0.000123, 2)
        '0.00012'
    """
    if precision is None:
        return number_to_string(number)

    value = _exact(number)
    digits, exponent = _round_significant(value, precision)

    if exponent < -6 or exponent >= precision:
        text = _exponential_text(digits, exponent)
    elif exponent == precision - 1:
        text = digits
    elif exponent >= 0:
        text = f"{digits[: exponent + 1]}.{digits[exponent + 1 :]}"
    else:
        text = "0." + "0" * -(exponent + 1) + digits
    return _sign(value) + text


@dataclass(frozen=True, slots=True)
class NumberFormatArgs:
    """Parsed numeric format spec.

    Attributes:
        code: Mode letter as written (its case selects the output case)
        parameter: Width (integer modes) or precision, if given
        always_show_sign: A ``+`` preceded the parameter
    """

    code: str
    parameter: int | None = None
    always_show_sign: bool = False

    @property
    def mode(self) -> str:
        """Upper-case mode letter."""
        return self.code.upper()

    @property
    def upper(self) -> bool:
        """Whether letters in the output are upper-case."""
        return self.code.isupper()


class NumberFormatter(ValueFormatter):
    """Formats numbers (and numeric strings) in a base or float notation."""

    name = "NumberFormat"
    grammar = re.compile(
        rf"([BDEFGOPX])(\+?[0-9]{{1,{MAX_INTEGER_DIGITS}}})?\s*", re.IGNORECASE
    )
    allowed_types = frozenset({TypeTag.NUMBER, TypeTag.STRING})

    def preprocess(self, match: re.Match[str]) -> NumberFormatArgs:
        """Split the spec into mode letter, parameter and sign flag."""
        raw_parameter = match.group(2)
        if raw_parameter is None:
            return NumberFormatArgs(code=match.group(1))
        return NumberFormatArgs(
            code=match.group(1),
            parameter=int(raw_parameter),
            always_show_sign=raw_parameter.startswith("+"),
        )

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        """Render a number; declines precisions outside the accepted range."""
        if not isinstance(args, NumberFormatArgs):
            return None

        number: Number
        if type_tag is TypeTag.STRING:
            number = parse_float(str(value))
        elif isinstance(value, int | float | Decimal):
            number = value
        else:
            return None

        exact = _exact(number)
        if exact.is_nan():
            return "NaN"
        if exact.is_infinite():
            if exact < 0:
                return "-Infinity"
            return "+Infinity" if args.always_show_sign else "Infinity"

        if args.mode in _INTEGER_BASES:
            formatted = self._format_integer(exact, args)
        else:
            float_text = self._format_float(number, args)
            if float_text is None:
                return None
            formatted = float_text

        return formatted.upper() if args.upper else formatted.lower()

    @staticmethod
    def _format_integer(exact: Decimal, args: NumberFormatArgs) -> str:
        """Round half up, render in base, zero-pad, then prefix the sign."""
        with localcontext() as ctx:
            ctx.prec = _working_precision(exact, 2)
            integer = int((exact + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))

        digits = format(abs(integer), _INTEGER_BASES[args.mode]).rjust(args.parameter or 0, "0")
        if integer < 0:
            return f"-{digits}"
        if args.always_show_sign:
            return f"+{digits}"
        return digits

    @staticmethod
    def _format_float(number: Number, args: NumberFormatArgs) -> str | None:
        """Render in E/F/P/G notation; None if the precision is out of range."""
        parameter = args.parameter
        if parameter is not None:
            lowest = 1 if args.mode in ("P", "G") else 0
            if not lowest <= parameter <= MAX_FRACTION_DIGITS:
                return None

        match args.mode:
            case "E":
                formatted = to_exponential(number, parameter)
            case "F":
                formatted = to_fixed(number, parameter)
            case "P":
                formatted = to_precision(number, parameter)
            case _:
                exponential = to_exponential(number, parameter)
                precision = to_precision(number, parameter)
                formatted = exponential if len(exponential) < len(precision) else precision

        if args.always_show_sign:
            if not _exact(number).is_signed():
                formatted = f"+{formatted}"
            elif not formatted.startswith("-"):
                formatted = f"-{formatted}"
        return formatted
