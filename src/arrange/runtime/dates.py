"""Date value formatter.

Any non-empty format spec is a date template. The template is split into
fields (maximal runs of one field letter) and literal text:

    d dd          Day of month, unpadded / zero-padded
    ddd dddd      Weekday name, abbreviated / full
    M MM          Month number, unpadded / zero-padded
    MMM MMMM      Month name, abbreviated / full
    f ff fff      Fraction of second truncated to 1-3 digits, zero-padded
    F FF FFF      As f, with trailing zeros removed ("0" if nothing is left)
    h hh          Hour on a 12-hour clock (1-12)
    H HH          Hour on a 24-hour clock (0-23)
    m mm          Minute
    s ss          Second
    t tt          First letter / full text of the AM/PM label
    K             Time zone name, or the UTC offset as +HH:MM
    y yy          Last two digits of the year, unpadded / zero-padded
    yyy..yyyyy    Full year zero-padded to 3-5 digits
    z zz zzz      UTC offset hours, unpadded / zero-padded / with :MM
    'txt' "txt"   Literal text; the quote is escaped by doubling it
    : /           Literal separators

Every other character is copied verbatim. A ``%`` directly before a day
field is dropped, so ``%d`` is a single unpadded day.

Naive datetimes are local time. Plain dates are rendered as midnight.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from arrange.enums import DateElement, TypeTag
from arrange.runtime.formatter import ValueFormatter
from arrange.syntax.selector import unquote_string

if TYPE_CHECKING:
    from arrange.runtime.locale_table import LocaleTable

__all__ = ["DateField", "DateFormatter", "parse_date_template"]

logger = logging.getLogger(__name__)

_ELEMENTS = re.compile(
    r"""(%?d{1,4}|M{1,4}|f{1,3}|F{1,3}|h{1,2}|H{1,2}|m{1,2}|s{1,2}|t{1,2}|[K:/]|y{1,5}|z{1,3}"""
    r"""|"(?:[^"]|"")*"|'(?:[^']|'')*')"""
)

_LITERAL_ELEMENTS = frozenset({":", "/"})


@dataclass(frozen=True, slots=True)
class DateField:
    """One date field of a template: a letter and its repeat count."""

    element: DateElement
    count: int


type DatePart = str | DateField


def parse_date_template(template: str) -> tuple[DatePart, ...]:
    """Split a date template into literal strings and DateField entries.

    Adjacent literals are merged; empty literals are dropped.

    Example:
        >>> parts = parse_date_template("dd/MM 'at' H")
        >>> [p if isinstance(p, str) else p.element * p.count for p in parts]
        ['dd', '/', 'MM', ' at ', 'H']
    """
    parts: list[DatePart] = []

    # re.split with one group puts captured fields at odd positions
    for index, piece in enumerate(_ELEMENTS.split(template)):
        part: DatePart
        if index % 2 == 0 or piece in _LITERAL_ELEMENTS:
            part = piece
        else:
            piece = piece.removeprefix("%")
            if piece[0] in "'\"":
                part = unquote_string(piece)
            else:
                part = DateField(DateElement(piece[0]), len(piece))

        if part == "":
            continue
        if isinstance(part, str) and parts and isinstance(parts[-1], str):
            parts[-1] += part
        else:
            parts.append(part)

    return tuple(parts)


def _utc_offset(moment: datetime) -> timedelta:
    """UTC offset of a moment; naive moments use the local zone."""
    offset = moment.utcoffset()
    if offset is None:
        offset = moment.astimezone().utcoffset()
    return offset if offset is not None else timedelta(0)


def _offset_parts(moment: datetime) -> tuple[str, int, int]:
    """(sign, hours, minutes) of the UTC offset, ISO sign convention."""
    minutes = int(_utc_offset(moment).total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return sign, hours, minutes


def _zone_name(moment: datetime) -> str:
    name = moment.tzname() if moment.tzinfo is not None else moment.astimezone().tzname()
    if name:
        return name
    sign, hours, minutes = _offset_parts(moment)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _render_field(part: DateField, moment: datetime, locale: LocaleTable) -> str:
    count = part.count
    match part.element:
        case DateElement.DAY:
            if count <= 2:
                return str(moment.day).zfill(count)
            # isoweekday: Monday 1 .. Sunday 7; tables start on Sunday
            weekday = moment.isoweekday() % 7
            if count == 3:
                return locale.weekday_names_short[weekday]
            return locale.weekday_names[weekday]
        case DateElement.MONTH:
            if count <= 2:
                return str(moment.month).zfill(count)
            if count == 3:
                return locale.month_names_short[moment.month - 1]
            return locale.month_names[moment.month - 1]
        case DateElement.FRACTION:
            return str(moment.microsecond // 10 ** (6 - count)).zfill(count)
        case DateElement.FRACTION_TRIMMED:
            return str(moment.microsecond // 10 ** (6 - count)).zfill(count).rstrip("0") or "0"
        case DateElement.HOUR_12:
            return str(moment.hour % 12 or 12).zfill(count)
        case DateElement.HOUR_24:
            return str(moment.hour).zfill(count)
        case DateElement.MINUTE:
            return str(moment.minute).zfill(count)
        case DateElement.SECOND:
            return str(moment.second).zfill(count)
        case DateElement.AMPM:
            return locale.ampm_labels[0 if moment.hour < 12 else 1][:count]
        case DateElement.TIMEZONE_NAME:
            return _zone_name(moment)
        case DateElement.YEAR:
            year = moment.year if count > 2 else moment.year % 100
            return str(year).zfill(count)
        case DateElement.UTC_OFFSET:
            sign, hours, minutes = _offset_parts(moment)
            text = f"{sign}{str(hours).zfill(min(count, 2))}"
            if count == 3:
                text += f":{minutes:02d}"
            return text


class DateFormatter(ValueFormatter):
    """Renders dates and datetimes through a date template."""

    name = "DateFormat"
    grammar = re.compile(r".+", re.DOTALL)
    allowed_types = frozenset({TypeTag.DATE})

    def preprocess(self, match: re.Match[str]) -> tuple[DatePart, ...]:
        return parse_date_template(match.group(0))

    def format(
        self,
        value: object,
        type_tag: TypeTag,
        args: object,
        locale: LocaleTable,
    ) -> str | None:
        """Render the template; declines values that are not dates.

        Moments whose UTC offset cannot be computed (far outside the
        platform's time range) decline as well.
        """
        if not isinstance(value, date) or not isinstance(args, tuple):
            return None
        moment = value if isinstance(value, datetime) else datetime.combine(value, time())

        try:
            return "".join(
                part if isinstance(part, str) else _render_field(part, moment, locale)
                for part in args
            )
        except (OverflowError, OSError, ValueError) as e:
            logger.debug("Date formatter declined %r: %s", moment, e)
            return None
