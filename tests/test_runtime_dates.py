"""Tests for the date value formatter."""

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo

import pytest

from arrange import arrange, configure
from arrange.enums import DateElement, TypeTag
from arrange.runtime.dates import DateField, DateFormatter, parse_date_template
from arrange.runtime.locale_table import get_locale_table


class NamelessZone(tzinfo):
    """Fixed +01:30 offset without a zone name."""

    def utcoffset(self, dt: datetime | None) -> timedelta:
        return timedelta(hours=1, minutes=30)

    def tzname(self, dt: datetime | None) -> str | None:
        return None

    def dst(self, dt: datetime | None) -> timedelta:
        return timedelta(0)


class TestTemplateParsing:
    """Test splitting date templates into fields and literals."""

    def test_fields_and_literals(self) -> None:
        """Runs of one letter are fields, everything else is literal."""
        assert parse_date_template("yyyy-MM") == (
            DateField(DateElement.YEAR, 4),
            "-",
            DateField(DateElement.MONTH, 2),
        )

    def test_long_runs_split(self) -> None:
        """Runs longer than a field allows start a new field."""
        assert parse_date_template("ddddd") == (
            DateField(DateElement.DAY, 4),
            DateField(DateElement.DAY, 1),
        )

    def test_quoted_literals_merge(self) -> None:
        """Quoted text is unquoted and merged with neighbouring literals."""
        assert parse_date_template("'it''s' / \"d\"") == ("it's / d",)

    def test_percent_prefix_is_dropped(self) -> None:
        """%d is a single unpadded day."""
        assert parse_date_template("%d") == (DateField(DateElement.DAY, 1),)

    def test_separators_are_literal(self) -> None:
        """Colon and slash are plain text."""
        assert parse_date_template("H:m/s") == (
            DateField(DateElement.HOUR_24, 1),
            ":",
            DateField(DateElement.MINUTE, 1),
            "/",
            DateField(DateElement.SECOND, 1),
        )


class TestDateFields:
    """Test rendering of every field."""

    def test_long_format(self, moment: datetime) -> None:
        """Zero-padded date and time with trimmed fraction."""
        assert arrange("{:yyyy/MM/dd hh:mm:ss.FFF}", moment) == "2000/01/02 03:04:05.678"
        assert arrange("{:yyyy/MM/dd hh:mm:ss.fff}", moment) == "2000/01/02 03:04:05.678"

    def test_short_format(self, moment: datetime) -> None:
        """Unpadded fields."""
        assert arrange("{:y-M-d h:m:s.F}", moment) == "0-1-2 3:4:5.6"

    def test_day_and_weekday(self) -> None:
        """d/dd numbers, ddd/dddd names."""
        assert arrange("{:d dd ddd dddd}", datetime(2000, 1, 1)) == "1 01 Sat Saturday"

    def test_month(self) -> None:
        """M/MM numbers, MMM/MMMM names."""
        assert arrange("{:M MM MMM MMMM}", datetime(2000, 1, 1)) == "1 01 Jan January"

    def test_fractions(self) -> None:
        """f truncates, F also strips trailing zeros."""
        pattern = "{:f,ff,fff,F,FF,FFF}|{:f,ff,fff,F,FF,FFF}|{:f,ff,fff,F,FF,FFF}"
        values = (
            datetime(2000, 1, 2, 3, 4, 5, 678000),
            datetime(2000, 1, 2, 3, 4, 5, 1000),
            datetime(2000, 1, 2, 3, 4, 5, 0),
        )
        assert arrange(pattern, *values) == "6,67,678,6,67,678|0,00,001,0,0,001|0,00,000,0,0,0"

    def test_hours_and_ampm(self) -> None:
        """12-hour clock, 24-hour clock and AM/PM labels."""
        pattern = "{:h hh H HH t tt}|{:h hh H HH t tt}|{:h hh H HH t tt}|{:h hh H HH t tt}"
        values = (
            datetime(2000, 1, 1, 3),
            datetime(2000, 1, 1, 15),
            datetime(2000, 1, 1, 12),
            datetime(2000, 1, 1, 0),
        )
        expected = "3 03 3 03 A AM|3 03 15 15 P PM|12 12 12 12 P PM|12 12 0 00 A AM"
        assert arrange(pattern, *values) == expected

    def test_minutes_and_seconds(self) -> None:
        """m/mm and s/ss."""
        assert arrange("{:m mm}", datetime(2000, 1, 2, 3, 4)) == "4 04"
        assert arrange("{:s ss}", datetime(2000, 1, 2, 3, 4, 5)) == "5 05"

    def test_years(self) -> None:
        """Two-digit years for y/yy, padded full years beyond."""
        pattern = "{:y yy yyy yyyy yyyyy}|{:y yy yyy yyyy yyyyy}|{:y yy yyy yyyy yyyyy}"
        values = (datetime(2000, 1, 1), datetime(2010, 1, 1), datetime(100, 1, 1))
        expected = "0 00 2000 2000 02000|10 10 2010 2010 02010|0 00 100 0100 00100"
        assert arrange(pattern, *values) == expected

    def test_utc_offset(self) -> None:
        """z, zz and zzz use the ISO sign."""
        west = datetime(2000, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=-1)))
        assert arrange("{:z zz zzz}", west) == "-1 -01 -01:00"
        east = datetime(2000, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        assert arrange("{:z zz zzz}", east) == "+5 +05 +05:30"

    def test_zone_name(self) -> None:
        """K prints the zone name when there is one."""
        moment = datetime(2000, 1, 2, tzinfo=timezone(timedelta(hours=2), "CEST"))
        assert arrange("{:K}", moment) == "CEST"

    def test_zone_name_falls_back_to_offset(self) -> None:
        """Zones without a name print their offset."""
        moment = datetime(2000, 1, 2, tzinfo=NamelessZone())
        assert arrange("{:K}", moment) == "+01:30"

    def test_local_zone_is_used_for_naive_values(self, moment: datetime) -> None:
        """Naive values get the machine's zone; the shape is stable."""
        text = arrange("{:zzz}", moment)
        assert text[0] in "+-"
        assert text[3] == ":"
        assert len(text) == 6

    def test_other_characters_are_verbatim(self, moment: datetime) -> None:
        """Letters without a meaning are copied."""
        assert arrange("{:'Year' yyyy, 'day' d!}", moment) == "Year 2000, day 2!"

    def test_escaped_delimiters_in_template(self, moment: datetime) -> None:
        """Doubled delimiters reach the template as single ones."""
        assert arrange("{0:'{{'dd'}}'}", moment) == "{02}"


class TestDateValues:
    """Test which values the formatter accepts."""

    def test_plain_date_is_midnight(self) -> None:
        """Dates render with a zero time."""
        assert arrange("{:yyyy-MM-dd HH:mm}", date(2000, 1, 2)) == "2000-01-02 00:00"

    def test_non_dates_fall_through(self) -> None:
        """Other values reach the catch-all."""
        assert arrange("{:yyyy}", "text") == "text"
        assert arrange("{:yyyy}", 12) == "12"

    def test_accepts_dates_only(self) -> None:
        """The type filter lets only dates through."""
        formatter = DateFormatter()
        assert formatter.accepts(TypeTag.DATE)
        assert not formatter.accepts(TypeTag.STRING)

    def test_decline_unexpected_value(self) -> None:
        """A non-date under a DATE tag is declined."""
        formatter = DateFormatter()
        args = parse_date_template("yyyy")
        assert formatter.format("2000", TypeTag.DATE, args, get_locale_table()) is None

    def test_offset_failure_declines(self, caplog: pytest.LogCaptureFixture) -> None:
        """A zone whose offset cannot be computed makes the formatter decline."""

        class BrokenZone(tzinfo):
            def utcoffset(self, dt: datetime | None) -> timedelta:
                msg = "no offset"
                raise ValueError(msg)

            def tzname(self, dt: datetime | None) -> str:
                return "broken"

            def dst(self, dt: datetime | None) -> timedelta:
                return timedelta(0)

        formatter = DateFormatter()
        args = parse_date_template("z")
        moment = datetime(2000, 1, 1, tzinfo=BrokenZone())
        with caplog.at_level(logging.DEBUG, logger="arrange.runtime.dates"):
            assert formatter.format(moment, TypeTag.DATE, args, get_locale_table()) is None
        assert "declined" in caplog.text


class TestLocalizedNames:
    """Test locale-specific names."""

    def test_italian_names(self) -> None:
        """Names come from the configured locale."""
        italian = configure(locale="it")
        assert italian("{:dddd d MMMM}", datetime(2000, 1, 1)) == "sabato 1 gennaio"

    def test_locale_tag_variants(self) -> None:
        """Tags are case-insensitive and accept - or _."""
        assert configure(locale="IT-it")("{:MMMM}", date(2000, 1, 1)) == "gennaio"
