"""Tests for the Arranger engine, configuration and module-level API."""

import logging
from datetime import date

import pytest

from arrange import (
    ArrangeConfig,
    Arranger,
    CallableFormatter,
    Formattable,
    LazyFormatted,
    TypeTag,
    configure,
    get_default_arranger,
)
from arrange.errors import FormattingError
from arrange.runtime.locale_table import LocaleTable, clear_locale_table_cache


def shout(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    return str(value).upper()


def hexagon(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    return "hex!"


def pass_on(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    return None


def broken(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    msg = "broken formatter"
    raise FormattingError(msg, "??")


class TestArrangeConfig:
    """Test configuration validation."""

    def test_defaults(self) -> None:
        """Braces, English, no extras, cache on."""
        config = ArrangeConfig()
        assert (config.open_char, config.close_char) == ("{", "}")
        assert config.locale == "en"
        assert config.extra_formatters == ()
        assert not config.disable_cache

    @pytest.mark.parametrize(
        ("open_char", "close_char"),
        [("{", "{"), ("", "}"), ("{{", "}"), (" ", "}"), ("{", "\t")],
    )
    def test_invalid_delimiters(self, open_char: str, close_char: str) -> None:
        """Delimiters are two distinct single non-whitespace characters."""
        with pytest.raises(ValueError, match="char"):
            ArrangeConfig(open_char=open_char, close_char=close_char)

    def test_extra_formatters_must_be_formatters(self) -> None:
        """Plain callables are rejected."""
        with pytest.raises(TypeError, match="ValueFormatter"):
            ArrangeConfig(extra_formatters=[shout])  # type: ignore[list-item]

    def test_extra_formatters_become_tuple(self) -> None:
        """Any iterable is frozen to a tuple."""
        formatter = CallableFormatter(shout)
        config = ArrangeConfig(extra_formatters=iter([formatter]))
        assert config.extra_formatters == (formatter,)

    def test_unknown_option(self) -> None:
        """configure() rejects names that are not config fields."""
        with pytest.raises(TypeError):
            configure(bogus=1)


class TestArranger:
    """Test one engine end to end."""

    def test_call(self, arranger: Arranger) -> None:
        """Calling the engine compiles and applies."""
        assert arranger("{0} {1}", "a", "b") == "a b"

    def test_apply(self, arranger: Arranger) -> None:
        """apply() renders a compiled template."""
        assert arranger.apply(arranger.compile("{}+{}"), [1, 2]) == "1+2"

    def test_template_alias(self, arranger: Arranger) -> None:
        """template() is compile()."""
        assert arranger.template("{}") is arranger.compile("{}")

    def test_properties(self, arranger: Arranger) -> None:
        """Engines expose their configuration."""
        assert arranger.config == ArrangeConfig()
        assert arranger.grammar.open_char == "{"
        assert arranger.registry.frozen
        assert arranger.locale.code == "en"
        assert arranger.cache_enabled

    def test_shares_builtin_registry(self) -> None:
        """Engines without extras share one formatter chain."""
        assert Arranger().registry is Arranger().registry

    def test_repr(self, arranger: Arranger) -> None:
        """Repr lists the main options."""
        assert repr(arranger) == (
            "Arranger(open_char='{', close_char='}', locale='en', cache=enabled)"
        )

    def test_lazy(self, arranger: Arranger) -> None:
        """lazy() returns a deferred rendering."""
        message = arranger.lazy("{} items", 3)
        assert isinstance(message, LazyFormatted)
        assert str(message) == "3 items"

    def test_formattable(self, arranger: Arranger) -> None:
        """formattable() binds arguments first."""
        bound = arranger.formattable(3, 4)
        assert isinstance(bound, Formattable)
        assert bound.arrange("{1}-{0}") == "4-3"


class TestDerivedEngines:
    """Test configure() and custom options."""

    def test_configure_leaves_original(self, arranger: Arranger) -> None:
        """Deriving creates a new engine."""
        angle = arranger.configure(open_char="<", close_char=">")
        assert angle is not arranger
        assert arranger("<0>", "x") == "<0>"
        assert angle("<0>", "x") == "x"

    def test_custom_delimiters(self) -> None:
        """Braces are plain text under other delimiters."""
        angle = configure(open_char="<", close_char=">")
        assert angle("<0> {0} <<>>", "x") == "x {0} <>"
        assert angle("<0:yyyy'<<'>", date(2000, 1, 1)) == "2000<"

    def test_metacharacter_delimiters(self) -> None:
        """Regex metacharacters are escaped."""
        square = configure(open_char="[", close_char="]")
        assert square("[0,3][[", "x") == "  x["
        assert configure(open_char="(", close_char=")")("(0:X)", 255) == "FF"

    def test_locale(self) -> None:
        """Locale selects date names."""
        assert configure(locale="it")("{:MMMM}", date(2000, 2, 1)) == "febbraio"

    def test_extra_formatter_is_tried_first(self) -> None:
        """Extras take precedence over built-ins."""
        custom = configure(extra_formatters=[CallableFormatter(hexagon, grammar="X")])
        assert custom("{:X}", 255) == "hex!"
        assert custom("{:X4}", 255) == "00FF"
        assert custom.registry.list_formatters()[0] == "hexagon"

    def test_extra_formatter_type_filter(self) -> None:
        """Values outside the allowed types reach the built-ins."""
        upper = CallableFormatter(shout, grammar="U", allowed_types=[TypeTag.STRING])
        custom = configure(extra_formatters=[upper])
        assert custom("{:U}", "ab") == "AB"
        assert custom("{:U}", 5) == "5"

    def test_extra_formatter_declines(self) -> None:
        """Declining extras fall through to the next candidate."""
        custom = configure(extra_formatters=[CallableFormatter(pass_on)])
        assert custom("{:D3}", 7) == "007"

    def test_extra_formatter_fallback(self) -> None:
        """A FormattingError renders its fallback text."""
        custom = configure(extra_formatters=[CallableFormatter(broken, grammar="B!")])
        assert custom("[{:B!}]", 1) == "[??]"

    def test_shared_registry_untouched_by_extras(self) -> None:
        """Extras never leak into other engines."""
        configure(extra_formatters=[CallableFormatter(hexagon, grammar="X")])
        assert Arranger()("{:X}", 255) == "FF"


class TestTemplateCaching:
    """Test the engine's template cache."""

    def test_same_template_object(self, arranger: Arranger) -> None:
        """Repeated compiles return the cached template."""
        assert arranger.compile("{}") is arranger.compile("{}")

    def test_stats(self, arranger: Arranger) -> None:
        """Hits and misses are counted per engine."""
        arranger("{}", 1)
        arranger("{}", 2)
        arranger("{0}", 3)
        assert arranger.get_cache_stats() == {
            "size": 2,
            "hits": 1,
            "misses": 2,
            "hit_rate": 33.33,
        }

    def test_clear(self, arranger: Arranger) -> None:
        """Clearing drops templates and counters."""
        first = arranger.compile("{}")
        arranger.clear_cache()
        assert arranger.get_cache_stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}
        assert arranger.compile("{}") is not first

    def test_disabled(self, uncached: Arranger) -> None:
        """Without a cache every compile is fresh and stats are None."""
        assert not uncached.cache_enabled
        assert uncached.compile("{}") is not uncached.compile("{}")
        assert uncached.get_cache_stats() is None
        uncached.clear_cache()
        assert uncached("{}", 1) == "1"

    def test_cached_and_uncached_agree(self, arranger: Arranger, uncached: Arranger) -> None:
        """Caching never changes output."""
        pattern = "{0,5:X}|{1.a}|{{x}}"
        args = (255, {"a": "b"})
        assert arranger(pattern, *args) == uncached(pattern, *args) == "   FF|b|{x}"


class TestLogging:
    """Test the log records engines emit."""

    def test_init_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Creating an engine logs its configuration at INFO."""
        with caplog.at_level(logging.INFO, logger="arrange.runtime.engine"):
            Arranger(ArrangeConfig(locale="it", disable_cache=True))
        assert "Arranger initialized" in caplog.text
        assert "locale=it" in caplog.text
        assert "cache=disabled" in caplog.text

    def test_cache_miss_is_logged(
        self, arranger: Arranger, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Misses log the pattern at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="arrange.runtime.engine"):
            arranger.compile("{} logged")
        assert "Template cache miss: {} logged" in caplog.text

    def test_unknown_locale_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales fall back to English with a warning."""
        clear_locale_table_cache()
        with caplog.at_level(logging.WARNING, logger="arrange.runtime.locale_table"):
            engine = configure(locale="zz")
        assert engine.locale.code == "en"
        assert "Unknown locale 'zz'" in caplog.text
        assert engine("{:MMMM}", date(2000, 1, 1)) == "January"


class TestModuleLevelApi:
    """Test the default engine helpers."""

    def test_default_arranger_is_singleton(self) -> None:
        """The default engine is built once."""
        assert get_default_arranger() is get_default_arranger()

    def test_default_arranger_uses_defaults(self) -> None:
        """The default engine has the default configuration."""
        assert get_default_arranger().config == ArrangeConfig()

    def test_configure_builds_new_engine(self) -> None:
        """configure() never returns the default engine."""
        assert configure() is not get_default_arranger()
