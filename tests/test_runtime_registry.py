"""Tests for formatter descriptors and the formatter chain."""

import re

import pytest

from arrange import CallableFormatter, FormatterRegistry, TypeTag, ValueFormatter
from arrange.runtime.locale_table import LocaleTable, get_locale_table
from arrange.runtime.value_types import NO_MATCH


def shout(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    return str(value).upper()


def never(value: object, type_tag: TypeTag, args: object, locale: LocaleTable) -> str | None:
    return None


class TestValueFormatter:
    """Test the base descriptor."""

    def test_defaults_accept_everything(self) -> None:
        """No grammar and no type filter."""
        formatter = ValueFormatter()
        assert formatter.accepts(TypeTag.NULL)
        assert isinstance(formatter.matches(""), re.Match)

    def test_format_is_abstract(self) -> None:
        """Subclasses must implement format()."""
        with pytest.raises(NotImplementedError):
            ValueFormatter().format(1, TypeTag.NUMBER, None, get_locale_table())

    def test_repr(self) -> None:
        """Repr names the class and formatter."""
        assert repr(ValueFormatter()) == "ValueFormatter(name='ValueFormatter')"


class TestCallableFormatter:
    """Test formatters built from callables."""

    def test_name_defaults_to_function_name(self) -> None:
        """The callable's name identifies the formatter."""
        assert CallableFormatter(shout).name == "shout"
        assert CallableFormatter(shout, name="Loud").name == "Loud"

    def test_string_grammar_is_compiled(self) -> None:
        """Grammars given as text are compiled and full-matched."""
        formatter = CallableFormatter(shout, grammar=r"U+")
        assert formatter.matches("UU") is not NO_MATCH
        assert formatter.matches("UUx") is NO_MATCH

    def test_allowed_types(self) -> None:
        """Type filters become frozensets."""
        formatter = CallableFormatter(shout, allowed_types=[TypeTag.STRING])
        assert formatter.allowed_types == frozenset({TypeTag.STRING})
        assert not formatter.accepts(TypeTag.NUMBER)

    def test_preprocess_can_reject(self) -> None:
        """A preprocess returning NO_MATCH rejects the spec."""
        formatter = CallableFormatter(
            shout,
            grammar=r"U(\d)",
            preprocess=lambda match: NO_MATCH if match.group(1) == "0" else int(match.group(1)),
        )
        assert formatter.matches("U3") == 3
        assert formatter.matches("U0") is NO_MATCH

    def test_format_delegates(self) -> None:
        """format() calls the wrapped function."""
        formatter = CallableFormatter(shout)
        assert formatter.format("ab", TypeTag.STRING, None, get_locale_table()) == "AB"


class TestFormatterRegistry:
    """Test chain manipulation and matching."""

    def test_register_appends(self) -> None:
        """Registered formatters go last."""
        registry = FormatterRegistry([CallableFormatter(shout)])
        registry.register(CallableFormatter(never))
        assert registry.list_formatters() == ["shout", "never"]

    def test_prepend_keeps_order(self) -> None:
        """Prepended formatters go first, in the given order."""
        registry = FormatterRegistry([CallableFormatter(shout)])
        registry.prepend([CallableFormatter(never, name="a"), CallableFormatter(never, name="b")])
        assert registry.list_formatters() == ["a", "b", "shout"]

    def test_lookup(self) -> None:
        """Names support 'in' and get()."""
        formatter = CallableFormatter(shout)
        registry = FormatterRegistry([formatter])
        assert "shout" in registry
        assert "never" not in registry
        assert registry.get("shout") is formatter
        assert registry.get("never") is None
        assert len(registry) == 1
        assert list(registry) == [formatter]

    def test_frozen_rejects_changes(self) -> None:
        """Frozen registries raise TypeError on every mutation."""
        registry = FormatterRegistry()
        registry.freeze()
        with pytest.raises(TypeError):
            registry.register(CallableFormatter(shout))
        with pytest.raises(TypeError):
            registry.prepend([CallableFormatter(shout)])

    def test_copy_is_unfrozen(self) -> None:
        """Copies share formatters but not the frozen flag."""
        registry = FormatterRegistry([CallableFormatter(shout)])
        registry.freeze()
        copy = registry.copy()
        assert not copy.frozen
        copy.register(CallableFormatter(never))
        assert len(registry) == 1
        assert len(copy) == 2

    def test_match_keeps_every_candidate(self) -> None:
        """Matching does not stop at the first accepting formatter."""
        registry = FormatterRegistry(
            [
                CallableFormatter(shout, grammar=r"U"),
                CallableFormatter(never, grammar=r"V"),
                CallableFormatter(never, name="any"),
            ]
        )
        assert [c.formatter.name for c in registry.match("U")] == ["shout", "any"]
        assert [c.formatter.name for c in registry.match("")] == ["any"]

    def test_repr(self) -> None:
        """Repr shows size and state."""
        assert repr(FormatterRegistry()) == "FormatterRegistry(formatters=0, frozen=False)"
