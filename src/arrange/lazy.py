"""Deferred formatting wrappers.

LazyFormatted binds a compiled template to its arguments and renders only
when converted to text, which suits log messages and exception texts that
may never be shown. Formattable binds arguments first and accepts the
pattern later.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arrange.runtime.engine import Arranger
    from arrange.runtime.template import Template

__all__ = ["Formattable", "LazyFormatted"]


class LazyFormatted:
    """Template plus arguments, rendered on ``str()``.

    The result is not memoized: arguments are re-read on every conversion,
    so mutable arguments show their current state.

    Example:
        >>> from arrange import compile
        >>> message = compile("{} items").lazy(3)
        >>> str(message)
        '3 items'
    """

    __slots__ = ("_args", "_template")

    def __init__(self, template: Template, args: Sequence[object]) -> None:
        self._template = template
        self._args = tuple(args)

    @property
    def template(self) -> Template:
        return self._template

    @property
    def args(self) -> tuple[object, ...]:
        return self._args

    def __str__(self) -> str:
        return self._template.apply(self._args)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"LazyFormatted(pattern={self._template.pattern!r}, args={self._args!r})"


class Formattable:
    """Arguments waiting for a pattern.

    Example:
        >>> from arrange import get_default_arranger
        >>> point = get_default_arranger().formattable(3, 4)
        >>> point.arrange("({}, {})")
        '(3, 4)'
        >>> point.arrange("{1}")
        '4'
    """

    __slots__ = ("_args", "_arranger")

    def __init__(self, arranger: Arranger, args: Sequence[object]) -> None:
        self._arranger = arranger
        self._args = tuple(args)

    @property
    def args(self) -> tuple[object, ...]:
        return self._args

    def arrange(self, pattern: str) -> str:
        """Format the bound arguments with a pattern."""
        return self._arranger.apply(self._arranger.compile(pattern), self._args)

    def lazy(self, pattern: str) -> LazyFormatted:
        """Compile now, render the bound arguments on ``str()``."""
        return LazyFormatted(self._arranger.compile(pattern), self._args)

    def __repr__(self) -> str:
        return f"Formattable(args={self._args!r})"
