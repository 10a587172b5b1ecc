"""Ordered chain of value formatters.

Order is precedence: at compile time every formatter accepting a format spec
becomes a candidate in chain order; at apply time the first candidate that
accepts the value type and renders it wins. Matching is a pure function of
(spec text, value type tag) for a given chain.

Architecture:
    - FormatterRegistry: Ordered, optionally frozen list of ValueFormatter
    - register() appends, prepend() inserts before everything registered
    - match() implements the format-spec matcher used by PatternCompiler

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Iterator

from arrange.runtime.formatter import ValueFormatter
from arrange.runtime.value_types import NO_MATCH
from arrange.syntax.ast import FormatCandidate

__all__ = ["FormatterRegistry"]


class FormatterRegistry:
    """Manages the ordered formatter chain.

    Supports list-like introspection:
        - list_formatters(): Names in precedence order
        - get(name): First formatter with that name
        - __iter__: Iterate over formatters in precedence order
        - __len__: Count registered formatters
        - __contains__: Check if a formatter name exists (supports 'in')

    Memory Optimization:
        Uses __slots__ for memory efficiency (avoids per-instance __dict__).

    Example:
        >>> registry = FormatterRegistry()
        >>> registry.register(my_formatter)
        >>> "MyFormatter" in registry
        True
        >>> len(registry)
        1
    """

    __slots__ = ("_formatters", "_frozen")

    def __init__(self, formatters: Iterable[ValueFormatter] = ()) -> None:
        """Initialize registry.

        Args:
            formatters: Initial formatters, highest precedence first
        """
        self._formatters: list[ValueFormatter] = list(formatters)
        self._frozen = False

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify frozen FormatterRegistry. "
                "Use copy() to get a modifiable registry."
            )
            raise TypeError(msg)

    def register(self, formatter: ValueFormatter) -> None:
        """Append a formatter (lowest precedence so far).

        Raises:
            TypeError: If the registry is frozen
        """
        self._check_mutable()
        self._formatters.append(formatter)

    def prepend(self, formatters: Iterable[ValueFormatter]) -> None:
        """Insert formatters before all registered ones, keeping their order.

        Raises:
            TypeError: If the registry is frozen
        """
        self._check_mutable()
        self._formatters[:0] = list(formatters)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """Whether the registry rejects modifications."""
        return self._frozen

    def match(self, format_spec: str) -> tuple[FormatCandidate, ...]:
        """Collect every formatter accepting a format spec.

        No short-circuit: the applier may need later candidates when an
        earlier one declines the runtime value.

        Args:
            format_spec: Spec text (colon removed, delimiters unescaped)

        Returns:
            Candidates in precedence order
        """
        candidates: list[FormatCandidate] = []
        for formatter in self._formatters:
            args = formatter.matches(format_spec)
            if args is not NO_MATCH:
                candidates.append(FormatCandidate(formatter=formatter, args=args))
        return tuple(candidates)

    def get(self, name: str) -> ValueFormatter | None:
        """Get the first formatter registered under a name."""
        return next((f for f in self._formatters if f.name == name), None)

    def list_formatters(self) -> list[str]:
        """List formatter names in precedence order.

        Example:
            >>> from arrange.runtime.builtins import create_default_registry
            >>> create_default_registry().list_formatters()
            ['NumberFormat', 'JsonFormat', 'ToStringFormat', 'DateFormat', 'DefaultFormat']
        """
        return [formatter.name for formatter in self._formatters]

    def copy(self) -> "FormatterRegistry":
        """Create an unfrozen shallow copy (formatters are shared)."""
        return FormatterRegistry(self._formatters)

    def __iter__(self) -> Iterator[ValueFormatter]:
        """Iterate over formatters in precedence order."""
        return iter(self._formatters)

    def __len__(self) -> int:
        """Count of registered formatters."""
        return len(self._formatters)

    def __contains__(self, name: object) -> bool:
        """Check if a formatter name is registered using 'in' operator."""
        return any(formatter.name == name for formatter in self._formatters)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"FormatterRegistry(formatters={len(self._formatters)}, frozen={self._frozen})"
