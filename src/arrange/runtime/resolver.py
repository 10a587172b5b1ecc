"""Selector resolution against positional arguments.

Resolution walks a selector's keys into the argument list:
    - ``{}``      uses the call's auto-number counter as a single index key
    - ``{name}``  (property selector) tries every positional argument in
                  order and takes the first that yields a value
    - ``{0.a.1}`` indexes the argument list, then steps into the result

Stepping into a value:
    - Mappings are looked up by key; an integer key also tries its decimal
      string form (``{0.1}`` finds ``{"1": ...}``)
    - Sequences (strings included) are indexed by non-negative integer
      key only; negative indices and names are MISSING
    - Other objects expose their attributes by name (dunder names excluded)

A selector that cannot be followed resolves to MISSING, never to an error.
Stepping into None is MISSING too; only the final value may be None.

Thread Safety:
    Resolution is a pure function of its inputs apart from the AutoNumber
    counter, which belongs to exactly one apply call.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from arrange.runtime.value_types import MISSING
from arrange.syntax.ast import Key, Selector

__all__ = ["AutoNumber", "resolve", "resolve_keys", "step_into"]


@dataclass(slots=True)
class AutoNumber:
    """Auto-numbering counter for the ``{}`` expressions of one apply call.

    Never shared between calls and never stored on a template.

    Example:
        >>> step = AutoNumber()
        >>> step.advance(), step.advance()
        (0, 1)
    """

    value: int = 0

    def advance(self) -> int:
        """Return the current index and move to the next one."""
        current = self.value
        self.value += 1
        return current


def step_into(current: object, key: Key) -> object:
    """Get one sub-value by key.

    Args:
        current: Value to step into
        key: Integer index or name; sequences take non-negative indices only

    Returns:
        Sub-value, or MISSING if there is none

    Example:
        >>> step_into({"a": 1}, "a")
        1
        >>> step_into([1, 2, 3], 2)
        3
        >>> step_into([1], 5)
        MISSING
    """
    if current is None or current is MISSING:
        return MISSING

    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        if isinstance(key, int) and (text := str(key)) in current:
            return current[text]
        return MISSING

    if isinstance(current, Sequence):
        if not isinstance(key, int) or key < 0:
            return MISSING
        try:
            return current[key]
        except IndexError:
            return MISSING

    if isinstance(key, int):
        return MISSING

    if key.startswith("__") and key.endswith("__"):
        return MISSING
    return getattr(current, key, MISSING)


def resolve_keys(keys: Sequence[Key], current: object) -> object:
    """Follow a key path, stopping at the first MISSING step."""
    for key in keys:
        current = step_into(current, key)
        if current is MISSING:
            return MISSING
    return current


def resolve(selector: Selector, args: Sequence[object], step: AutoNumber) -> object:
    """Resolve a selector against the positional arguments of one call.

    Args:
        selector: Parsed selector
        args: Positional arguments
        step: Auto-number counter of the current apply call; advanced by
            every ``{}`` whether or not it resolves

    Returns:
        Resolved value (possibly None), or MISSING

    Example:
        >>> resolve(Selector(keys=("f",), is_property=True), [4, {"f": "x"}], AutoNumber())
        'x'
    """
    if selector.is_auto:
        return resolve_keys((step.advance(),), args)

    if selector.is_property:
        for argument in args:
            value = resolve_keys(selector.keys, argument)
            if value is not MISSING:
                return value
        return MISSING

    return resolve_keys(selector.keys, args)
