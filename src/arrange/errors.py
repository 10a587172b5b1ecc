"""Exception hierarchy for arrange.

Compiling and applying templates never raises in normal operation: malformed
patterns degrade to literal text and missing data renders empty. The only
exceptions that escape the public API are configuration errors (``ValueError``
from ``ArrangeConfig`` and ``TypeError`` when mutating a frozen registry).

FormattingError is the internal channel through which a value formatter
reports a runtime failure together with a best-effort replacement text.

Python 3.13+. Zero external dependencies.
"""

__all__ = ["ArrangeError", "FormattingError"]


class ArrangeError(Exception):
    """Base exception for all arrange errors."""


class FormattingError(ArrangeError):
    """Raised when a value formatter cannot render its value.

    Unlike silent fallbacks, this error carries the reason for the failure
    up to the template applier, which logs it and emits the fallback value
    instead of the formatted text.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
