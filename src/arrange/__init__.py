"""arrange - pattern-based string formatting with pluggable value formatters.

Compiles patterns such as ``"{name,-10}|{0:X4}|{:yyyy-MM-dd}"`` into reusable
templates and applies them to positional arguments. Malformed patterns never
raise: text that is not a valid expression is rendered literally.

Public API:
    arrange - Format arguments with a pattern (default engine)
    compile - Compile a pattern into a Template (default engine)
    apply - Render a Template against an argument list
    configure - Build an engine with custom delimiters, locale or formatters
    Arranger - Engine for one configuration
    ArrangeConfig - Immutable engine configuration
    Template - Compiled pattern
    LazyFormatted, Formattable - Deferred formatting wrappers

Extension:
    ValueFormatter - Base class for custom value formatters
    CallableFormatter - Value formatter built from plain callables
    FormatterRegistry - Ordered formatter chain
    TypeTag - Closed classification of values passed to formatters

Exceptions:
    ArrangeError - Base exception class
    FormattingError - Formatter failure carrying a fallback text

Submodules:
    arrange.syntax - Grammar, tokens and the pattern compiler
    arrange.runtime - Formatters, resolver, templates and the engine
"""

# Essential Public API - Minimal exports for clean namespace
from .enums import TypeTag
from .errors import ArrangeError, FormattingError
from .lazy import Formattable, LazyFormatted
from .runtime import (
    MISSING,
    ArrangeConfig,
    Arranger,
    CallableFormatter,
    FormatterRegistry,
    Template,
    ValueFormatter,
    configure,
    get_default_arranger,
)
from .runtime.engine import apply_template as apply
from .runtime.engine import arrange
from .runtime.engine import compile_template as compile  # noqa: A004

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("arrange")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "MISSING",
    "ArrangeConfig",
    "ArrangeError",
    "Arranger",
    "CallableFormatter",
    "Formattable",
    "FormattingError",
    "FormatterRegistry",
    "LazyFormatted",
    "Template",
    "TypeTag",
    "ValueFormatter",
    "__version__",
    "apply",
    "arrange",
    "compile",
    "configure",
    "get_default_arranger",
]
