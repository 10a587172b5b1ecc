"""Arranger - main API for compiling and applying patterns.

An Arranger is built from one ArrangeConfig: it owns the grammar for its
delimiters, its formatter chain (extra formatters first, then the
built-ins), its locale table and, unless disabled, its template cache.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import dataclasses
import logging
import threading
from collections.abc import Sequence

from arrange.lazy import Formattable, LazyFormatted
from arrange.runtime.builtins import get_shared_registry
from arrange.runtime.cache import TemplateCache
from arrange.runtime.config import ArrangeConfig
from arrange.runtime.locale_table import LocaleTable, get_locale_table
from arrange.runtime.registry import FormatterRegistry
from arrange.runtime.template import Template
from arrange.syntax.grammar import Grammar, build_grammar
from arrange.syntax.parser import PatternCompiler

__all__ = [
    "Arranger",
    "apply_template",
    "arrange",
    "compile_template",
    "configure",
    "get_default_arranger",
]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; long patterns are cut to keep logs readable.
_LOG_TRUNCATE_DEBUG: int = 50


class Arranger:
    """Pattern compiler and template applier for one configuration.

    Thread Safety:
        Compiling and applying are safe from any number of threads. The
        template cache uses insert-if-absent, so concurrent compiles of one
        pattern all end up with the same Template.

    Examples:
        >>> arranger = Arranger()
        >>> arranger("{}_{}_{}", 1, 2, 3)
        '1_2_3'
        >>> arranger("{2}_{1}_{0}", 1, 2, 3)
        '3_2_1'
        >>> arranger("{f}{}", 4, {"f": "test"})
        'test4'

        Custom delimiters:
        >>> angle = arranger.configure(open_char="<", close_char=">")
        >>> angle("<0> {0}", "x")
        'x {0}'
    """

    __slots__ = ("_cache", "_compiler", "_config", "_locale", "_registry")

    def __init__(self, config: ArrangeConfig | None = None) -> None:
        """Initialize an engine.

        Args:
            config: Engine configuration (default: ``ArrangeConfig()``)
        """
        self._config = config if config is not None else ArrangeConfig()

        registry = get_shared_registry()
        if self._config.extra_formatters:
            registry = registry.copy()
            registry.prepend(self._config.extra_formatters)
            registry.freeze()
        self._registry: FormatterRegistry = registry

        grammar = build_grammar(self._config.open_char, self._config.close_char)
        self._compiler = PatternCompiler(grammar, self._registry)
        self._locale: LocaleTable = get_locale_table(self._config.locale)
        self._cache: TemplateCache | None = (
            None if self._config.disable_cache else TemplateCache()
        )

        logger.info(
            "Arranger initialized: delimiters=%s%s, locale=%s, formatters=%d, cache=%s",
            self._config.open_char,
            self._config.close_char,
            self._locale.code,
            len(self._registry),
            "disabled" if self._cache is None else "enabled",
        )

    @property
    def config(self) -> ArrangeConfig:
        """Configuration this engine was built from."""
        return self._config

    @property
    def grammar(self) -> Grammar:
        return self._compiler.grammar

    @property
    def registry(self) -> FormatterRegistry:
        """Frozen formatter chain in precedence order."""
        return self._registry

    @property
    def locale(self) -> LocaleTable:
        return self._locale

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    def compile(self, pattern: str) -> Template:
        """Compile a pattern into a reusable Template.

        Never raises on malformed syntax: text that is not a valid
        expression stays literal.

        Args:
            pattern: Raw pattern string

        Returns:
            Compiled Template (shared when caching is enabled)
        """
        if self._cache is not None:
            cached = self._cache.get(pattern)
            if cached is not None:
                return cached
            logger.debug("Template cache miss: %s", pattern[:_LOG_TRUNCATE_DEBUG])

        template = Template(
            tokens=self._compiler.tokenize(pattern),
            locale=self._locale,
            pattern=pattern,
        )

        if self._cache is not None:
            return self._cache.put(pattern, template)
        return template

    def template(self, pattern: str) -> Template:
        """Alias of compile()."""
        return self.compile(pattern)

    def apply(self, template: Template, args: Sequence[object]) -> str:
        """Render a compiled template against positional arguments."""
        return template.apply(args)

    def __call__(self, pattern: str, *args: object) -> str:
        """Compile (or fetch) a pattern and render it.

        Example:
            >>> Arranger()("{:X6}", 0xC0DE)
            '00C0DE'
        """
        return self.compile(pattern).apply(args)

    def lazy(self, pattern: str, *args: object) -> LazyFormatted:
        """Compile now, render on ``str()``."""
        return LazyFormatted(self.compile(pattern), args)

    def formattable(self, *args: object) -> Formattable:
        """Bind arguments now, supply the pattern later."""
        return Formattable(self, args)

    def configure(self, **changes: object) -> "Arranger":
        """Derive a new engine with some configuration fields replaced.

        This engine is left untouched.

        Raises:
            TypeError: If an option name is unknown
            ValueError: If the resulting configuration is invalid
        """
        return Arranger(dataclasses.replace(self._config, **changes))  # type: ignore[arg-type]

    def get_cache_stats(self) -> dict[str, int | float] | None:
        """Template cache statistics, or None when caching is disabled."""
        return None if self._cache is None else self._cache.get_stats()

    def clear_cache(self) -> None:
        """Drop every cached template."""
        if self._cache is not None:
            self._cache.clear()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Arranger(open_char={self._config.open_char!r}, "
            f"close_char={self._config.close_char!r}, locale={self._locale.code!r}, "
            f"cache={'enabled' if self._cache is not None else 'disabled'})"
        )


def configure(**options: object) -> Arranger:
    """Build a new engine from default options plus the given ones.

    Recognized options are the ArrangeConfig fields: ``open_char``,
    ``close_char``, ``locale``, ``extra_formatters``, ``disable_cache``.

    Example:
        >>> configure(locale="it")("{:dddd}", __import__("datetime").date(2000, 1, 1))
        'sabato'
    """
    return Arranger(ArrangeConfig(**options))  # type: ignore[arg-type]


_DEFAULT_ARRANGER: Arranger | None = None
_DEFAULT_LOCK = threading.Lock()


def get_default_arranger() -> Arranger:
    """Get the process-wide engine with default configuration.

    Built lazily on first access to avoid import-time side effects.
    """
    global _DEFAULT_ARRANGER  # noqa: PLW0603
    if _DEFAULT_ARRANGER is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_ARRANGER is None:
                _DEFAULT_ARRANGER = Arranger()
    return _DEFAULT_ARRANGER


def compile_template(pattern: str) -> Template:
    """Compile a pattern with the default engine."""
    return get_default_arranger().compile(pattern)


def apply_template(template: Template, args: Sequence[object]) -> str:
    """Render a compiled template against positional arguments."""
    return template.apply(args)


def arrange(pattern: str, *args: object) -> str:
    """Format positional arguments with a pattern using the default engine.

    Example:
        >>> arrange("{0} is {1,-6}|", "x", "ok")
        'x is ok    |'
    """
    return get_default_arranger()(pattern, *args)
