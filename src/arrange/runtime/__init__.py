"""arrange runtime package.

Provides value formatting, selector resolution, compiled templates and the
Arranger engine. Depends on the syntax package for tokenizing.

Python 3.13+.
"""

from .builtins import (
    DefaultFormatter,
    JsonFormatter,
    StringFormatter,
    create_default_registry,
    get_shared_registry,
)
from .cache import TemplateCache
from .config import ArrangeConfig
from .dates import DateFormatter
from .engine import Arranger, configure, get_default_arranger
from .formatter import CallableFormatter, ValueFormatter
from .locale_table import LocaleTable, get_locale_table
from .numbers import NumberFormatter
from .registry import FormatterRegistry
from .resolver import AutoNumber, resolve
from .template import Template
from .value_types import MISSING, NO_MATCH, type_tag_of

__all__ = [
    "MISSING",
    "NO_MATCH",
    "ArrangeConfig",
    "Arranger",
    "AutoNumber",
    "CallableFormatter",
    "DateFormatter",
    "DefaultFormatter",
    "FormatterRegistry",
    "JsonFormatter",
    "LocaleTable",
    "NumberFormatter",
    "StringFormatter",
    "Template",
    "TemplateCache",
    "ValueFormatter",
    "configure",
    "create_default_registry",
    "get_default_arranger",
    "get_locale_table",
    "get_shared_registry",
    "resolve",
    "type_tag_of",
]
