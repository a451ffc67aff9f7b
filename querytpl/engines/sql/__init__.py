"""
Query template compiler: placeholders, conditional blocks, skip signals.

Exports: Database, compile_query, new_skip_signal, parse_placeholders,
check_template_safety and the error types.
"""

from querytpl.engines.sql.dialect import Dialect
from querytpl.engines.sql.errors import (
    InsufficientArgumentsError,
    QueryTemplateError,
    TypeMismatchError,
    UnknownPlaceholderError,
)
from querytpl.engines.sql.parser import parse_placeholders
from querytpl.engines.sql.safety import check_template_safety
from querytpl.engines.sql.skip import SkipSignal, new_skip_signal
from querytpl.engines.sql.template_engine import Database, compile_query

__all__ = [
    "Database",
    "Dialect",
    "compile_query",
    "new_skip_signal",
    "SkipSignal",
    "parse_placeholders",
    "check_template_safety",
    "QueryTemplateError",
    "InsufficientArgumentsError",
    "TypeMismatchError",
    "UnknownPlaceholderError",
]
