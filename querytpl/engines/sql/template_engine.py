"""
Query template compiler.

Compiles a SQL template with typed placeholders and optional ``{ ... }``
blocks into final SQL, in two fixed passes:

1. ``scan_and_format``: each placeholder token (``?d ?f ?a ?# ?``), scanned
   left to right, binds the next argument and is replaced by its formatted
   literal.
2. ``evaluate_conditionals``: blocks are dropped when the *original* argument
   list contains a skip signal, otherwise their braces are stripped.

Arguments are bound through an index cursor over a tuple copy, so the
caller's list is never consumed or mutated.

Usage::

    db = Database()
    db.build_query("SELECT * FROM t WHERE id = ?d{ AND flag = ?}", [7, db.skip()])
    # "SELECT * FROM t WHERE id = 7"
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from querytpl.engines.sql.conditionals import block_spans, evaluate_conditionals
from querytpl.engines.sql.dialect import Dialect, dialect_for
from querytpl.engines.sql.errors import (
    InsufficientArgumentsError,
    TypeMismatchError,
    UnknownPlaceholderError,
)
from querytpl.engines.sql.filters import SQL_FORMATTERS
from querytpl.engines.sql.skip import SkipSignal, is_skip_signal, new_skip_signal

logger = logging.getLogger(__name__)

# Specific tokens first: "?d" must win over the bare "?" fallback.
PLACEHOLDER_PATTERN = re.compile(r"\?d|\?f|\?a|\?#|\?")

_DEFAULT_DIALECT: Dialect | None = None


def _get_default_dialect() -> Dialect:
    """Return the shared Dialect built from settings (pymysql escaping)."""
    global _DEFAULT_DIALECT
    if _DEFAULT_DIALECT is None:
        _DEFAULT_DIALECT = dialect_for()
    return _DEFAULT_DIALECT


def _inside_block(pos: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < pos < end for start, end in spans)


def _format_value(token: str, value: Any, dialect: Dialect, in_block: bool) -> str:
    if is_skip_signal(value):
        # The enclosing block is removed in the second pass.
        if in_block:
            return ""
        raise TypeMismatchError(
            token, "skip signal bound to a placeholder outside a conditional block"
        )
    formatter = SQL_FORMATTERS.get(token)
    if formatter is None:
        raise UnknownPlaceholderError(token)
    return formatter(value, dialect)


def scan_and_format(
    template: str, args: Sequence[Any], dialect: Dialect | None = None
) -> str:
    """Replace every placeholder in *template* with its formatted argument."""
    dialect = dialect or _get_default_dialect()
    bound = tuple(args)
    spans = block_spans(template)
    cursor = 0

    def _replace(m: re.Match) -> str:
        nonlocal cursor
        token = m.group(0)
        if cursor >= len(bound):
            raise InsufficientArgumentsError(token, m.start(), len(bound))
        value = bound[cursor]
        cursor += 1
        return _format_value(token, value, dialect, _inside_block(m.start(), spans))

    out = PLACEHOLDER_PATTERN.sub(_replace, template)
    if cursor < len(bound):
        logger.debug("Ignored %d trailing argument(s)", len(bound) - cursor)
    return out


def compile_query(
    template: str, args: Sequence[Any] = (), *, dialect: Dialect | None = None
) -> str:
    """Compile *template* with *args* into final SQL. Raises QueryTemplateError."""
    args = tuple(args)
    substituted = scan_and_format(template, args, dialect)
    return evaluate_conditionals(substituted, args)


class Database:
    """
    Query builder bound to a database client.

    *connection* only needs an ``escape_string(str) -> str`` method (a pymysql
    ``Connection`` qualifies); it is never used to run SQL. Without one,
    pymysql's ``escape_string`` is used. *escape* overrides both.
    """

    def __init__(
        self,
        connection: Any = None,
        *,
        escape: Callable[[str], str] | None = None,
        dialect: Dialect | None = None,
    ) -> None:
        self.connection = connection
        if dialect is not None:
            self.dialect = dialect
        elif connection is None and escape is None:
            self.dialect = _get_default_dialect()
        else:
            self.dialect = dialect_for(connection, escape)

    def build_query(self, query: str, args: Sequence[Any] = ()) -> str:
        """Compile *query* with *args*; see ``compile_query``."""
        sql = compile_query(query, args, dialect=self.dialect)
        logger.debug("Built query from template of %d chars", len(query))
        return sql

    def skip(self) -> SkipSignal:
        """Return a new skip signal to pass as an argument."""
        return new_skip_signal()
