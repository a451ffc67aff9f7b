"""
Target SQL dialect: the string-escaping primitive and the identifier quote.

The escape function is an external collaborator. By default it is pymysql's
pure ``escape_string``; a live pymysql connection provides a charset-aware
one through ``Connection.escape_string``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pymysql.converters import escape_string

from querytpl.core.config import settings


@dataclass(frozen=True)
class Dialect:
    """Immutable formatting configuration shared by all compile calls."""

    escape: Callable[[str], str] = escape_string
    identifier_quote: str = "`"

    def __post_init__(self) -> None:
        if len(self.identifier_quote) != 1:
            raise ValueError("identifier_quote must be a single character")

    def quote_identifier(self, name: str) -> str:
        q = self.identifier_quote
        return q + self.escape(name).replace(q, q + q) + q


def dialect_for(connection: Any = None, escape: Callable[[str], str] | None = None) -> Dialect:
    """
    Build a Dialect. Escape priority: explicit *escape* > ``connection.escape_string``
    > pymysql ``escape_string``.
    """
    if escape is None and connection is not None:
        escape = getattr(connection, "escape_string", None)
        if escape is None:
            raise ValueError("connection does not provide escape_string()")
    return Dialect(
        escape=escape or escape_string,
        identifier_quote=settings.SQL_IDENTIFIER_QUOTE,
    )
