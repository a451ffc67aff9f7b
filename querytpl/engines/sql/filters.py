"""
Value formatters for query template placeholders.

Each formatter turns one bound argument into SQL literal text for the target
dialect. ``None`` always renders as ``NULL`` (except for identifiers, which
cannot be NULL). Unsupported value shapes raise ``TypeMismatchError`` instead
of being coerced into something surprising.

Token -> formatter:

* ``?d`` -> ``format_int``
* ``?f`` -> ``format_float``
* ``?a`` -> ``format_array``
* ``?#`` -> ``format_identifier``
* ``?``  -> ``format_universal``
"""

import math
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from querytpl.engines.sql.dialect import Dialect
from querytpl.engines.sql.errors import TypeMismatchError
from querytpl.engines.sql.skip import SkipSignal

# Leading numeric prefix of a string: "12abc" -> "12", " -1.5e3x" -> " -1.5e3"
_NUMERIC_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_SEQUENCE_TYPES = (list, tuple)


def _shape(value: Any) -> str:
    return type(value).__name__


def _numeric_prefix(s: str) -> int | float:
    """Parse the leading numeric part of *s*; no numeric prefix -> 0."""
    m = _NUMERIC_PREFIX.match(s)
    if not m:
        return 0
    text = m.group(0).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _to_number(value: Any, token: str) -> int | float | Decimal:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        return _numeric_prefix(value)
    raise TypeMismatchError(token, f"expected a number, got {_shape(value)}")


def _check_finite(value: int | float | Decimal, token: str) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise TypeMismatchError(token, f"non-finite number {value!r}")
    if isinstance(value, Decimal) and not value.is_finite():
        raise TypeMismatchError(token, f"non-finite number {value!r}")


def _int_literal(value: int, token: str) -> str:
    try:
        return str(value)
    except ValueError as e:
        raise TypeMismatchError(token, "integer too large") from e


def _quote_string(value: str, dialect: Dialect) -> str:
    return "'" + dialect.escape(value) + "'"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_int(value: Any, dialect: Dialect) -> str:
    """
    ``?d``: integer literal. None -> NULL; fractions are truncated toward zero;
    strings use their leading numeric prefix ("12abc" -> 12, "abc" -> 0).
    """
    if value is None:
        return "NULL"
    n = _to_number(value, "?d")
    _check_finite(n, "?d")
    return _int_literal(int(n), "?d")


def format_float(value: Any, dialect: Dialect) -> str:
    """
    ``?f``: float literal in Python's default ``str(float)`` form. None -> NULL.
    """
    if value is None:
        return "NULL"
    n = _to_number(value, "?f")
    try:
        f = float(n)
    except OverflowError as e:
        raise TypeMismatchError("?f", f"number too large for a float: {_shape(n)}") from e
    _check_finite(f, "?f")
    return str(f)


def format_universal(value: Any, dialect: Dialect) -> str:
    """
    ``?``: infer the literal from the value.

    * ``None`` -> ``NULL``
    * ``bool`` -> ``1`` / ``0``
    * ``int`` / ``float`` / ``Decimal`` -> bare number
    * ``datetime`` / ``date`` -> quoted ISO string
    * sequences, mappings, skip signals -> ``TypeMismatchError``
    * everything else -> ``str()``, escaped and single-quoted
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return _int_literal(value, "?")
    if isinstance(value, (float, Decimal)):
        _check_finite(value, "?")
        return str(value)
    if isinstance(value, (datetime, date)):
        return _quote_string(value.isoformat(), dialect)
    if isinstance(value, (bytes, bytearray)):
        try:
            return _quote_string(bytes(value).decode("utf-8"), dialect)
        except UnicodeDecodeError as e:
            raise TypeMismatchError("?", "bytes value is not valid UTF-8") from e
    if isinstance(value, (*_SEQUENCE_TYPES, Mapping, set, frozenset)):
        raise TypeMismatchError("?", f"cannot render {_shape(value)} as a scalar literal")
    if isinstance(value, SkipSignal):
        raise TypeMismatchError("?", "skip signal cannot be rendered as a value")
    return _quote_string(str(value), dialect)


def format_identifier(value: Any, dialect: Dialect) -> str:
    """
    ``?#``: a name or a list of names, each escaped and quoted with the
    dialect's identifier quote: ``users`` -> `` `users` ``.
    """
    if isinstance(value, str):
        return dialect.quote_identifier(value)
    if isinstance(value, _SEQUENCE_TYPES):
        parts = []
        for name in value:
            if not isinstance(name, str):
                raise TypeMismatchError(
                    "?#", f"identifier list items must be strings, got {_shape(name)}"
                )
            parts.append(dialect.quote_identifier(name))
        return ", ".join(parts)
    raise TypeMismatchError(
        "?#", f"expected a string or list of strings, got {_shape(value)}"
    )


def format_array(value: Any, dialect: Dialect) -> str:
    """
    ``?a``: comma-joined list of universal literals, without parentheses.

    A mapping renders as ``\\`key\\` = value`` pairs for ``UPDATE ... SET ?a``.
    """
    if isinstance(value, Mapping):
        pairs = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeMismatchError(
                    "?a", f"mapping keys must be strings, got {_shape(key)}"
                )
            pairs.append(
                f"{dialect.quote_identifier(key)} = {_format_element(item, dialect)}"
            )
        return ", ".join(pairs)
    if isinstance(value, _SEQUENCE_TYPES):
        return ", ".join(_format_element(item, dialect) for item in value)
    raise TypeMismatchError("?a", f"expected a list, got {_shape(value)}")


def _format_element(value: Any, dialect: Dialect) -> str:
    try:
        return format_universal(value, dialect)
    except TypeMismatchError as e:
        raise TypeMismatchError("?a", f"invalid element: {e}") from e


# Token -> formatter, used by the placeholder scanner
SQL_FORMATTERS: dict[str, Callable[[Any, Dialect], str]] = {
    "?d": format_int,
    "?f": format_float,
    "?a": format_array,
    "?#": format_identifier,
    "?": format_universal,
}
