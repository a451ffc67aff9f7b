"""
Errors raised while compiling a query template.

Every failure aborts the whole compile call; no partial SQL is returned.
All errors derive from ``QueryTemplateError`` (a ``ValueError``) so callers
can catch one type and the HTTP layer can map it to a 400 response.
"""

from __future__ import annotations


class QueryTemplateError(ValueError):
    """Base class for template compile failures."""

    kind = "query_template_error"


class InsufficientArgumentsError(QueryTemplateError):
    """Raised at the first placeholder that has no argument left to bind."""

    kind = "insufficient_arguments"

    def __init__(self, token: str, position: int, supplied: int) -> None:
        self.token = token
        self.position = position
        self.supplied = supplied
        super().__init__(
            f"Insufficient arguments for query placeholders: {token!r} at "
            f"offset {position} has no value ({supplied} argument(s) supplied)"
        )


class TypeMismatchError(QueryTemplateError):
    """Raised when a value's shape does not fit its placeholder token."""

    kind = "type_mismatch"

    def __init__(self, token: str, message: str) -> None:
        self.token = token
        super().__init__(f"{token}: {message}")


class UnknownPlaceholderError(QueryTemplateError):
    """Raised when the scanner yields a token with no formatter."""

    kind = "unknown_placeholder"

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown placeholder type: {token!r}")
