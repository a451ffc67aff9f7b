"""
Parse placeholder tokens from a query template.

Uses the same pattern as the compiler, so the result is exactly the list of
tokens that will bind arguments, in binding order.
"""

from querytpl.engines.sql.template_engine import PLACEHOLDER_PATTERN


def parse_placeholders(template: str) -> list[str]:
    """
    Return the placeholder tokens of *template* in scan order,
    e.g. ``["?#", "?a", "?d"]``.

    ``len(parse_placeholders(t))`` is the minimum number of arguments for *t*.
    """
    return PLACEHOLDER_PATTERN.findall(template)
