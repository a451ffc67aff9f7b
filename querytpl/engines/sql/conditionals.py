"""
Conditional blocks: ``{ ... }`` fragments kept or dropped as a whole.

Runs after placeholder substitution. Braces do not nest; a ``{`` or ``}`` that
is not part of an innermost pair is left in the output untouched.

If the argument list contains a skip signal, every block in the template is
removed (braces included). Otherwise each block is replaced by its inner text.
"""

import re
from collections.abc import Sequence
from typing import Any

from querytpl.engines.sql.skip import contains_skip_signal

BLOCK_PATTERN = re.compile(r"\{([^{}]*)\}")


def block_spans(template: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets of every conditional block, braces included."""
    return [m.span() for m in BLOCK_PATTERN.finditer(template)]


def evaluate_conditionals(query: str, args: Sequence[Any]) -> str:
    """Keep (braces stripped) or drop every block of *query* based on *args*."""
    if contains_skip_signal(args):
        return BLOCK_PATTERN.sub("", query)
    return BLOCK_PATTERN.sub(lambda m: m.group(1), query)
