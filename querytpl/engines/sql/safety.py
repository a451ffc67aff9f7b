"""
Static analysis for query templates: detect constructs that compile but are
probably not what the author meant.

* unmatched ``{`` or ``}``: left in the output as literal characters
* nested braces: only the innermost pair is treated as a conditional block
* a placeholder inside a quoted literal (``'?'``): still substituted, which
  yields doubly quoted or broken SQL

Usage::

    warnings = check_template_safety("SELECT '?' FROM t{ WHERE {x}}")
    # [{"kind": "placeholder_in_literal", "position": 8, "message": "..."}, ...]
"""

import re
from typing import Any

from querytpl.engines.sql.template_engine import PLACEHOLDER_PATTERN

_QUOTED_PATTERN = re.compile(r"'(?:[^'\\]|\\.|'')*'|\"(?:[^\"\\]|\\.|\"\")*\"", re.DOTALL)


def _brace_warnings(template: str) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []
    stack: list[int] = []
    for pos, ch in enumerate(template):
        if ch == "{":
            if stack:
                warnings.append(
                    {
                        "kind": "nested_block",
                        "position": pos,
                        "message": (
                            f"'{{' at offset {pos} opens a block inside the block at "
                            f"offset {stack[-1]}; blocks do not nest, only the "
                            f"innermost pair is conditional."
                        ),
                    }
                )
            stack.append(pos)
        elif ch == "}":
            if not stack:
                warnings.append(
                    {
                        "kind": "unmatched_brace",
                        "position": pos,
                        "message": f"'}}' at offset {pos} has no matching '{{'.",
                    }
                )
            else:
                stack.pop()
    for pos in stack:
        warnings.append(
            {
                "kind": "unmatched_brace",
                "position": pos,
                "message": f"'{{' at offset {pos} is never closed.",
            }
        )
    return warnings


def _literal_warnings(template: str) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []
    for literal in _QUOTED_PATTERN.finditer(template):
        for token in PLACEHOLDER_PATTERN.finditer(literal.group(0)):
            pos = literal.start() + token.start()
            warnings.append(
                {
                    "kind": "placeholder_in_literal",
                    "position": pos,
                    "message": (
                        f"'{token.group(0)}' at offset {pos} is inside a quoted "
                        f"literal but will still bind an argument."
                    ),
                }
            )
    return warnings


def check_template_safety(template: str) -> list[dict[str, Any]]:
    """Analyse *template* and return warnings sorted by position.

    Each warning is a dict with ``kind``, ``position`` and ``message`` keys.
    An empty list means no issues detected.
    """
    warnings = _brace_warnings(template) + _literal_warnings(template)
    return sorted(warnings, key=lambda w: w["position"])
