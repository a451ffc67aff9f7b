"""
Pydantic schemas for the query compile API.

Skip signals cannot travel through JSON as themselves; an argument written as
``{"$skip": true}`` is replaced by a fresh ``SkipSignal`` before compiling.
"""

from typing import Any

from pydantic import BaseModel, Field

from querytpl.engines.sql import new_skip_signal

SKIP_MARKER_KEY = "$skip"


def _is_skip_marker(value: Any) -> bool:
    return isinstance(value, dict) and value.get(SKIP_MARKER_KEY) is True and len(value) == 1


class CompileIn(BaseModel):
    """Body for POST /queries/compile."""

    template: str = Field(..., min_length=1, max_length=65536)
    args: list[Any] = Field(
        default_factory=list,
        description='Positional arguments; {"$skip": true} drops conditional blocks.',
    )

    def resolved_args(self) -> list[Any]:
        """Args with top-level skip markers replaced by SkipSignal instances."""
        return [new_skip_signal() if _is_skip_marker(a) else a for a in self.args]


class CompileOut(BaseModel):
    """Compiled SQL."""

    sql: str


class InspectIn(BaseModel):
    """Body for POST /queries/inspect."""

    template: str = Field(..., min_length=1, max_length=65536)


class TemplateWarning(BaseModel):
    kind: str
    position: int
    message: str


class InspectOut(BaseModel):
    """Placeholders in binding order and static-analysis warnings."""

    placeholders: list[str]
    warnings: list[TemplateWarning]
