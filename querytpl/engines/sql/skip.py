"""
Skip signal: a sentinel argument that drops conditional ``{ ... }`` blocks.

A ``SkipSignal`` carries no payload. Two instances never compare equal; an
instance is only equal to itself. The conditional evaluator looks for
instances that are actually present in the caller's argument list, so a
signal cannot collide with real data such as ``False`` or ``"skip"``.
"""

from typing import Any


class SkipSignal:
    """Marker for "omit the conditional blocks of this query"."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"<SkipSignal at {id(self):#x}>"


def new_skip_signal() -> SkipSignal:
    """Return a fresh skip signal, unequal to every other instance."""
    return SkipSignal()


def is_skip_signal(value: Any) -> bool:
    return isinstance(value, SkipSignal)


def contains_skip_signal(args: Any) -> bool:
    """True if any caller-supplied argument is a skip signal."""
    return any(isinstance(arg, SkipSignal) for arg in args)
