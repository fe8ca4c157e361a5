# File: src/mstair/structwalk/base/context_managers.py
"""
Cycle detection for recursive walks over object graphs.
"""

import contextlib
from collections.abc import Iterator
from typing import Any, NamedTuple


__all__ = [
    "CycleGuard",
    "CycleGuardSeenItem",
]


class CycleGuardSeenItem(NamedTuple):
    """
    Represents an object identity and type for use in cycle detection.

    :param obj_id: The id() of the object.
    :param obj_type: The type of the object.
    """

    obj_id: int
    obj_type: type


class CycleGuard:
    """
    Maintains a stack of the objects on the current recursion path.

    One instance is created per walk so concurrent walks never share state.
    The stack (not a set) lets sibling branches visit the same object
    independently; only an object that is its own ancestor is reported.

    Example:
        >>> data = {}
        >>> data["self"] = data
        >>> guard = CycleGuard()
        >>> with guard.prevent_cycles(data) as outer:
        ...     with guard.prevent_cycles(data["self"]) as inner:
        ...         (outer, inner)
        (False, True)
    """

    def __init__(self) -> None:
        self.seen: list[CycleGuardSeenItem] = []

    @contextlib.contextmanager
    def prevent_cycles(self, obj: Any) -> Iterator[bool]:
        """
        Track `obj` for the duration of the context.

        Uses (id(obj), type(obj)) pairs to avoid false positives from
        accidental id reuse.

        :param obj: The object to guard against cycles.
        :yield: True if `obj` is already on the stack, otherwise False.
        """
        item = CycleGuardSeenItem(id(obj), type(obj))
        is_cycle = item in self.seen
        self.seen.append(item)
        try:
            yield is_cycle
        finally:
            self.seen.pop()


# End of file: src/mstair/structwalk/base/context_managers.py
