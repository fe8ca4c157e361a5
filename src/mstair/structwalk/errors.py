# File: src/mstair/structwalk/errors.py
"""
Exceptions raised by the strict accessors.

The core walkers are total and never raise; these are only used where a
caller explicitly asks for an error instead of a found flag.
"""

__all__ = [
    "PathNotFoundError",
    "StructWalkError",
]


class StructWalkError(Exception):
    """Base class for structwalk errors."""


class PathNotFoundError(StructWalkError, KeyError):
    """Raised when a dotted path does not resolve in an object graph."""

    path: str
    """The path that failed to resolve."""

    def __init__(self, path: str, root_type: type | None = None) -> None:
        self.path = path
        self.root_type = root_type
        where = f" in {root_type.__name__}" if root_type is not None else ""
        super().__init__(f"Path {path!r} not found{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


# End of file: src/mstair/structwalk/errors.py
