# File: src/mstair/structwalk/walk/field_access.py
"""
Read and write values at dotted paths in nested records and mappings.
"""

from __future__ import annotations

from typing import Any

from mstair.structwalk.errors import PathNotFoundError
from mstair.structwalk.walk.path_resolver import resolve
from mstair.structwalk.xlogging.logger_factory import create_logger


__all__ = [
    "field_value",
    "require_field_value",
    "set_field_value",
]

LOG = create_logger(__name__)


def field_value(path: str, root: Any) -> tuple[Any, bool]:
    """
    Return the value at `path` in deeply nested records and mappings.

    >>> field_value("Bar.Baz", {"bar": {"baz": 5}})
    (5, True)
    >>> field_value("bar.baz.qux", {"bar": {"baz": 5}})
    (None, False)

    :param path: Dot-separated, case-insensitive path.
    :param root: The object graph to read.
    :return: ``(value, True)`` when found, ``(None, False)`` otherwise.
    """
    resolution = resolve(path, root)
    if not resolution:
        return None, False
    return resolution.value, True


def set_field_value(path: str, value: Any, root: Any) -> bool:
    """
    Overwrite the value at `path` in deeply nested records and mappings.

    An unresolved path or an unwritable location (frozen dataclass, named
    tuple, read-only mapping, the bare root) leaves the graph untouched.
    Reach a scalar root through a `Ref` to make it writable.

    :param path: Dot-separated, case-insensitive path.
    :param value: Stored as-is, without coercion.
    :param root: The object graph to modify in place.
    :return: True if the value was written.
    """
    resolution = resolve(path, root)
    if not resolution:
        LOG.debug("Skipped write: path %r not found", path)
        return False
    return resolution.write(value)


def require_field_value(path: str, root: Any) -> Any:
    """
    Return the value at `path`, raising if it does not resolve.

    :raises PathNotFoundError: If `path` does not resolve in `root`.
    """
    resolution = resolve(path, root)
    if not resolution:
        raise PathNotFoundError(path, type(root))
    return resolution.value


# End of file: src/mstair/structwalk/walk/field_access.py
