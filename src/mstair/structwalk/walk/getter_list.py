# File: src/mstair/structwalk/walk/getter_list.py
"""
Enumerate the dotted paths of the getters reachable from an object.
"""

from __future__ import annotations

from typing import Any

from mstair.structwalk.walk.getters import call_getter, getter_members
from mstair.structwalk.walk.node_kind import NodeKind, node_kind, unwrap
from mstair.structwalk.xlogging.logger_factory import create_logger


__all__ = [
    "getter_list",
]

LOG = create_logger(__name__)


def getter_list(root: Any, *, max_depth: int = 1) -> list[str]:
    """
    Return the sorted dotted paths of every getter reachable from `root`.

    Every getter is invoked. When its result is a record, the record's own
    getters are listed under ``<getter>.<child>`` instead, up to `max_depth`
    levels of nesting; any other result makes the getter a leaf. A getter
    and its ``_bytes`` companion are both listed. Getters that raise are
    left out.

    :param root: The object whose getters are listed.
    :param max_depth: How many levels of record-returning getters to expand.
    :return: Sorted getter paths.
    :raises ValueError: If `max_depth` is negative.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0 (got {max_depth})")
    flat_list: list[str] = []
    _traverse_getters("", flat_list, unwrap(root), max_depth)
    flat_list.sort()
    return flat_list


def _traverse_getters(prefix: str, flat_list: list[str], value: Any, depth: int) -> None:
    try:
        getters = getter_members(value)
    except Exception as e:
        LOG.debug("Cannot list getters of %s: %s: %s", type(value).__name__, type(e).__name__, e)
        return

    for name in getters:
        path = f"{prefix}.{name}" if prefix else name
        try:
            result = call_getter(value, name)
        except Exception as e:
            LOG.debug("Getter %r raised, not listed: %s: %s", path, type(e).__name__, e)
            continue
        if depth > 0 and node_kind(result) is NodeKind.STRUCT:
            _traverse_getters(path, flat_list, result, depth - 1)
            continue
        flat_list.append(path)


# End of file: src/mstair/structwalk/walk/getter_list.py
