# File: src/mstair/structwalk/walk/getter_resolver.py
"""
Dotted-path resolution through accessor methods instead of fields.

Each segment names a getter (see `getters`) on the current value; the getter
is invoked and its result becomes the value for the next segment.

Byte shadowing: when the final value is a `str` and the object that produced
it also has a ``<name>_bytes`` (or ``<name>bytes``) getter, that getter's
result is returned instead. Objects backed by binary buffers can then hand
out their bytes without an encode round-trip.
"""

from __future__ import annotations

from typing import Any

from mstair.structwalk.base.types import MISSING
from mstair.structwalk.walk.getters import call_getter, class_members, has_methods, is_getter
from mstair.structwalk.walk.node_kind import NodeKind, match_name, node_kind, struct_fields, unwrap
from mstair.structwalk.walk.path_resolver import split_path
from mstair.structwalk.xlogging.logger_factory import create_logger


__all__ = [
    "getter_value",
]

LOG = create_logger(__name__)

_SHADOW_SUFFIXES = ("_bytes", "bytes")


def getter_value(path: str, root: Any) -> tuple[Any, bool]:
    """
    Return the value reached by calling the getters named in `path`.

    Segment rules:
    - a name that does not exist on the current value: not found;
    - a name that exists but is not a getter (takes arguments, returns
      ``None``, plain data field): skipped, the current value is reused;
    - a getter: invoked, its result becomes the current value. If segments
      remain and the result's type defines no methods at all: not found.

    Any exception raised by a getter makes the path not found.

    >>> class Doc:
    ...     def title(self) -> str:
    ...         return "abc"
    ...     def title_bytes(self) -> bytes:
    ...         return b"abc"
    >>> getter_value("Title", Doc())
    (b'abc', True)

    :param path: Dot-separated, case-insensitive getter names.
    :param root: The object whose getters are walked.
    :return: ``(value, True)`` when found, ``(None, False)`` otherwise.
    """
    segments = split_path(path)
    if not segments:
        LOG.trace("Invalid getter path %r", path)
        return None, False

    current: Any = root
    parent: Any = MISSING
    last_name = ""
    last = len(segments) - 1
    for i, segment in enumerate(segments):
        try:
            current = unwrap(current)
            if node_kind(current) is NodeKind.NONE:
                return _not_found(path, segment, "empty indirection")

            members = class_members(current)
            name = match_name(members, segment)
            if name is MISSING:
                if match_name(_field_names(current), segment) is MISSING:
                    return _not_found(path, segment, f"no member of {type(current).__name__}")
                LOG.trace("Skipping field %r of %r: not a getter", segment, path)
                continue
            if not is_getter(members[name]):
                LOG.trace("Skipping member %r of %r: not a getter", segment, path)
                continue

            parent, current, last_name = current, call_getter(current, name), name
            if i != last and not has_methods(unwrap(current)):
                return _not_found(path, segment, f"{type(current).__name__} has no methods")
        except Exception as e:
            return _not_found(path, segment, f"{type(e).__name__}: {e}")

    if isinstance(current, str) and parent is not MISSING:
        shadowed, found = _shadow_value(parent, last_name)
        if found:
            return shadowed, True
    return current, True


def _field_names(value: Any) -> list[str]:
    if node_kind(value) is NodeKind.STRUCT:
        return struct_fields(value)
    return []


def _shadow_value(parent: Any, name: str) -> tuple[Any, bool]:
    """Invoke the ``<name>_bytes`` companion getter of `parent`, if it has one."""
    members = class_members(parent)
    for suffix in _SHADOW_SUFFIXES:
        shadow_name = match_name(members, f"{name}{suffix}")
        if shadow_name is MISSING or not is_getter(members[shadow_name]):
            continue
        try:
            return call_getter(parent, shadow_name), True
        except Exception as e:
            LOG.debug(
                "Shadow getter %r failed, keeping text: %s: %s", shadow_name, type(e).__name__, e
            )
            return None, False
    return None, False


def _not_found(path: str, segment: str, reason: str) -> tuple[Any, bool]:
    LOG.trace("Getter path %r not found at segment %r (%s)", path, segment, reason)
    return None, False


# End of file: src/mstair/structwalk/walk/getter_resolver.py
