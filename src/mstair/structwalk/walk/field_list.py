# File: src/mstair/structwalk/walk/field_list.py
"""
Enumerate the dotted paths of every leaf in a record/mapping object graph.

A leaf is any value that is neither a record nor a mapping once
indirections are looked through. Records are visited in field declaration
order; mappings in their own iteration order (insertion order for `dict`).
Use `field_list()` whenever the output must be deterministic across mapping
types; `field_list_no_sort()` keeps traversal order.

Dataclass fields holding ``None`` are expanded through their annotations, so
an unset ``bar: Inner | None = None`` still lists ``bar.<field>`` for every
field of ``Inner``. A ``None`` field annotated as a mapping lists nothing.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from typing import Any

from mstair.structwalk.base.context_managers import CycleGuard
from mstair.structwalk.walk.node_kind import NodeKind, node_kind, struct_fields, unwrap
from mstair.structwalk.xlogging.logger_factory import create_logger


__all__ = [
    "field_list",
    "field_list_no_sort",
]

LOG = create_logger(__name__)

_MAPPING_HINT = object()


def field_list_no_sort(root: Any) -> list[str]:
    """
    Return the dotted path of every leaf reachable from `root`, in traversal order.

    Non-record, non-mapping roots have no leaves. A value that is its own
    ancestor is listed as a leaf instead of being walked again. A subtree
    that raises while being read is left out; the rest is still listed.
    """
    flat_list: list[str] = []
    try:
        _traverse_value("", flat_list, unwrap(root), CycleGuard(), set())
    except Exception as e:
        LOG.debug(
            "Field listing of %s stopped early: %s: %s", type(root).__name__, type(e).__name__, e
        )
    return flat_list


def field_list(root: Any) -> list[str]:
    """Return the dotted path of every leaf reachable from `root`, sorted."""
    return sorted(field_list_no_sort(root))


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _traverse_value(
    prefix: str, flat_list: list[str], value: Any, guard: CycleGuard, types_seen: set[type]
) -> None:
    """
    Walk the children of a record or mapping `value`; other values are ignored.

    A record or mapping whose children cannot be read lists nothing; its
    siblings are still walked.
    """
    kind = node_kind(value)
    try:
        if kind is NodeKind.STRUCT:
            hints = _type_hints(type(value)) if dataclasses.is_dataclass(value) else {}
            children = [
                (name, getattr(value, name, None), hints.get(name))
                for name in struct_fields(value)
            ]
        elif kind is NodeKind.MAPPING:
            children = [(str(key), child, None) for key, child in value.items()]
        else:
            return
    except Exception as e:
        LOG.debug(
            "Skipping unreadable %s at %r: %s: %s",
            type(value).__name__,
            prefix,
            type(e).__name__,
            e,
        )
        return

    with guard.prevent_cycles(value) as is_cycle:
        if is_cycle:
            flat_list.append(prefix)
            return
        for name, child, hint in children:
            path = _join(prefix, name)
            child = unwrap(child)
            child_kind = node_kind(child)
            if child_kind in (NodeKind.STRUCT, NodeKind.MAPPING):
                _traverse_value(path, flat_list, child, guard, types_seen)
                continue
            if child_kind is NodeKind.NONE and hint is not None:
                declared = _declared_container(hint)
                if declared is _MAPPING_HINT:
                    continue
                if declared is not None:
                    _traverse_declared(path, flat_list, declared, types_seen)
                    continue
            flat_list.append(path)


def _traverse_declared(
    prefix: str, flat_list: list[str], cls: type, types_seen: set[type]
) -> None:
    """List the leaves of a dataclass type from its annotations alone."""
    if cls in types_seen:
        flat_list.append(prefix)
        return
    types_seen.add(cls)
    try:
        hints = _type_hints(cls)
        for field in dataclasses.fields(cls):
            path = _join(prefix, field.name)
            declared = _declared_container(hints.get(field.name))
            if declared is _MAPPING_HINT:
                continue
            if declared is not None:
                _traverse_declared(path, flat_list, declared, types_seen)
                continue
            flat_list.append(path)
    finally:
        types_seen.discard(cls)


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception as e:
        LOG.trace("Unresolvable annotations on %s: %s", cls.__name__, e)
        return {}


def _declared_container(hint: Any) -> Any:
    """
    Return the dataclass type a hint declares, `_MAPPING_HINT` for mappings, else None.

    Optionals (``X | None``) are looked through; other unions are leaves.
    """
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _declared_container(args[0]) if len(args) == 1 else None
    if origin is not None:
        return _MAPPING_HINT if isinstance(origin, type) and issubclass(origin, Mapping) else None
    if isinstance(hint, type):
        if issubclass(hint, Mapping):
            return _MAPPING_HINT
        if dataclasses.is_dataclass(hint):
            return hint
    return None


# End of file: src/mstair/structwalk/walk/field_list.py
